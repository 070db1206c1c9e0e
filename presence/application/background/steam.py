"""Steam player summary and app catalog refreshers."""

import logfire

from presence.adapter.steam import MAX_IDS_PER_REQUEST, PlayerSummary, SteamClient
from presence.application.background.base import PollingJob
from presence.domain.model import GameSessionSnapshot
from presence.domain.model.game_session import (
    UNKNOWN_GAME_NAME,
    Game,
    store_info_url,
)
from presence.domain.repository import SourceCache, UserRepository


class SteamRefresher(PollingJob):
    """Polls player summaries for every tracked Steam id.

    Ids are requested in batches; the cache is only written once every
    batch has come back, so a failing batch leaves the whole cache as it
    was. Players missing from a response are left untouched.
    """

    name = "steam"

    def __init__(
        self,
        client: SteamClient,
        cache: SourceCache[int, GameSessionSnapshot],
        catalog: SourceCache[int, str],
        user_repository: UserRepository,
        interval: float,
    ) -> None:
        super().__init__(interval=interval, run_on_start=True)
        self.client = client
        self.cache = cache
        self.catalog = catalog
        self.steam_ids: list[int] = list(
            dict.fromkeys(
                user.steam_id
                for user in user_repository.find_all()
                if user.steam_id is not None
            )
        )

    def batches(self) -> list[list[int]]:
        """Tracked ids split into request-sized batches."""
        return [
            self.steam_ids[start : start + MAX_IDS_PER_REQUEST]
            for start in range(0, len(self.steam_ids), MAX_IDS_PER_REQUEST)
        ]

    async def refresh(self) -> None:
        """Fetch summaries for all tracked players."""
        players: list[PlayerSummary] = []
        for batch in self.batches():
            players.extend(await self.client.get_player_summaries(batch))

        self.cache.put_many(
            (player.steam_id, self.to_snapshot(player)) for player in players
        )
        logfire.debug(
            "Steam refreshed", requested=len(self.steam_ids), received=len(players)
        )

    def to_snapshot(self, player: PlayerSummary) -> GameSessionSnapshot:
        """Build a snapshot, naming the game from the catalog when possible."""
        game = None
        if player.game_id is not None:
            game = Game(
                app_id=player.game_id,
                name=self.catalog.get(player.game_id)
                or player.game_name
                or UNKNOWN_GAME_NAME,
                info_url=store_info_url(player.game_id),
            )

        return GameSessionSnapshot(
            steam_id=str(player.steam_id),
            persona_name=player.persona_name,
            game=game,
        )


class SteamCatalogRefresher(PollingJob):
    """Keeps the app id to name catalog current.

    The catalog is swapped wholesale, and only for a non-empty list. The
    first fetch waits one interval; until then game names come from the
    player summaries.
    """

    name = "steam_catalog"

    def __init__(
        self,
        client: SteamClient,
        catalog: SourceCache[int, str],
        interval: float,
    ) -> None:
        super().__init__(interval=interval, run_on_start=False)
        self.client = client
        self.catalog = catalog

    async def refresh(self) -> None:
        """Fetch and swap in the app catalog."""
        apps = await self.client.get_app_list()
        if not apps:
            logfire.warn("Steam returned an empty app list, keeping catalog")
            return
        self.catalog.replace_all(apps)
        logfire.info("Steam app catalog refreshed", apps=len(apps))
