"""last.fm now-playing refresher."""

import asyncio

import logfire

from presence.adapter.error import ProviderError
from presence.adapter.last_fm import LastFmClient
from presence.application.background.base import PollingJob
from presence.domain.model import ScrobbleSnapshot
from presence.domain.repository import SourceCache, UserRepository


class LastFmRefresher(PollingJob):
    """Polls every tracked last.fm user concurrently.

    Every tracked username is seeded with an empty snapshot so that a user
    shows up with nothing playing until the first successful fetch. Each
    username succeeds or fails on its own; a failure leaves that user's
    snapshot untouched. A success replaces it, clearing the track when
    nothing is playing.
    """

    name = "last_fm"

    def __init__(
        self,
        client: LastFmClient,
        cache: SourceCache[str, ScrobbleSnapshot],
        user_repository: UserRepository,
        interval: float,
    ) -> None:
        super().__init__(interval=interval, run_on_start=True)
        self.client = client
        self.cache = cache
        # dict.fromkeys keeps configuration order while dropping duplicates
        self.usernames: list[str] = list(
            dict.fromkeys(
                user.last_fm_username
                for user in user_repository.find_all()
                if user.last_fm_username
            )
        )
        self.cache.put_many(
            (username, ScrobbleSnapshot(username=username))
            for username in self.usernames
            if self.cache.get(username) is None
        )

    async def refresh(self) -> None:
        """Refresh every tracked username."""
        results = await asyncio.gather(
            *(self._refresh_user(username) for username in self.usernames)
        )
        failed = results.count(False)
        if self.usernames and failed == len(self.usernames):
            raise ProviderError("last.fm", "every user failed to refresh")
        logfire.debug(
            "last.fm refreshed", users=len(self.usernames), failed=failed
        )

    async def _refresh_user(self, username: str) -> bool:
        try:
            track = await self.client.get_now_playing(username)
        except ProviderError as e:
            logfire.error(
                "Failed to fetch listening status from last.fm",
                username=username,
                error=str(e),
            )
            return False

        self.cache.put(
            username, ScrobbleSnapshot(username=username, currently_playing=track)
        )
        return True
