"""Steam Web API client.

Player summaries are fetched in batches; the app catalog maps app ids to
display names and is refreshed on a much slower schedule.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
import logfire
from pydantic import BaseModel, ValidationError

from presence.adapter.error import ProviderError
from presence.domain.value import ValueObject

PROVIDER = "steam"

# GetPlayerSummaries accepts at most 100 ids per call
MAX_IDS_PER_REQUEST = 100


class PlayerSummary(ValueObject):
    """The parts of a Steam player summary we keep."""

    steam_id: int
    persona_name: str
    game_id: Optional[int] = None
    # Name Steam reports alongside the game id, when it does
    game_name: Optional[str] = None


class _Player(BaseModel):
    steamid: int
    personaname: str
    gameid: Optional[int] = None
    gameextrainfo: Optional[str] = None


class _Players(BaseModel):
    players: list[_Player] = []


class _PlayerSummariesResponse(BaseModel):
    response: _Players


def parse_app_list(payload: Any) -> dict[int, str]:
    """Convert a ``GetAppList`` payload into an app id to name mapping.

    Malformed entries are skipped.

    Raises:
        ProviderError: If the payload lacks the ``applist.apps`` array
    """
    apps = (
        payload.get("applist", {}).get("apps")
        if isinstance(payload, dict) and isinstance(payload.get("applist"), dict)
        else None
    )
    if not isinstance(apps, list):
        raise ProviderError(PROVIDER, "App list payload has no applist.apps array")

    catalog: dict[int, str] = {}
    for entry in apps:
        if not isinstance(entry, dict):
            continue
        app_id = entry.get("appid")
        name = entry.get("name")
        if isinstance(app_id, int) and isinstance(name, str):
            catalog[app_id] = name
    return catalog


class SteamClient(ABC):
    """Base class for Steam clients."""

    @abstractmethod
    async def get_player_summaries(self, steam_ids: list[int]) -> list[PlayerSummary]:
        """Get player summaries.

        Args:
            steam_ids: At most ``MAX_IDS_PER_REQUEST`` 64-bit Steam ids

        Returns:
            Summaries for the players Steam knows about

        Raises:
            ProviderError: If the request or response parsing fails
        """
        pass

    @abstractmethod
    async def get_app_list(self) -> dict[int, str]:
        """Get the full app id to name catalog.

        Raises:
            ProviderError: If the request or response parsing fails
        """
        pass


class RealSteamClient(SteamClient):
    """Steam Web API client."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.steampowered.com",
        timeout: float = 30.0,
    ) -> None:
        """Initialize Steam client.

        Args:
            api_key: Steam Web API key
            base_url: API root
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def get_player_summaries(self, steam_ids: list[int]) -> list[PlayerSummary]:
        """Get player summaries."""
        if not self.api_key:
            raise ProviderError(PROVIDER, "API key not configured")
        if len(steam_ids) > MAX_IDS_PER_REQUEST:
            raise ValueError(
                f"At most {MAX_IDS_PER_REQUEST} ids per request, got {len(steam_ids)}"
            )
        if not steam_ids:
            return []

        payload = await self._get_json(
            "/ISteamUser/GetPlayerSummaries/v2/",
            params={
                "key": self.api_key,
                "steamids": ",".join(str(steam_id) for steam_id in steam_ids),
            },
        )

        try:
            summaries = _PlayerSummariesResponse.model_validate(payload)
        except ValidationError as e:
            raise ProviderError(PROVIDER, f"Malformed player summaries: {e}")

        return [
            PlayerSummary(
                steam_id=player.steamid,
                persona_name=player.personaname,
                game_id=player.gameid,
                game_name=player.gameextrainfo,
            )
            for player in summaries.response.players
        ]

    async def get_app_list(self) -> dict[int, str]:
        """Get the full app id to name catalog."""
        payload = await self._get_json("/ISteamApps/GetAppList/v2/")
        return parse_app_list(payload)

    async def _get_json(
        self, path: str, params: dict[str, str] | None = None
    ) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, params=params, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise ProviderError(PROVIDER, f"HTTP error requesting {path}: {e}")

        if response.status_code != 200:
            logfire.warn(
                "Steam request failed",
                path=path,
                status_code=response.status_code,
            )
            raise ProviderError(
                PROVIDER, f"Request to {path} failed: {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(PROVIDER, f"Invalid JSON from {path}: {e}")


class MockSteamClient(SteamClient):
    """Mock Steam client for testing.

    Serves summaries for the configured players only, the way Steam omits
    unknown ids. Set ``fail`` to make every call raise ``ProviderError``.
    """

    def __init__(
        self,
        players: list[PlayerSummary] | None = None,
        apps: dict[int, str] | None = None,
    ) -> None:
        self.players = {player.steam_id: player for player in players or []}
        self.apps = dict(apps or {})
        self.fail = False
        self.requested_batches: list[list[int]] = []

    async def get_player_summaries(self, steam_ids: list[int]) -> list[PlayerSummary]:
        """Return configured summaries for the requested ids."""
        self.requested_batches.append(list(steam_ids))
        if self.fail:
            raise ProviderError(PROVIDER, "mock failure")
        return [self.players[i] for i in steam_ids if i in self.players]

    async def get_app_list(self) -> dict[int, str]:
        """Return the configured catalog."""
        if self.fail:
            raise ProviderError(PROVIDER, "mock failure")
        return dict(self.apps)
