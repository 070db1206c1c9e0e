"""Steam infrastructure providers."""

from dishka import Scope, provide

from presence.adapter.steam import RealSteamClient, SteamClient
from presence.config import Settings
from presence.util.di.base import ProviderBase


class SteamProvider(ProviderBase):
    """Steam component base."""

    __mock_component__ = "steam"


class ProdSteamProvider(SteamProvider):
    """Production Steam provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_steam_client(self, settings: Settings) -> SteamClient:
        """Provide Steam Web API client."""
        return RealSteamClient(
            api_key=settings.steam.api_key,
            base_url=settings.steam.base_url,
            timeout=settings.refresh.http_timeout,
        )
