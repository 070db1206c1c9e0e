"""Mock Steam providers for testing."""

from dishka import Scope, provide

from presence.adapter.steam import MockSteamClient, SteamClient
from presence.util.di.infrastructure.steam import SteamProvider


class MockSteamProvider(SteamProvider):
    """Mock Steam provider."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_steam_client(self) -> SteamClient:
        """Provide mock Steam client."""
        return MockSteamClient()
