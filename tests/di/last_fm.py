"""Mock last.fm providers for testing."""

from dishka import Scope, provide

from presence.adapter.last_fm import LastFmClient, MockLastFmClient
from presence.util.di.infrastructure.last_fm import LastFmProvider


class MockLastFmProvider(LastFmProvider):
    """Mock last.fm provider."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_last_fm_client(self) -> LastFmClient:
        """Provide mock last.fm client."""
        return MockLastFmClient()
