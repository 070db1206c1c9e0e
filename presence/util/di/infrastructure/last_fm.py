"""last.fm infrastructure providers."""

from dishka import Scope, provide

from presence.adapter.last_fm import LastFmClient, RealLastFmClient
from presence.config import Settings
from presence.util.di.base import ProviderBase


class LastFmProvider(ProviderBase):
    """last.fm component base."""

    __mock_component__ = "last_fm"


class ProdLastFmProvider(LastFmProvider):
    """Production last.fm provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_last_fm_client(self, settings: Settings) -> LastFmClient:
        """Provide last.fm client."""
        return RealLastFmClient(
            api_key=settings.last_fm.api_key,
            base_url=settings.last_fm.base_url,
            timeout=settings.refresh.http_timeout,
        )
