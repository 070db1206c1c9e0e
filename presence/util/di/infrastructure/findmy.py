"""Find My infrastructure providers."""

from dishka import Scope, provide

from presence.adapter.findmy import FindMyClient, RealFindMyClient
from presence.adapter.timezone import TimeZoneLookup, TimezoneFinderLookup
from presence.config import Settings
from presence.util.di.base import ProviderBase


class FindMyProvider(ProviderBase):
    """Find My component base."""

    __mock_component__ = "findmy"


class ProdFindMyProvider(FindMyProvider):
    """Production Find My provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_findmy_client(self, settings: Settings) -> FindMyClient:
        """Provide BlueBubbles Find My client."""
        return RealFindMyClient(
            server=settings.findmy.server,
            password=settings.findmy.password,
            timeout=settings.refresh.http_timeout,
        )

    @provide(scope=Scope.APP)
    def get_time_zone_lookup(self) -> TimeZoneLookup:
        """Provide coordinate to time zone lookup.

        TimezoneFinder loads its polygon data on construction, so one
        instance is shared for the lifetime of the app.
        """
        return TimezoneFinderLookup()
