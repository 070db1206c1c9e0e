"""Time zone lookup from coordinates."""

from abc import ABC, abstractmethod
from typing import Optional

from timezonefinder import TimezoneFinder


class TimeZoneLookup(ABC):
    """Maps coordinates to an IANA time zone name."""

    @abstractmethod
    def time_zone_at(self, latitude: float, longitude: float) -> Optional[str]:
        """Get the zone containing a point, or None over open water."""
        pass


class TimezoneFinderLookup(TimeZoneLookup):
    """Offline lookup backed by ``timezonefinder`` polygon data."""

    def __init__(self) -> None:
        self._finder = TimezoneFinder()

    def time_zone_at(self, latitude: float, longitude: float) -> Optional[str]:
        """Get the zone containing a point."""
        return self._finder.timezone_at(lng=longitude, lat=latitude)


class FixedTimeZoneLookup(TimeZoneLookup):
    """Returns the same zone everywhere. For tests."""

    def __init__(self, time_zone: Optional[str] = "UTC") -> None:
        self.time_zone = time_zone

    def time_zone_at(self, latitude: float, longitude: float) -> Optional[str]:
        """Return the fixed zone."""
        return self.time_zone
