"""Find My device location refresher."""

import logfire

from presence.adapter.findmy import FindMyClient
from presence.adapter.timezone import TimeZoneLookup
from presence.application.background.base import PollingJob
from presence.domain.model import LocationSnapshot
from presence.domain.repository import SourceCache, UserRepository


class FindMyRefresher(PollingJob):
    """Polls device locations for every tracked device.

    Unlike the other sources, Find My says when a device can no longer be
    located: a tracked device reported without both an address and
    coordinates is removed from the cache. Devices missing from the
    response altogether are left untouched, and untracked devices are
    ignored.
    """

    name = "findmy"

    def __init__(
        self,
        client: FindMyClient,
        cache: SourceCache[str, LocationSnapshot],
        time_zones: TimeZoneLookup,
        user_repository: UserRepository,
        interval: float,
    ) -> None:
        super().__init__(interval=interval, run_on_start=True)
        self.client = client
        self.cache = cache
        self.time_zones = time_zones
        self.device_ids: frozenset[str] = frozenset(
            user.findmy_device_id
            for user in user_repository.find_all()
            if user.findmy_device_id
        )

    async def refresh(self) -> None:
        """Fetch devices and update tracked locations."""
        devices = await self.client.get_devices()

        located: list[tuple[str, LocationSnapshot]] = []
        lost: list[str] = []
        for device in devices:
            if device.id not in self.device_ids:
                continue
            if device.address is None or device.location is None:
                lost.append(device.id)
                continue

            latitude = device.location.latitude
            longitude = device.location.longitude
            located.append(
                (
                    device.id,
                    LocationSnapshot(
                        country=device.address.country,
                        locality=device.address.locality,
                        latitude=latitude,
                        longitude=longitude,
                        time_zone=self.time_zones.time_zone_at(latitude, longitude),
                    ),
                )
            )

        self.cache.put_many(located)
        for device_id in lost:
            self.cache.remove(device_id)

        if lost:
            logfire.info("Devices no longer locatable", device_ids=lost)
