"""Location snapshot from iCloud Find My."""

from typing import Optional

from presence.domain.model.common import DomainModel


class LocationSnapshot(DomainModel):
    """Last known location of a device.

    Stored at full precision; redaction happens per request and never
    modifies the stored snapshot.
    """

    country: str
    locality: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    # IANA zone derived from the coordinates when the snapshot was taken
    time_zone: Optional[str] = None
