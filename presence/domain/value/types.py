"""Domain value objects for the presence API."""

from enum import Enum

from pydantic import field_validator

from presence.domain.value.common import RootValueObject


class OnlineStatus(str, Enum):
    """Coarse chat-service online status."""

    ONLINE = "online"
    IDLE = "idle"
    DO_NOT_DISTURB = "dnd"
    INVISIBLE = "invisible"
    OFFLINE = "offline"


class Scope(str, Enum):
    """Capability scopes a bearer token can grant.

    Scopes only gate the precision of location fields; they never decide
    whether a request succeeds.
    """

    LOCATION_CITY = "icloud.city"
    LOCATION_LATLONG = "icloud.latlong"


class Hostname(RootValueObject[str]):
    """Normalized request hostname.

    Lowercased, with any port and trailing dot removed, so that
    ``Alice.Example:443`` and ``alice.example.`` compare equal.
    """

    @field_validator("root")
    @classmethod
    def normalize_hostname(cls, v: str) -> str:
        """Strip port and trailing dot, lowercase."""
        host = v.strip()
        if host.startswith("["):
            # IPv6 literal, e.g. [::1]:3000
            host = host.split("]", 1)[0] + "]"
        else:
            host = host.split(":", 1)[0]
        return host.rstrip(".").lower()
