"""Find My adapter."""

from .client import (
    DeviceAddress,
    DeviceCoordinates,
    FindMyClient,
    FindMyDevice,
    MockFindMyClient,
    RealFindMyClient,
)

__all__ = [
    "DeviceAddress",
    "DeviceCoordinates",
    "FindMyClient",
    "FindMyDevice",
    "MockFindMyClient",
    "RealFindMyClient",
]
