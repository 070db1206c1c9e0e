"""iCloud Find My client, via a BlueBubbles server."""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
import logfire
from pydantic import BaseModel, ValidationError

from presence.adapter.error import ProviderError
from presence.domain.value import ValueObject

PROVIDER = "findmy"


class DeviceCoordinates(ValueObject):
    """Last reported coordinates of a device."""

    latitude: float
    longitude: float


class DeviceAddress(ValueObject):
    """Reverse-geocoded address of a device."""

    country: str
    locality: Optional[str] = None


class FindMyDevice(ValueObject):
    """One device as reported by Find My.

    Either part may be missing when the device has not reported recently.
    """

    id: str
    location: Optional[DeviceCoordinates] = None
    address: Optional[DeviceAddress] = None


class _DevicesResponse(BaseModel):
    data: list[FindMyDevice]


class FindMyClient(ABC):
    """Base class for Find My clients."""

    @abstractmethod
    async def get_devices(self) -> list[FindMyDevice]:
        """Get every device visible to the account.

        Raises:
            ProviderError: If the request or response parsing fails
        """
        pass


class RealFindMyClient(FindMyClient):
    """BlueBubbles ``/api/v1/icloud/findmy/devices`` client."""

    def __init__(
        self, server: str | None, password: str | None, timeout: float = 30.0
    ) -> None:
        """Initialize Find My client.

        Args:
            server: BlueBubbles server root URL
            password: BlueBubbles server password
            timeout: Request timeout in seconds
        """
        self.server = server.rstrip("/") if server else None
        self.password = password
        self.timeout = timeout

    async def get_devices(self) -> list[FindMyDevice]:
        """Get every device visible to the account."""
        if not self.server or not self.password:
            raise ProviderError(PROVIDER, "BlueBubbles server not configured")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{self.server}/api/v1/icloud/findmy/devices",
                    params={"password": self.password},
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            raise ProviderError(PROVIDER, f"HTTP error fetching devices: {e}")

        if response.status_code != 200:
            logfire.warn("Find My request failed", status_code=response.status_code)
            raise ProviderError(
                PROVIDER, f"Device request failed: {response.status_code}"
            )

        try:
            return _DevicesResponse.model_validate(response.json()).data
        except (ValueError, ValidationError) as e:
            raise ProviderError(PROVIDER, f"Malformed device list: {e}")


class MockFindMyClient(FindMyClient):
    """Mock Find My client for testing."""

    def __init__(self, devices: list[FindMyDevice] | None = None) -> None:
        self.devices = list(devices or [])
        self.fail = False

    async def get_devices(self) -> list[FindMyDevice]:
        """Return the configured devices."""
        if self.fail:
            raise ProviderError(PROVIDER, "mock failure")
        return list(self.devices)
