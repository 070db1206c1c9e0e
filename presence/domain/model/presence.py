"""Chat presence snapshot, as pushed by the Discord gateway."""

from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from presence.domain.model.common import DomainModel
from presence.domain.value import OnlineStatus


class OfficialEmoji(DomainModel):
    """A standard unicode emoji."""

    kind: Literal["official"] = "official"
    name: str


class CustomEmoji(DomainModel):
    """A guild emoji uploaded by users."""

    kind: Literal["custom"] = "custom"
    name: str
    id: int
    animated: bool
    url: str


class UnknownEmoji(DomainModel):
    """An emoji whose shape matched neither official nor custom."""

    kind: Literal["unknown"] = "unknown"
    name: str
    id: Optional[int] = None
    animated: Optional[bool] = None


Emoji = Annotated[
    Union[OfficialEmoji, CustomEmoji, UnknownEmoji], Field(discriminator="kind")
]


class CustomStatus(DomainModel):
    """The free-form status a user sets on their profile."""

    emoji: Optional[Emoji] = None
    text: Optional[str] = None


class ClientStatus(DomainModel):
    """Status per client surface; None where the surface is not connected."""

    desktop: Optional[OnlineStatus] = None
    mobile: Optional[OnlineStatus] = None
    web: Optional[OnlineStatus] = None


class PresenceSnapshot(DomainModel):
    """Current chat presence of one Discord user."""

    display_name: str
    status: OnlineStatus
    client_status: Optional[ClientStatus] = None
    custom_status: Optional[CustomStatus] = None
