"""Per-request aggregate of a user's presence across sources."""

from typing import Any, Optional

from pydantic import SerializerFunctionWrapHandler, model_serializer

from presence.domain.model.common import DomainModel
from presence.domain.model.game_session import GameSessionSnapshot
from presence.domain.model.presence import PresenceSnapshot
from presence.domain.model.scrobble import ScrobbleSnapshot


class UserSummary(DomainModel):
    """Username and display name only."""

    username: str
    name: str


class LocationView(DomainModel):
    """Location after scope redaction.

    Fields withheld by redaction are left out of the serialized output
    entirely rather than rendered as null.
    """

    country: str
    locality: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @model_serializer(mode="wrap")
    def _omit_withheld(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        return {key: value for key, value in handler(self).items() if value is not None}


class UserAggregate(DomainModel):
    """Everything known about a user right now.

    Each source field is None when the user has no identifier for that
    source or the source has not produced a snapshot yet.
    """

    name: str
    aliases: list[str]
    pronouns: list[str]
    time_zone: str
    owners: list[UserSummary] = []
    discord: Optional[PresenceSnapshot] = None
    last_fm: Optional[ScrobbleSnapshot] = None
    steam: Optional[GameSessionSnapshot] = None
    location: Optional[LocationView] = None
