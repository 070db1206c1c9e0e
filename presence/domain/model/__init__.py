"""Domain model entities for the presence API."""

from presence.domain.model.aggregate import LocationView, UserAggregate, UserSummary
from presence.domain.model.game_session import Game, GameSessionSnapshot
from presence.domain.model.location import LocationSnapshot
from presence.domain.model.presence import (
    ClientStatus,
    CustomEmoji,
    CustomStatus,
    Emoji,
    OfficialEmoji,
    PresenceSnapshot,
    UnknownEmoji,
)
from presence.domain.model.scrobble import ScrobbleSnapshot, Track, TrackImage
from presence.domain.model.user import User

__all__ = [
    "ClientStatus",
    "CustomEmoji",
    "CustomStatus",
    "Emoji",
    "Game",
    "GameSessionSnapshot",
    "LocationSnapshot",
    "LocationView",
    "OfficialEmoji",
    "PresenceSnapshot",
    "ScrobbleSnapshot",
    "Track",
    "TrackImage",
    "UnknownEmoji",
    "User",
    "UserAggregate",
    "UserSummary",
]
