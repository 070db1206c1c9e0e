"""In-memory repository implementations."""

from .source_cache import (
    GameCatalog,
    GameSessionCache,
    InMemorySourceCache,
    LocationCache,
    PresenceCache,
    ScrobbleCache,
)
from .user import ConfigUserRepository

__all__ = [
    "ConfigUserRepository",
    "GameCatalog",
    "GameSessionCache",
    "InMemorySourceCache",
    "LocationCache",
    "PresenceCache",
    "ScrobbleCache",
]
