"""Persistence infrastructure providers: user directory and source caches."""

from dishka import Scope, provide

from presence.config import Settings
from presence.domain.repository import UserRepository
from presence.persistence.repository import (
    ConfigUserRepository,
    GameCatalog,
    GameSessionCache,
    LocationCache,
    PresenceCache,
    ScrobbleCache,
)
from presence.util.di.base import ProviderBase


class ProdPersistenceProvider(ProviderBase):
    """In-memory persistence provider, one instance of each cache per process.

    Caches are shared between the refresh jobs that write them and the
    aggregation service that reads them.
    """

    scope = Scope.APP

    @provide
    def get_user_repository(self, settings: Settings) -> UserRepository:
        """Provide the user directory built from settings."""
        return ConfigUserRepository.from_settings(settings)

    @provide
    def get_presence_cache(self) -> PresenceCache:
        """Provide Discord presence cache."""
        return PresenceCache()

    @provide
    def get_scrobble_cache(self) -> ScrobbleCache:
        """Provide last.fm cache."""
        return ScrobbleCache()

    @provide
    def get_game_session_cache(self) -> GameSessionCache:
        """Provide Steam player cache."""
        return GameSessionCache()

    @provide
    def get_game_catalog(self) -> GameCatalog:
        """Provide Steam app catalog."""
        return GameCatalog()

    @provide
    def get_location_cache(self) -> LocationCache:
        """Provide Find My location cache."""
        return LocationCache()
