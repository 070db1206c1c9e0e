"""Domain layer DI providers."""

from dishka import Scope, provide

from presence.config import AuthSettings
from presence.domain.repository import UserRepository
from presence.domain.service import AggregationService, HostRouter, ScopeService
from presence.persistence.repository import (
    GameSessionCache,
    LocationCache,
    PresenceCache,
    ScrobbleCache,
)
from presence.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services only read immutable configuration and the caches, so a
    single instance serves every request.
    """

    scope = Scope.APP

    @provide
    def get_scope_service(self, auth_settings: AuthSettings) -> ScopeService:
        """Provide scope resolution service."""
        return ScopeService(auth_settings=auth_settings)

    @provide
    def get_host_router(self, user_repository: UserRepository) -> HostRouter:
        """Provide host router."""
        return HostRouter(user_repository=user_repository)

    @provide
    def get_aggregation_service(
        self,
        user_repository: UserRepository,
        presence_cache: PresenceCache,
        scrobble_cache: ScrobbleCache,
        game_session_cache: GameSessionCache,
        location_cache: LocationCache,
    ) -> AggregationService:
        """Provide aggregation service."""
        return AggregationService(
            user_repository=user_repository,
            presence_cache=presence_cache,
            scrobble_cache=scrobble_cache,
            game_session_cache=game_session_cache,
            location_cache=location_cache,
        )
