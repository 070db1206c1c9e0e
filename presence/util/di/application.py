"""Application layer DI providers."""

import logfire
from dishka import Scope, provide

from presence.adapter.discord import DiscordConnector
from presence.adapter.findmy import FindMyClient
from presence.adapter.last_fm import LastFmClient
from presence.adapter.steam import SteamClient
from presence.adapter.timezone import TimeZoneLookup
from presence.application.background import (
    BackgroundJob,
    BackgroundRefresher,
    FindMyRefresher,
    LastFmRefresher,
    PresenceStreamSupervisor,
    SteamCatalogRefresher,
    SteamRefresher,
)
from presence.application.usecase.user import (
    GetHostUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
)
from presence.config import Settings
from presence.domain.repository import UserRepository
from presence.domain.service import AggregationService, HostRouter, ScopeService
from presence.persistence.repository import (
    GameCatalog,
    GameSessionCache,
    LocationCache,
    PresenceCache,
    ScrobbleCache,
)
from presence.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed."""

    # User use cases
    @provide(scope=Scope.REQUEST)
    def get_get_user_use_case(
        self, aggregation_service: AggregationService, scope_service: ScopeService
    ) -> GetUserUseCase:
        """Provide get user use case."""
        return GetUserUseCase(
            aggregation_service=aggregation_service, scope_service=scope_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_host_user_use_case(
        self, host_router: HostRouter, get_user: GetUserUseCase
    ) -> GetHostUserUseCase:
        """Provide get host user use case."""
        return GetHostUserUseCase(host_router=host_router, get_user=get_user)

    @provide(scope=Scope.APP)
    def get_list_users_use_case(
        self, user_repository: UserRepository
    ) -> ListUsersUseCase:
        """Provide list users use case (APP scope, its result never changes)."""
        return ListUsersUseCase(user_repository=user_repository)

    # Background jobs
    @provide(scope=Scope.APP)
    def get_background_refresher(
        self,
        settings: Settings,
        user_repository: UserRepository,
        discord_connector: DiscordConnector,
        last_fm_client: LastFmClient,
        steam_client: SteamClient,
        findmy_client: FindMyClient,
        time_zones: TimeZoneLookup,
        presence_cache: PresenceCache,
        scrobble_cache: ScrobbleCache,
        game_session_cache: GameSessionCache,
        game_catalog: GameCatalog,
        location_cache: LocationCache,
    ) -> BackgroundRefresher:
        """Provide the background refresher with a job per configured source.

        A source without credentials gets no job; its cache stays empty and
        its field is absent from every aggregate.
        """
        refresh = settings.refresh
        jobs: list[BackgroundJob] = []

        if settings.discord.bot_token:
            jobs.append(
                PresenceStreamSupervisor(
                    connector=discord_connector,
                    cache=presence_cache,
                    user_repository=user_repository,
                    backoff=refresh.discord_reconnect_backoff,
                )
            )
        else:
            logfire.warn("Discord presence stream not set up")

        if settings.last_fm.api_key:
            jobs.append(
                LastFmRefresher(
                    client=last_fm_client,
                    cache=scrobble_cache,
                    user_repository=user_repository,
                    interval=refresh.last_fm_interval,
                )
            )
        else:
            logfire.warn("last.fm refresher not set up")

        if settings.steam.api_key:
            jobs.append(
                SteamRefresher(
                    client=steam_client,
                    cache=game_session_cache,
                    catalog=game_catalog,
                    user_repository=user_repository,
                    interval=refresh.steam_interval,
                )
            )
            jobs.append(
                SteamCatalogRefresher(
                    client=steam_client,
                    catalog=game_catalog,
                    interval=refresh.steam_catalog_interval,
                )
            )
        else:
            logfire.warn("Steam refresher not set up")

        if settings.findmy.server and settings.findmy.password:
            jobs.append(
                FindMyRefresher(
                    client=findmy_client,
                    cache=location_cache,
                    time_zones=time_zones,
                    user_repository=user_repository,
                    interval=refresh.findmy_interval,
                )
            )
        else:
            logfire.warn("Find My refresher not set up")

        return BackgroundRefresher(jobs)
