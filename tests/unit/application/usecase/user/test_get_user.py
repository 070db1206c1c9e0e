"""Unit tests for the user aggregate use cases."""

import pytest

from presence.application.usecase.user import (
    GetHostUserRequest,
    GetHostUserUseCase,
    GetUserRequest,
    GetUserUseCase,
    ListUsersUseCase,
)
from presence.domain.model import LocationSnapshot, UserSummary
from presence.domain.service import AggregationService, HostRouter, ScopeService
from presence.persistence.repository import (
    GameSessionCache,
    LocationCache,
    PresenceCache,
    ScrobbleCache,
)
from tests.harness import CITY_TOKEN, FULL_TOKEN


@pytest.fixture
def location_cache() -> LocationCache:
    cache = LocationCache()
    cache.put(
        "device-alice",
        LocationSnapshot(
            country="US",
            locality="Springfield",
            latitude=39.8,
            longitude=-89.6,
            time_zone="America/Chicago",
        ),
    )
    return cache


@pytest.fixture
def get_user(settings, user_repository, location_cache) -> GetUserUseCase:
    return GetUserUseCase(
        aggregation_service=AggregationService(
            user_repository=user_repository,
            presence_cache=PresenceCache(),
            scrobble_cache=ScrobbleCache(),
            game_session_cache=GameSessionCache(),
            location_cache=location_cache,
        ),
        scope_service=ScopeService(settings.auth),
    )


class TestGetUserUseCase:
    """Tests for GetUserUseCase."""

    @pytest.mark.asyncio
    async def test_unknown_user_returns_none(self, get_user):
        """Should return None for an unknown username."""
        assert await get_user.execute(GetUserRequest(username="mallory")) is None

    @pytest.mark.asyncio
    async def test_no_credential_sees_country_only(self, get_user):
        """Should redact location for anonymous requests."""
        aggregate = await get_user.execute(GetUserRequest(username="alice"))

        assert aggregate.location.model_dump() == {"country": "US"}
        assert aggregate.time_zone == "Europe/London"

    @pytest.mark.asyncio
    async def test_credential_widens_location(self, get_user):
        """Should apply the scopes granted by the bearer token."""
        city = await get_user.execute(
            GetUserRequest(username="alice", credential=CITY_TOKEN)
        )
        full = await get_user.execute(
            GetUserRequest(username="alice", credential=FULL_TOKEN)
        )

        assert city.location.locality == "Springfield"
        assert city.location.latitude is None
        assert full.location.latitude == 39.8
        assert full.time_zone == "America/Chicago"

    @pytest.mark.asyncio
    async def test_unknown_credential_is_not_an_error(self, get_user):
        """Should serve the anonymous view for an unknown token."""
        aggregate = await get_user.execute(
            GetUserRequest(username="alice", credential="bogus")
        )

        assert aggregate is not None
        assert aggregate.location.locality is None


class TestGetHostUserUseCase:
    """Tests for GetHostUserUseCase."""

    @pytest.mark.asyncio
    async def test_resolves_user_domain(self, get_user, user_repository):
        """Should serve the user owning the host."""
        use_case = GetHostUserUseCase(HostRouter(user_repository), get_user)

        aggregate = await use_case.execute(GetHostUserRequest(host="Alice.Example:443"))

        assert aggregate.name == "Alice"

    @pytest.mark.asyncio
    async def test_unmapped_host_returns_none(self, get_user, user_repository):
        """Should behave like an unknown user for unmapped hosts."""
        use_case = GetHostUserUseCase(HostRouter(user_repository), get_user)

        assert await use_case.execute(GetHostUserRequest(host="api.example")) is None
        assert await use_case.execute(GetHostUserRequest(host=None)) is None


class TestListUsersUseCase:
    """Tests for ListUsersUseCase."""

    @pytest.mark.asyncio
    async def test_lists_users_in_order(self, user_repository):
        """Should summarize every user in configuration order."""
        use_case = ListUsersUseCase(user_repository)

        assert await use_case.execute() == [
            UserSummary(username="alice", name="Alice"),
            UserSummary(username="alice-bot", name="Alice's bot"),
        ]

    @pytest.mark.asyncio
    async def test_result_is_stable(self, user_repository):
        """Should return the same list on every call."""
        use_case = ListUsersUseCase(user_repository)

        assert await use_case.execute() is await use_case.execute()
