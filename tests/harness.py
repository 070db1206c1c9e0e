"""Test harness: settings builders and container fixtures.

Nothing here talks to a real upstream; every source is mocked unless a
test explicitly unmocks it.
"""

import pytest_asyncio

from presence.config import AuthSettings, Settings, UserSettings
from presence.domain.model import User
from presence.util.di import Component
from tests.di import build_test_container

CITY_TOKEN = "city-token"
LATLONG_TOKEN = "latlong-token"
FULL_TOKEN = "full-token"


def make_settings(**overrides) -> Settings:
    """Helper building test settings with two linked users.

    ``alice`` owns the ``alice.example`` domain and is tracked on every
    source; ``alice-bot`` is owned by ``alice`` and only has a Discord id.

    Args:
        **overrides: Settings fields to replace

    Returns:
        Settings that never read a local config file
    """
    values = {
        "environment": "test",
        "users": {
            "alice": UserSettings(
                name="Alice",
                aliases=["ally"],
                pronouns=["she", "her"],
                time_zone="Europe/London",
                domain="alice.example",
                discord_id=1001,
                last_fm_username="alice_listens",
                steam_id=76561197960287930,
                findmy_device_id="device-alice",
            ),
            "alice-bot": UserSettings(
                name="Alice's bot",
                owner_usernames=["alice"],
                discord_id=1002,
            ),
        },
        "auth": AuthSettings(
            tokens={
                CITY_TOKEN: ["icloud.city"],
                LATLONG_TOKEN: ["icloud.latlong"],
                FULL_TOKEN: ["icloud.city", "icloud.latlong"],
            }
        ),
    }
    values.update(overrides)
    return Settings(**values)


def make_user(username: str = "alice", **fields) -> User:
    """Helper building a single User for unit tests."""
    fields.setdefault("name", username.title())
    return User(username=username, **fields)


def create_env_fixture(
    settings: Settings | None = None, unmock: set[Component] | None = None
):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that:
    - Builds a test container with the given settings and unmocking
    - Yields the APP-scoped container, so caches and mock clients are
      shared with whatever the test resolves from it
    - Closes the container afterwards

    Args:
        settings: Settings to serve, make_settings() if omitted
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        api_env = create_env_fixture()

        @pytest.mark.asyncio
        async def test_reads_cache(api_env):
            cache = await api_env.get(PresenceCache)
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(
            settings=settings or make_settings(), unmock=unmock or set()
        )
        try:
            yield container
        finally:
            await container.close()

    return _test_environment
