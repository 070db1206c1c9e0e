"""Mock providers for testing."""

from .discord import MockDiscordProvider
from .findmy import MockFindMyProvider
from .last_fm import MockLastFmProvider
from .steam import MockSteamProvider
from .container import build_test_container

__all__ = [
    "MockDiscordProvider",
    "MockFindMyProvider",
    "MockLastFmProvider",
    "MockSteamProvider",
    "build_test_container",
]
