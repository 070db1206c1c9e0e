"""Test configuration and fixtures."""

import pytest

from presence.config import FindMySettings, LastFmSettings, Settings, SteamSettings
from presence.persistence.repository import ConfigUserRepository
from tests.harness import make_settings


@pytest.fixture(autouse=True)
def no_config_file(monkeypatch, tmp_path):
    """Point CONFIG_FILE at a file that does not exist."""
    monkeypatch.setenv("CONFIG_FILE", str(tmp_path / "missing.toml"))


@pytest.fixture
def settings() -> Settings:
    """Default test settings."""
    return make_settings()


@pytest.fixture
def user_repository(settings) -> ConfigUserRepository:
    """User directory built from the default test settings."""
    return ConfigUserRepository.from_settings(settings)


@pytest.fixture
def configured_sources() -> dict:
    """Source settings that enable every refresher."""
    return {
        "last_fm": LastFmSettings(api_key="lastfm-key"),
        "steam": SteamSettings(api_key="steam-key"),
        "findmy": FindMySettings(server="http://bluebubbles.local", password="pw"),
    }
