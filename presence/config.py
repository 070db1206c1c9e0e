"""Application configuration."""

import os
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

CONFIG_FILE_ENV = "CONFIG_FILE"
DEFAULT_CONFIG_FILE = "config.toml"


class UserSettings(BaseModel):
    """A single configured user, keyed by username in ``Settings.users``."""

    name: str
    aliases: list[str] = []
    pronouns: list[str] = []
    time_zone: str = "UTC"

    # Usernames of the accounts that own this profile (linked/delegated profiles)
    owner_usernames: list[str] = []

    # Vanity domain that serves this user's aggregate from ``GET /user``
    domain: str | None = None

    # Per-source identifiers, each optional
    discord_id: int | None = None
    last_fm_username: str | None = None
    steam_id: int | None = None
    findmy_device_id: str | None = None


class AuthSettings(BaseModel):
    """Bearer token configuration.

    Maps an opaque bearer token to the scopes it grants, e.g.::

        [auth.tokens]
        "s3cret" = ["icloud.city", "icloud.latlong"]
    """

    tokens: dict[str, list[str]] = {}


class DiscordSettings(BaseModel):
    """Discord gateway configuration."""

    # Bot token (optional - presence stream is disabled without it)
    bot_token: str | None = None

    # Guilds whose member list is chunked when the gateway becomes ready
    guild_ids: list[int] = []


class LastFmSettings(BaseModel):
    """last.fm API configuration."""

    api_key: str | None = None
    base_url: str = "https://ws.audioscrobbler.com/2.0/"


class SteamSettings(BaseModel):
    """Steam Web API configuration."""

    api_key: str | None = None
    base_url: str = "https://api.steampowered.com"


class FindMySettings(BaseModel):
    """BlueBubbles server used to query iCloud Find My devices."""

    server: str | None = None
    password: str | None = None


class RefreshSettings(BaseModel):
    """Background refresh schedule, in seconds."""

    last_fm_interval: float = Field(default=10.0, gt=0)
    steam_interval: float = Field(default=30.0, gt=0)
    # Six hours; the app list is large and rate limited
    steam_catalog_interval: float = Field(default=21600.0, gt=0)
    findmy_interval: float = Field(default=5.0, gt=0)
    discord_reconnect_backoff: float = Field(default=30.0, gt=0)

    # Timeout applied to every upstream HTTP request
    http_timeout: float = Field(default=30.0, gt=0)


class ServerSettings(BaseModel):
    """Listening address."""

    host: str = "0.0.0.0"
    port: int = 3000


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Values are read, highest priority first, from constructor arguments,
    environment variables (``DISCORD__BOT_TOKEN`` style), ``.env`` and the
    TOML file named by ``CONFIG_FILE`` (default ``config.toml``)::

        [last_fm]
        api_key = "..."

        [users.alice]
        name = "Alice"
        pronouns = ["she", "her"]
        time_zone = "Europe/London"
        domain = "alice.example"
        last_fm_username = "alice_listens"
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    environment: Literal["test", "development", "production"] = "development"
    debug: bool = False

    users: dict[str, UserSettings] = {}

    auth: AuthSettings = AuthSettings()
    discord: DiscordSettings = DiscordSettings()
    last_fm: LastFmSettings = LastFmSettings()
    steam: SteamSettings = SteamSettings()
    findmy: FindMySettings = FindMySettings()
    refresh: RefreshSettings = RefreshSettings()
    server: ServerSettings = ServerSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Add the TOML config file below the environment sources."""
        toml_file = os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            file_secret_settings,
        )
