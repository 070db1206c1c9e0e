"""User directory built from configuration."""

from typing import Optional

from presence.config import Settings
from presence.domain.model.user import User
from presence.domain.repository.user import UserRepository
from presence.util.error import ConfigurationError


class ConfigUserRepository(UserRepository):
    """Immutable user directory loaded from settings."""

    def __init__(self, users: list[User]) -> None:
        """Initialize the directory.

        Args:
            users: Users in configuration order

        Raises:
            ConfigurationError: If usernames are empty or duplicated, or an
                owner username does not refer to a configured user
        """
        self._users: dict[str, User] = {}
        for user in users:
            if not user.username:
                raise ConfigurationError("User entries must have a non-empty username")
            if user.username in self._users:
                raise ConfigurationError(f"Duplicate username: {user.username}")
            self._users[user.username] = user

        for user in users:
            unknown = [
                owner for owner in user.owner_usernames if owner not in self._users
            ]
            if unknown:
                raise ConfigurationError(
                    f"User '{user.username}' lists unknown owners: {', '.join(unknown)}"
                )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConfigUserRepository":
        """Build the directory from ``settings.users``."""
        return cls(
            [
                User(
                    username=username,
                    name=user.name,
                    aliases=user.aliases,
                    pronouns=user.pronouns,
                    time_zone=user.time_zone,
                    domain=user.domain,
                    owner_usernames=user.owner_usernames,
                    discord_id=user.discord_id,
                    last_fm_username=user.last_fm_username,
                    steam_id=user.steam_id,
                    findmy_device_id=user.findmy_device_id,
                )
                for username, user in settings.users.items()
            ]
        )

    def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username."""
        return self._users.get(username)

    def find_all(self) -> list[User]:
        """All users, in configuration order."""
        return list(self._users.values())
