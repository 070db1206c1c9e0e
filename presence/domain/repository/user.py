"""User directory interface."""

from abc import ABC, abstractmethod
from typing import Optional

from presence.domain.model.user import User


class UserRepository(ABC):
    """Read-only directory of configured users.

    Built once at startup; implementations never change afterwards, so
    lookups need no locking.
    """

    @abstractmethod
    def find_by_username(self, username: str) -> Optional[User]:
        """Find a user by their username.

        Args:
            username: The user's identity key

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    def find_all(self) -> list[User]:
        """All users, in configuration order."""
        pass
