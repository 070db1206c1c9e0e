"""List users use case."""

from functools import cached_property

from presence.application.usecase.base import BaseUseCase
from presence.domain.model import UserSummary
from presence.domain.repository import UserRepository


class ListUsersUseCase(BaseUseCase):
    """Use case for listing every configured user.

    The directory never changes after startup, so the summary list is built
    on first use and reused for the life of the process.
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self.user_repository = user_repository

    @cached_property
    def summaries(self) -> list[UserSummary]:
        """Summaries in configuration order."""
        return [
            UserSummary(username=user.username, name=user.name)
            for user in self.user_repository.find_all()
        ]

    async def execute(self, request: None = None) -> list[UserSummary]:
        """Return the cached summaries."""
        return self.summaries
