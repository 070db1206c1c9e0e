"""Get user aggregate use case."""

from pydantic import BaseModel

from presence.application.usecase.base import BaseUseCase
from presence.domain.error import NotFoundError
from presence.domain.model import UserAggregate
from presence.domain.service import AggregationService, ScopeService


class GetUserRequest(BaseModel):
    """Get user request."""

    username: str
    credential: str | None = None


class GetUserUseCase(BaseUseCase):
    """Use case for reading one user's aggregate presence."""

    def __init__(
        self,
        aggregation_service: AggregationService,
        scope_service: ScopeService,
    ) -> None:
        """Initialize get user use case.

        Args:
            aggregation_service: Aggregation domain service
            scope_service: Scope resolution domain service
        """
        self.aggregation_service = aggregation_service
        self.scope_service = scope_service

    async def execute(self, request: GetUserRequest) -> UserAggregate | None:
        """Execute get user flow.

        Steps:
        1. Resolve the bearer credential to scopes (none if unrecognized)
        2. Aggregate every source for the user, redacting by scope

        Args:
            request: Request with username and optional bearer token

        Returns:
            The aggregate if the user exists, None otherwise
        """
        scopes = self.scope_service.scopes_for(request.credential)
        try:
            return self.aggregation_service.aggregate(request.username, scopes)
        except NotFoundError:
            return None
