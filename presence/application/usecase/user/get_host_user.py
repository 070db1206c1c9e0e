"""Get the aggregate of the user owning the request host."""

from pydantic import BaseModel

from presence.application.usecase.base import BaseUseCase
from presence.application.usecase.user.get_user import GetUserRequest, GetUserUseCase
from presence.domain.model import UserAggregate
from presence.domain.service import HostRouter


class GetHostUserRequest(BaseModel):
    """Get host user request."""

    host: str | None
    credential: str | None = None


class GetHostUserUseCase(BaseUseCase):
    """Use case behind ``GET /user`` on a vanity domain."""

    def __init__(self, host_router: HostRouter, get_user: GetUserUseCase) -> None:
        self.host_router = host_router
        self.get_user = get_user

    async def execute(self, request: GetHostUserRequest) -> UserAggregate | None:
        """Resolve the host and delegate to ``GetUserUseCase``.

        An unmapped host is looked up as the empty username, which is never
        configured, so it ends up exactly like an unknown user.
        """
        username = self.host_router.resolve(request.host) or ""
        return await self.get_user.execute(
            GetUserRequest(username=username, credential=request.credential)
        )
