"""User presence routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from presence.application.usecase.user import (
    GetHostUserRequest,
    GetHostUserUseCase,
    GetUserRequest,
    GetUserUseCase,
    ListUsersUseCase,
)
from presence.domain.model import UserAggregate, UserSummary
from presence.interface.api.caching import USER_MAX_AGE, USERS_MAX_AGE, cache_control

router = APIRouter(tags=["users"], route_class=DishkaRoute)

# Bearer tokens are optional; a missing or unknown token only narrows what
# the response reveals
bearer = HTTPBearer(auto_error=False)


def _credential(authorization: HTTPAuthorizationCredentials | None) -> str | None:
    return authorization.credentials if authorization else None


def _user_not_found(username: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"User not found: {username}",
    )


@router.get(
    "/users",
    response_model=list[UserSummary],
    dependencies=[Depends(cache_control(USERS_MAX_AGE))],
)
async def list_users(
    list_users_use_case: FromDishka[ListUsersUseCase],
) -> list[UserSummary]:
    """List every configured user.

    Example:
        GET /users

        Response:
        [{"username": "alice", "name": "Alice"}]
    """
    return await list_users_use_case.execute()


@router.get(
    "/user",
    response_model=UserAggregate,
    dependencies=[Depends(cache_control(USER_MAX_AGE))],
)
async def get_host_user(
    request: Request,
    get_host_user_use_case: FromDishka[GetHostUserUseCase],
    authorization: HTTPAuthorizationCredentials | None = Security(bearer),
) -> UserAggregate:
    """Get the aggregate of the user whose domain served the request.

    Raises:
        HTTPException: 404 if the host is not a user domain
    """
    host = request.headers.get("host")
    aggregate = await get_host_user_use_case.execute(
        GetHostUserRequest(host=host, credential=_credential(authorization))
    )
    if aggregate is None:
        raise _user_not_found(host or "")
    return aggregate


@router.get(
    "/user/{username}",
    response_model=UserAggregate,
    dependencies=[Depends(cache_control(USER_MAX_AGE))],
)
async def get_user(
    username: str,
    get_user_use_case: FromDishka[GetUserUseCase],
    authorization: HTTPAuthorizationCredentials | None = Security(bearer),
) -> UserAggregate:
    """Get a user's aggregate presence.

    Location precision depends on the scopes granted by the bearer token:
    ``icloud.city`` reveals the locality, ``icloud.latlong`` the coordinates
    and the local time zone.

    Args:
        username: Configured username
        get_user_use_case: Get user use case from DI
        authorization: Optional bearer token

    Returns:
        The user's aggregate

    Raises:
        HTTPException: 404 if the username is not configured
    """
    aggregate = await get_user_use_case.execute(
        GetUserRequest(username=username, credential=_credential(authorization))
    )
    if aggregate is None:
        raise _user_not_found(username)
    return aggregate
