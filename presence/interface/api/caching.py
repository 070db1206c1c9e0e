"""Cache-Control response header dependencies."""

from collections.abc import Callable

from fastapi import Response

# max-age values in seconds
ROOT_MAX_AGE = 259200
USERS_MAX_AGE = 60
USER_MAX_AGE = 10


def cache_control(max_age: int) -> Callable[[Response], None]:
    """Build a route dependency that sets ``Cache-Control: max-age=...``.

    Args:
        max_age: Seconds clients may cache the response

    Returns:
        Dependency for ``APIRouter.get(..., dependencies=[Depends(...)])``
    """

    def set_cache_control(response: Response) -> None:
        response.headers["Cache-Control"] = f"max-age={max_age}"

    return set_cache_control
