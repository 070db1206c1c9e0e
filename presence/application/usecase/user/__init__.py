"""User use cases."""

from .get_host_user import GetHostUserRequest, GetHostUserUseCase
from .get_user import GetUserRequest, GetUserUseCase
from .list_users import ListUsersUseCase

__all__ = [
    "GetHostUserRequest",
    "GetHostUserUseCase",
    "GetUserRequest",
    "GetUserUseCase",
    "ListUsersUseCase",
]
