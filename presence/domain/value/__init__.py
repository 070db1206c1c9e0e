"""Domain value objects for the presence API."""

from presence.domain.value.common import RootValueObject, ValueObject
from presence.domain.value.types import Hostname, OnlineStatus, Scope

__all__ = [
    "Hostname",
    "OnlineStatus",
    "RootValueObject",
    "Scope",
    "ValueObject",
]
