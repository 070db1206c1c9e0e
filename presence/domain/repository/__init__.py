"""Repository interfaces."""

from .source_cache import SourceCache
from .user import UserRepository

__all__ = ["SourceCache", "UserRepository"]
