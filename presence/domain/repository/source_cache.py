"""Source cache interface."""

from abc import ABC, abstractmethod
from typing import Generic, Hashable, Iterable, Optional, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class SourceCache(ABC, Generic[K, V]):
    """Latest snapshot per source key for one upstream source.

    Written only by the source's own refresh job, read by any number of
    request handlers. Reads never wait on upstream I/O.
    """

    @abstractmethod
    def get(self, key: K) -> Optional[V]:
        """Get the most recently committed snapshot for a key.

        Args:
            key: Source-specific key (e.g. Discord id, last.fm username)

        Returns:
            The snapshot, or None if the key was never populated or was cleared
        """
        pass

    @abstractmethod
    def put(self, key: K, snapshot: V) -> None:
        """Replace the snapshot stored for a key."""
        pass

    @abstractmethod
    def put_many(self, snapshots: Iterable[tuple[K, V]]) -> None:
        """Replace several snapshots under a single lock acquisition."""
        pass

    @abstractmethod
    def remove(self, key: K) -> None:
        """Clear a key. Missing keys are ignored."""
        pass

    @abstractmethod
    def replace_all(self, snapshots: dict[K, V]) -> None:
        """Swap the whole mapping for a new one."""
        pass

    @abstractmethod
    def keys(self) -> list[K]:
        """Keys currently populated."""
        pass
