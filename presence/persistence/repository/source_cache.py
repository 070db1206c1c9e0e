"""In-memory source caches."""

import threading
from typing import Iterable, Optional

from presence.domain.model import (
    GameSessionSnapshot,
    LocationSnapshot,
    PresenceSnapshot,
    ScrobbleSnapshot,
)
from presence.domain.repository.source_cache import K, SourceCache, V


class InMemorySourceCache(SourceCache[K, V]):
    """Dict-backed source cache guarded by a lock.

    The lock is only held for the dict operation itself. Snapshots are
    frozen models, so a reader holding a reference can never see it change.
    """

    def __init__(self, initial: Optional[dict[K, V]] = None) -> None:
        self._lock = threading.Lock()
        self._snapshots: dict[K, V] = dict(initial or {})

    def get(self, key: K) -> Optional[V]:
        """Get the most recently committed snapshot for a key."""
        with self._lock:
            return self._snapshots.get(key)

    def put(self, key: K, snapshot: V) -> None:
        """Replace the snapshot stored for a key."""
        with self._lock:
            self._snapshots[key] = snapshot

    def put_many(self, snapshots: Iterable[tuple[K, V]]) -> None:
        """Replace several snapshots under a single lock acquisition."""
        # Materialize first so no caller code runs while the lock is held
        items = list(snapshots)
        with self._lock:
            self._snapshots.update(items)

    def remove(self, key: K) -> None:
        """Clear a key."""
        with self._lock:
            self._snapshots.pop(key, None)

    def replace_all(self, snapshots: dict[K, V]) -> None:
        """Swap the whole mapping for a new one."""
        fresh = dict(snapshots)
        with self._lock:
            self._snapshots = fresh

    def keys(self) -> list[K]:
        """Keys currently populated."""
        with self._lock:
            return list(self._snapshots)

    def __len__(self) -> int:
        with self._lock:
            return len(self._snapshots)


class PresenceCache(InMemorySourceCache[int, PresenceSnapshot]):
    """Discord presence keyed by Discord user id."""


class ScrobbleCache(InMemorySourceCache[str, ScrobbleSnapshot]):
    """last.fm now-playing keyed by last.fm username."""


class GameSessionCache(InMemorySourceCache[int, GameSessionSnapshot]):
    """Steam player summary keyed by 64-bit Steam id."""


class GameCatalog(InMemorySourceCache[int, str]):
    """Steam app id to app name."""


class LocationCache(InMemorySourceCache[str, LocationSnapshot]):
    """Find My location keyed by device id."""
