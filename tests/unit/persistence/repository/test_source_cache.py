"""Unit tests for in-memory source caches."""

import threading

import pytest
from pydantic import ValidationError

from presence.domain.model import GameSessionSnapshot, LocationSnapshot
from presence.persistence.repository import GameCatalog, GameSessionCache, LocationCache


def make_location(country: str = "US", **fields) -> LocationSnapshot:
    return LocationSnapshot(country=country, **fields)


class TestInMemorySourceCache:
    """Tests for get/put/remove semantics shared by every cache."""

    def test_get_missing_key_returns_none(self):
        """Should return None for a key never written."""
        cache = LocationCache()

        assert cache.get("device-1") is None

    def test_put_replaces_whole_snapshot(self):
        """Should replace the stored snapshot rather than merge fields."""
        # Arrange
        cache = LocationCache()
        cache.put(
            "device-1",
            make_location(locality="Springfield", latitude=1.0, longitude=2.0),
        )

        # Act
        cache.put("device-1", make_location(country="CA"))

        # Assert
        stored = cache.get("device-1")
        assert stored == make_location(country="CA")
        assert stored.locality is None
        assert stored.latitude is None

    def test_put_many_writes_every_entry(self):
        """Should write all entries in one call."""
        cache = LocationCache()

        cache.put_many([("a", make_location("US")), ("b", make_location("FR"))])

        assert sorted(cache.keys()) == ["a", "b"]
        assert cache.get("b").country == "FR"

    def test_remove_clears_key(self):
        """Should clear the key and ignore unknown keys."""
        cache = LocationCache()
        cache.put("device-1", make_location())

        cache.remove("device-1")
        cache.remove("never-written")

        assert cache.get("device-1") is None
        assert len(cache) == 0

    def test_replace_all_drops_old_entries(self):
        """Should swap the mapping wholesale."""
        catalog = GameCatalog({1: "Old Game", 2: "Other"})

        catalog.replace_all({3: "New Game"})

        assert catalog.keys() == [3]
        assert catalog.get(1) is None

    def test_replace_all_copies_input(self):
        """Should not alias the caller's dict."""
        apps = {570: "Dota 2"}
        catalog = GameCatalog()

        catalog.replace_all(apps)
        apps[730] = "Counter-Strike 2"

        assert catalog.get(730) is None

    def test_snapshots_are_immutable(self):
        """Should store frozen snapshots that readers cannot modify."""
        cache = GameSessionCache()
        cache.put(1, GameSessionSnapshot(steam_id="1", persona_name="alice"))

        with pytest.raises(ValidationError):
            cache.get(1).persona_name = "mallory"

    def test_concurrent_writers_leave_a_whole_snapshot(self):
        """Should only ever hold one of the written snapshots."""
        # Arrange
        cache = LocationCache()
        snapshots = [
            make_location(
                country=f"C{i}", locality=f"L{i}", latitude=float(i), longitude=float(i)
            )
            for i in range(20)
        ]

        def write(snapshot: LocationSnapshot) -> None:
            for _ in range(200):
                cache.put("device-1", snapshot)

        # Act
        threads = [threading.Thread(target=write, args=(s,)) for s in snapshots]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Assert
        assert cache.get("device-1") in snapshots

    def test_readers_during_writes_see_whole_snapshots(self):
        """Should only ever hand readers a snapshot that was written whole."""
        # Arrange
        cache = LocationCache()
        snapshots = [
            make_location(
                country=f"C{i}", locality=f"L{i}", latitude=float(i), longitude=float(i)
            )
            for i in range(10)
        ]
        cache.put("device-1", snapshots[0])
        observed: list[LocationSnapshot | None] = []
        observed_lock = threading.Lock()

        def write(snapshot: LocationSnapshot) -> None:
            for _ in range(500):
                cache.put("device-1", snapshot)

        def read() -> None:
            seen = [cache.get("device-1") for _ in range(500)]
            with observed_lock:
                observed.extend(seen)

        # Act
        threads = [threading.Thread(target=write, args=(s,)) for s in snapshots]
        threads += [threading.Thread(target=read) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Assert
        assert len(observed) == 2500
        assert all(snapshot in snapshots for snapshot in observed)
