"""TTL-based in-memory cache."""

import time
from collections.abc import Callable
from typing import Any


class TTLCache:
    """
    Time-to-live cache backed by a plain dict.

    Entries are stored with the time they were written. Lookups of expired
    entries drop them and report a miss, and every write sweeps out all
    expired entries so keys that are never read again do not accumulate.
    Safe for use from a single event loop.
    """

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.time):
        self._ttl = ttl_seconds
        self._clock = clock
        self._store: dict[str, tuple[Any, float]] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> tuple[Any, float] | None:
        """Return ``(value, stored_at)`` if still within TTL, else None."""
        entry = self._store.get(key)
        if entry is None:
            return None
        _, stored_at = entry
        if self._clock() - stored_at < self._ttl:
            return entry
        del self._store[key]
        return None

    def put(self, key: str, value: Any) -> None:
        """Drop expired entries, then store value with current timestamp."""
        now = self._clock()
        self._store = {
            k: entry for k, entry in self._store.items() if now - entry[1] < self._ttl
        }
        self._store[key] = (value, now)

    def invalidate(self, key: str) -> None:
        """Invalidate a single cache entry."""
        self._store.pop(key, None)

    def clear(self) -> None:
        """Invalidate all cached entries."""
        self._store.clear()
