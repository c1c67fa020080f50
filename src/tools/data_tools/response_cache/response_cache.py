"""Response Cache - in-memory store for reshaped weather payloads."""

import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable

CACHE_TTL = timedelta(minutes=5)


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload and the clock reading when it was stored."""

    key: str
    payload: Any
    created_at: float


class ResponseCache:
    """Time-based cache shared by all requests.

    Entries are checked for freshness when read. Stale entries stay in the
    store until the next successful fetch for the same key overwrites them.
    There is no size limit; the key space is bounded by the city list.
    """

    def __init__(
        self,
        ttl: timedelta = CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        """Get a cached payload if it is still fresh.

        Args:
            key: Cache key, e.g. "weather_seoul".

        Returns:
            The stored payload, or None if missing or expired.
        """
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.created_at < self.ttl.total_seconds():
            return entry.payload
        return None

    def put(self, key: str, payload: Any) -> None:
        """Store a payload, replacing any existing entry for the key."""
        entry = CacheEntry(key=key, payload=payload, created_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
