"""In-process cache with per-entry TTL."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from shiprate.domain.entries import CacheEntry
from shiprate.infrastructure.cache.base import fetch_through


class MemoryCache:
    """Dict-backed cache.

    Args:
        ttl_seconds: Entry lifetime; ``None`` keeps entries until cleared.
        clock: Monotonic time source, replaceable in tests.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[CacheEntry, float | None]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.read(key) is not None

    def read(self, key: str) -> CacheEntry | None:
        with self._lock:
            stored = self._entries.get(key)
            if stored is None:
                return None
            value, expires_at = stored
            if expires_at is not None and self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def write(self, key: str, value: CacheEntry) -> None:
        expires_at = self._clock() + self._ttl if self._ttl is not None else None
        with self._lock:
            self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def fetch(self, key: str, compute: Callable[[], CacheEntry]) -> CacheEntry:
        return fetch_through(self, key, compute)
