"""Cache protocol: fetch-or-populate storage for cache entries.

Backends own expiry.  They promise nothing about concurrent misses: two
callers racing on the same key may both compute, and the last write wins.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from shiprate.domain.entries import CacheEntry


@runtime_checkable
class Cache(Protocol):
    """Key-value store for rate and transit-time entries."""

    def read(self, key: str) -> CacheEntry | None:
        """Return the live entry for *key*, or None on miss or expiry."""
        ...

    def write(self, key: str, value: CacheEntry) -> None:
        """Store *value* under *key*, replacing any existing entry."""
        ...

    def delete(self, key: str) -> None: ...

    def clear(self) -> None: ...

    def fetch(self, key: str, compute: Callable[[], CacheEntry]) -> CacheEntry:
        """Return the entry for *key*, computing and storing it on a miss."""
        ...


def fetch_through(cache: Cache, key: str, compute: Callable[[], CacheEntry]) -> CacheEntry:
    """Shared ``fetch`` implementation on top of ``read``/``write``."""
    cached = cache.read(key)
    if cached is not None:
        return cached
    value = compute()
    cache.write(key, value)
    return value
