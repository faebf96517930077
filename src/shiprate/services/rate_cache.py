"""RateCache: compute once, cache the outcome, failures included.

A carrier failure is cached like a success so that repeated requests
within the TTL short-circuit to the same ShippingError instead of
querying the carrier again.  This is the only place retries are
suppressed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from shiprate.domain.entries import CacheEntry, ErrorEntry
from shiprate.domain.errors import ShippingError
from shiprate.infrastructure.cache.base import Cache

logger = logging.getLogger(__name__)


class RateCache:
    """Fetch-or-compute wrapper over a :class:`Cache` backend."""

    def __init__(self, cache: Cache) -> None:
        self._cache = cache

    @property
    def cache(self) -> Cache:
        return self._cache

    def fetch_or_compute(self, key: str, compute: Callable[[], CacheEntry]) -> CacheEntry:
        """Return the entry stored under *key*, computing it on a miss.

        A ShippingError raised by *compute* is stored and returned as an
        :class:`ErrorEntry`.  Any other exception propagates and leaves the
        cache untouched.
        """
        computed = False

        def _compute() -> CacheEntry:
            nonlocal computed
            computed = True
            try:
                return compute()
            except ShippingError as exc:
                logger.info("Caching lookup failure under %s: %s", key, exc.message)
                return ErrorEntry.from_error(exc)

        entry = self._cache.fetch(key, _compute)
        logger.debug("Rate cache %s for %s (%s)", "miss" if computed else "hit", key, entry.kind)
        return entry

    def invalidate(self, key: str) -> None:
        self._cache.delete(key)
