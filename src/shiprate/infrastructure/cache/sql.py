"""SQLite-backed cache shared between processes."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.engine import Engine

from shiprate.domain.entries import CacheEntry, dump_entry, load_entry
from shiprate.infrastructure.cache.base import fetch_through
from shiprate.infrastructure.database.schema import cache_entries

logger = logging.getLogger(__name__)


class SqlCache:
    """Cache entries stored as JSON rows in the ``cache_entries`` table.

    Args:
        engine: Engine from :func:`~shiprate.infrastructure.database.init_database`.
        ttl_seconds: Entry lifetime; ``None`` keeps entries until cleared.
        clock: Wall-clock time source (expiry must agree across processes).
    """

    def __init__(
        self,
        engine: Engine,
        *,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._engine = engine
        self._ttl = ttl_seconds
        self._clock = clock

    def read(self, key: str) -> CacheEntry | None:
        now = self._clock()
        with self._engine.connect() as conn:
            row = conn.execute(
                select(cache_entries.c.payload, cache_entries.c.expires_at).where(
                    cache_entries.c.key == key
                )
            ).first()
        if row is None:
            return None
        if row.expires_at is not None and now >= row.expires_at:
            self.delete(key)
            return None
        try:
            return load_entry(row.payload)
        except ValidationError:
            logger.warning("Discarding unreadable cache entry %s", key, exc_info=True)
            self.delete(key)
            return None

    def write(self, key: str, value: CacheEntry) -> None:
        now = self._clock()
        values = {
            "kind": value.kind,
            "payload": dump_entry(value),
            "created_at": now,
            "expires_at": now + self._ttl if self._ttl is not None else None,
        }
        stmt = insert(cache_entries).values(key=key, **values)
        stmt = stmt.on_conflict_do_update(index_elements=[cache_entries.c.key], set_=values)
        with self._engine.begin() as conn:
            conn.execute(stmt)

    def delete(self, key: str) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(cache_entries).where(cache_entries.c.key == key))

    def clear(self) -> None:
        with self._engine.begin() as conn:
            conn.execute(delete(cache_entries))

    def purge_expired(self) -> int:
        """Delete expired rows, returning how many were removed."""
        now = self._clock()
        with self._engine.begin() as conn:
            result = conn.execute(
                delete(cache_entries).where(
                    cache_entries.c.expires_at.is_not(None),
                    cache_entries.c.expires_at <= now,
                )
            )
        return result.rowcount

    def fetch(self, key: str, compute: Callable[[], CacheEntry]) -> CacheEntry:
        return fetch_through(self, key, compute)
