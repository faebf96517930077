"""Build the configured cache backend."""

from __future__ import annotations

from pathlib import Path

from shiprate.config.models import CacheConfig
from shiprate.infrastructure.cache.base import Cache
from shiprate.infrastructure.cache.memory import MemoryCache
from shiprate.infrastructure.cache.sql import SqlCache
from shiprate.infrastructure.database.engine import init_database


def open_cache(config: CacheConfig, *, root: Path) -> Cache:
    """Cache for *config*; a relative SQLite path resolves against *root*."""
    if config.backend == "sqlite":
        db_path = Path(config.path)
        if not db_path.is_absolute():
            db_path = root / db_path
        return SqlCache(init_database(db_path), ttl_seconds=config.ttl_seconds)
    return MemoryCache(ttl_seconds=config.ttl_seconds)
