"""Rate cache backends behind the :class:`Cache` protocol."""

from shiprate.infrastructure.cache.base import Cache
from shiprate.infrastructure.cache.factory import open_cache
from shiprate.infrastructure.cache.memory import MemoryCache
from shiprate.infrastructure.cache.sql import SqlCache

__all__ = ["Cache", "MemoryCache", "SqlCache", "open_cache"]
