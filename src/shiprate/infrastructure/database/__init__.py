"""SQLite cache database via SQLAlchemy Core."""

from shiprate.infrastructure.database.engine import create_db_engine, init_database
from shiprate.infrastructure.database.schema import cache_entries, metadata

__all__ = [
    "cache_entries",
    "create_db_engine",
    "init_database",
    "metadata",
]
