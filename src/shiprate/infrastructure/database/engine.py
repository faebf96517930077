"""Database engine setup for the SQLite cache.

SQLite in WAL mode lets several worker processes share one rate cache.
SQLAlchemy Core (not ORM) is enough: the cache is a single key-value table.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from shiprate.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL mode enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(db_path: Path) -> Engine:
    """Create the parent directory and tables for a cache at *db_path*.

    Safe to call on an existing cache file.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    return engine
