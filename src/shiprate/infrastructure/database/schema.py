"""SQLAlchemy Core table definitions for the shiprate cache database."""

from __future__ import annotations

from sqlalchemy import REAL, Column, Index, MetaData, Table, Text

metadata = MetaData()

cache_entries = Table(
    "cache_entries",
    metadata,
    Column("key", Text, primary_key=True),
    Column("kind", Text, nullable=False),  # rates | transit | error
    Column("payload", Text, nullable=False),  # JSON-encoded CacheEntry
    Column("created_at", REAL, nullable=False),
    Column("expires_at", REAL),  # unix epoch; NULL never expires
    Index("ix_cache_entries_expires_at", "expires_at"),
)
