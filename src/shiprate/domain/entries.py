"""Cache entries: what a rate or transit-time lookup leaves behind.

A lookup either produces a table or fails with a ShippingError; both are
cached so repeated requests within the TTL never hit the carrier again.
Entries are a tagged union on ``kind`` so they survive a JSON round trip
through any cache backend.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter

from shiprate.domain.errors import ShippingError


class RatesEntry(BaseModel):
    """Rate table: service name to price in carrier cents."""

    model_config = {"frozen": True}

    kind: Literal["rates"] = "rates"
    rates: dict[str, float] = Field(default_factory=dict)


class TransitEntry(BaseModel):
    """Transit times per service, or None when the carrier gave none."""

    model_config = {"frozen": True}

    kind: Literal["transit"] = "transit"
    times: dict[str, timedelta] | None = None


class ErrorEntry(BaseModel):
    """A captured ShippingError."""

    model_config = {"frozen": True}

    kind: Literal["error"] = "error"
    message: str

    @classmethod
    def from_error(cls, error: ShippingError) -> ErrorEntry:
        return cls(message=error.message)

    def to_error(self) -> ShippingError:
        return ShippingError(self.message)


CacheEntry = Annotated[RatesEntry | TransitEntry | ErrorEntry, Field(discriminator="kind")]

cache_entry_adapter: TypeAdapter[CacheEntry] = TypeAdapter(CacheEntry)


def dump_entry(entry: CacheEntry) -> str:
    return cache_entry_adapter.dump_json(entry).decode("utf-8")


def load_entry(raw: str | bytes) -> CacheEntry:
    return cache_entry_adapter.validate_json(raw)
