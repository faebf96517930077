"""Cache keys for rate and transit-time lookups.

A key identifies one shipment: where it ships from, which carrier rates
it, which order it belongs to, where it goes, what is inside, and the
active locale.  MD5 is enough for the contents digest; the key only has
to be collision-resistant, not secret.

INVARIANT: the same shipment always yields the same key, in any process.
Contents are digested in their given order, so reordering changes the key.
"""

from __future__ import annotations

import hashlib
import re

from shiprate.domain.types import Package

TIMINGS_SUFFIX = "-timings"

_WHITESPACE = re.compile(r"\s+")


def contents_digest(package: Package) -> str:
    """MD5 hex digest over ``variantId_quantity`` pairs joined with ``|``."""
    pairs = "|".join(f"{item.variant.id}_{item.quantity}" for item in package.contents)
    return hashlib.md5(pairs.encode("utf-8")).hexdigest()


def build_cache_key(package: Package, *, carrier: str, locale: str) -> str:
    """Deterministic rate cache key for *package* rated by *carrier*.

    Examples:
        A package with no stock location starts directly with the carrier::

            UPS-R100-US-CA-LA-90001-<digest>-en
    """
    location = f"{package.stock_location.id}-" if package.stock_location else ""
    address = package.order.ship_address
    parts = [
        carrier,
        package.order.number,
        address.country.iso,
        address.best_state or "",
        address.city,
        address.zipcode,
        contents_digest(package),
        locale,
    ]
    return _WHITESPACE.sub("", location + "-".join(parts))


def timings_key(cache_key: str) -> str:
    """Transit-time key derived from a rate cache key."""
    return cache_key + TIMINGS_SUFFIX
