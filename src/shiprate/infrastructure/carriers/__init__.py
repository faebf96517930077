"""Carrier boundary: the rate-lookup capability and its error shapes."""

from shiprate.infrastructure.carriers.base import (
    CarrierError,
    CarrierResponse,
    CarrierResponseError,
    RateEstimate,
    RateLookup,
    RateResponse,
    TransitTimeLookup,
)
from shiprate.infrastructure.carriers.static import StaticRateLookup

__all__ = [
    "CarrierError",
    "CarrierResponse",
    "CarrierResponseError",
    "RateEstimate",
    "RateLookup",
    "RateResponse",
    "StaticRateLookup",
    "TransitTimeLookup",
]
