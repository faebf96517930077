"""Carrier rate-lookup capability.

Carrier clients (UPS, USPS, Canada Post, ...) are external.  shiprate only
needs ``find_rates`` and, where the carrier offers it,
``find_time_in_transit``.  Clients report failures as CarrierError; when
the carrier answered with a structured error document it is attached as
``CarrierResponseError.response.params``.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Protocol, runtime_checkable

from shiprate.domain.types import Location, ShipmentPackage


@dataclass(frozen=True)
class RateEstimate:
    """One priced service.  ``price`` is in carrier cents."""

    service_name: str | bytes
    price: float


@dataclass(frozen=True)
class RateResponse:
    rates: list[RateEstimate] = field(default_factory=list)


@dataclass(frozen=True)
class CarrierResponse:
    """Parsed carrier reply attached to a failed request."""

    params: dict[str, Any] = field(default_factory=dict)
    message: str = ""


class CarrierError(Exception):
    """Any failure reported by a carrier client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CarrierResponseError(CarrierError):
    """The carrier answered, but with an error document."""

    def __init__(self, message: str, response: CarrierResponse | None = None) -> None:
        super().__init__(message)
        self.response = response


@runtime_checkable
class RateLookup(Protocol):
    """Minimum a carrier client must provide."""

    name: str

    def find_rates(
        self,
        origin: Location,
        destination: Location,
        packages: Sequence[ShipmentPackage],
        **options: Any,
    ) -> RateResponse: ...


@runtime_checkable
class TransitTimeLookup(Protocol):
    """Optional capability: carriers that can estimate time in transit."""

    def find_time_in_transit(
        self,
        origin: Location,
        destination: Location,
        packages: Sequence[ShipmentPackage],
    ) -> Mapping[str, timedelta] | None: ...
