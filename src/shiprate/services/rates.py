"""RateProvider: adapter between the calculator and a carrier client.

Turns carrier replies into plain tables and every carrier failure into a
ShippingError whose message is the most specific description available.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping, Sequence
from datetime import timedelta
from typing import Any

from shiprate.domain.errors import ShippingError
from shiprate.domain.types import Location, ShipmentPackage
from shiprate.infrastructure.carriers.base import CarrierError, CarrierResponse, RateLookup

logger = logging.getLogger(__name__)

DROPOFF_TYPE = "REQUEST_COURIER"

# Where carriers put a human-readable description in their error documents.
GENERIC_ERROR_PATH = ("Response", "Error", "ErrorDescription")
EPARCEL_ERROR_PATH = ("eparcel", "error", "statusMessage")


def _dig(params: Mapping[str, Any], path: Sequence[str]) -> Any:
    node: Any = params
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return None
        node = node[key]
    return node


def describe_carrier_error(error: CarrierError, *, carrier_specific: bool = True) -> str:
    """Best available message for *error*.

    Tries the generic ``Response.Error.ErrorDescription`` field, then (when
    *carrier_specific*) Canada Post's ``eparcel.error.statusMessage``, then
    falls back to the exception message.
    """
    response = getattr(error, "response", None)
    if isinstance(response, CarrierResponse):
        paths = [GENERIC_ERROR_PATH]
        if carrier_specific:
            paths.append(EPARCEL_ERROR_PATH)
        for path in paths:
            description = _dig(response.params, path)
            if description is not None:
                return str(description)
    return error.message


def normalize_service_name(name: str | bytes) -> str:
    """Decode as UTF-8 and resolve HTML entities (``UPS Ground&#174;``)."""
    if isinstance(name, bytes):
        name = name.decode("utf-8", errors="replace")
    return html.unescape(name)


class RateProvider:
    """Calls one carrier and normalizes its answers."""

    def __init__(self, lookup: RateLookup) -> None:
        self._lookup = lookup

    @property
    def carrier(self) -> str:
        return self._lookup.name

    @property
    def supports_transit_time(self) -> bool:
        return callable(getattr(self._lookup, "find_time_in_transit", None))

    def fetch_rates(
        self,
        origin: Location,
        destination: Location,
        packages: Sequence[ShipmentPackage],
    ) -> dict[str, float]:
        """Rate table for the shipment: service name to price in cents.

        Raises:
            ShippingError: The carrier rejected the request.
        """
        try:
            response = self._lookup.find_rates(
                origin, destination, packages, dropoff_type=DROPOFF_TYPE
            )
        except CarrierError as exc:
            message = describe_carrier_error(exc)
            logger.warning("Rate lookup failed for %s: %s", self.carrier, message)
            raise ShippingError.from_detail(message) from exc

        rates = {normalize_service_name(r.service_name): r.price for r in response.rates}
        logger.debug("%s returned %d rates", self.carrier, len(rates))
        return rates

    def fetch_transit_time(
        self,
        origin: Location,
        destination: Location,
        packages: Sequence[ShipmentPackage],
    ) -> dict[str, timedelta] | None:
        """Transit times per service, or None if the carrier cannot tell.

        Raises:
            ShippingError: The carrier rejected the request.
        """
        if not self.supports_transit_time:
            return None
        try:
            response = self._lookup.find_time_in_transit(  # type: ignore[attr-defined]
                origin, destination, packages
            )
        except CarrierError as exc:
            message = describe_carrier_error(exc, carrier_specific=False)
            logger.warning("Transit lookup failed for %s: %s", self.carrier, message)
            raise ShippingError.from_detail(message) from exc

        if not isinstance(response, Mapping):
            return None
        return {normalize_service_name(name): duration for name, duration in response.items()}
