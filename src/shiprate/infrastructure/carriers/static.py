"""File-backed rate lookup.

Replays a recorded carrier reply, which makes quotes reproducible offline::

    {
      "carrier": "UPS",
      "rates": [{"service_name": "Ground", "price": 1050}],
      "transit": {"Ground": "P3D"},
      "error": {"message": "...", "params": {"Response": {...}}}
    }

With ``error`` present every lookup raises CarrierResponseError.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import timedelta
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from shiprate.domain.types import Location, ShipmentPackage
from shiprate.infrastructure.carriers.base import (
    CarrierResponse,
    CarrierResponseError,
    RateEstimate,
    RateResponse,
)

_durations: TypeAdapter[dict[str, timedelta]] = TypeAdapter(dict[str, timedelta])


class StaticRateLookup:
    """Rate lookup answering every request from fixed data."""

    def __init__(self, data: Mapping[str, Any], *, name: str | None = None) -> None:
        self.name = name or str(data.get("carrier", "static"))
        self._rates = [
            RateEstimate(service_name=r["service_name"], price=float(r["price"]))
            for r in data.get("rates", [])
        ]
        transit = data.get("transit")
        self._transit = _durations.validate_python(transit) if transit is not None else None
        self._error = data.get("error")
        self.calls: list[str] = []

    @classmethod
    def from_file(cls, path: Path, *, name: str | None = None) -> StaticRateLookup:
        return cls(json.loads(path.read_text(encoding="utf-8")), name=name)

    def _raise_if_failing(self) -> None:
        if self._error is None:
            return
        message = self._error.get("message", "Carrier request failed")
        response = CarrierResponse(params=self._error.get("params", {}), message=message)
        raise CarrierResponseError(message, response=response)

    def find_rates(
        self,
        origin: Location,
        destination: Location,
        packages: Sequence[ShipmentPackage],
        **options: Any,
    ) -> RateResponse:
        self.calls.append("find_rates")
        self._raise_if_failing()
        return RateResponse(rates=list(self._rates))

    def find_time_in_transit(
        self,
        origin: Location,
        destination: Location,
        packages: Sequence[ShipmentPackage],
    ) -> dict[str, timedelta] | None:
        self.calls.append("find_time_in_transit")
        self._raise_if_failing()
        return dict(self._transit) if self._transit is not None else None
