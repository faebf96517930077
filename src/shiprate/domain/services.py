"""Shipping service capability records.

A ShippingService describes one carrier offering ("UPS Ground", "Priority
Mail") and what limits it puts on packages.  The calculator consumes these
records through a single generic path; there is no per-service subclass.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from shiprate.domain.types import Country


class ShippingService(BaseModel):
    """One rateable carrier service.

    Attributes:
        carrier: Carrier name, part of every cache key.
        description: Human-readable name; also the key looked up in the
            carrier's rate table unless ``service_name`` overrides it.
        service_name: Rate-table key when it differs from ``description``.
        default_max_weight: Weight limit (ounces) for countries without an
            explicit entry.  ``0`` means unlimited.
        weight_limits: Per-country overrides keyed by ISO code.  ``None``
            marks the service as unavailable for that country.
    """

    model_config = {"frozen": True}

    carrier: str
    description: str
    service_name: str | None = None
    default_max_weight: float = 0.0
    weight_limits: dict[str, float | None] = Field(default_factory=dict)

    @property
    def rate_name(self) -> str:
        """Key of this service in the carrier's rate table."""
        return self.service_name or self.description

    def max_weight_for_country(self, country: Country) -> float | None:
        """Weight limit in ounces, ``0`` when unlimited, ``None`` when not offered."""
        return self.weight_limits.get(country.iso, self.default_max_weight)
