"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, shiprate.toml only contains
overrides.  A store rating a single service needs only one [[services]]
entry.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from shiprate.domain.services import ShippingService


class ShippingConfig(BaseModel):
    """[shipping] section.

    Weights in the catalog are pounds by default; carriers rate in
    ounces, hence the multiplier of 16.  ``handling_fee`` is in carrier
    cents and added to every rate.
    """

    model_config = {"frozen": True}

    unit_multiplier: float = 16.0
    default_weight: float = 0.0
    max_weight_per_package: float = Field(default=0.0, ge=0)
    handling_fee: float = 0.0


class CacheConfig(BaseModel):
    """[cache] section."""

    model_config = {"frozen": True}

    backend: Literal["memory", "sqlite"] = "memory"
    ttl_seconds: int | None = Field(default=3600, gt=0)
    path: str = ".shiprate/cache.db"


class ShiprateConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    locale: str = "en"
    shipping: ShippingConfig = Field(default_factory=ShippingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    services: list[ShippingService] = Field(default_factory=list)
