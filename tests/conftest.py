"""Shared pytest fixtures and test helpers for shiprate tests."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from shiprate.domain.services import ShippingService
from shiprate.domain.types import (
    Address,
    ContentItem,
    Country,
    Location,
    Order,
    Package,
    Product,
    ProductPackage,
    ShipmentPackage,
    State,
    StockLocation,
    Variant,
)
from shiprate.infrastructure.cache.memory import MemoryCache
from shiprate.infrastructure.carriers.base import CarrierError, RateEstimate, RateResponse

# ---------------------------------------------------------------------------
# Model builders
# ---------------------------------------------------------------------------


def make_address(
    iso: str = "US",
    state: str | None = "CA",
    city: str = "LA",
    zipcode: str = "90001",
    state_name: str | None = None,
) -> Address:
    return Address(
        country=Country(iso=iso),
        state=State(abbr=state) if state else None,
        state_name=state_name,
        city=city,
        zipcode=zipcode,
    )


def make_stock_location(location_id: int = 1) -> StockLocation:
    return StockLocation(
        id=location_id,
        name="Main warehouse",
        country=Country(iso="US"),
        state=State(abbr="NY", name="New York"),
        city="New York",
        zipcode="10001",
    )


def make_variant(
    variant_id: int = 7,
    weight: float = 1.0,
    templates: Sequence[tuple[float, float, float, float]] = (),
) -> Variant:
    """Variant whose product ships in ``(weight, length, width, height)`` templates."""
    return Variant(
        id=variant_id,
        weight=weight,
        product=Product(
            product_packages=tuple(
                ProductPackage(weight=w, length=length, width=width, height=height)
                for w, length, width, height in templates
            )
        ),
    )


def make_package(
    *items: tuple[Variant, int],
    number: str = "R100",
    address: Address | None = None,
    stock_location: StockLocation | None = None,
) -> Package:
    return Package(
        order=Order(number=number, ship_address=address or make_address()),
        stock_location=stock_location,
        contents=tuple(ContentItem(variant=v, quantity=q) for v, q in items),
    )


# ---------------------------------------------------------------------------
# Carrier stubs
# ---------------------------------------------------------------------------


class FakeRateLookup:
    """Rate lookup that records calls and replays canned answers."""

    def __init__(
        self,
        rates: Mapping[str | bytes, float] | None = None,
        *,
        error: CarrierError | None = None,
        name: str = "UPS",
    ) -> None:
        self.name = name
        self.rates = dict(rates or {})
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def find_rates(
        self,
        origin: Location,
        destination: Location,
        packages: Sequence[ShipmentPackage],
        **options: Any,
    ) -> RateResponse:
        self.calls.append(
            {
                "origin": origin,
                "destination": destination,
                "packages": list(packages),
                "options": options,
            }
        )
        if self.error is not None:
            raise self.error
        return RateResponse(
            rates=[
                RateEstimate(service_name=name, price=price) for name, price in self.rates.items()
            ]
        )


class FakeTransitLookup(FakeRateLookup):
    """Rate lookup that can also estimate time in transit."""

    def __init__(
        self,
        transit: Any = None,
        *,
        transit_error: CarrierError | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.transit = transit
        self.transit_error = transit_error
        self.transit_calls = 0

    def find_time_in_transit(
        self,
        origin: Location,
        destination: Location,
        packages: Sequence[ShipmentPackage],
    ) -> Any:
        self.transit_calls += 1
        if self.transit_error is not None:
            raise self.transit_error
        return self.transit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def ground() -> ShippingService:
    return ShippingService(carrier="UPS", description="Ground")


@pytest.fixture
def boxed_package() -> Package:
    """One variant with one 16x10x4 box template, shipped from a stock location."""
    variant = make_variant(7, weight=2.0, templates=[(2.0, 16.0, 10.0, 4.0)])
    return make_package((variant, 2), stock_location=make_stock_location())


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run CLI commands from an empty temp directory with no config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SHIPRATE_CONFIG", raising=False)


def write_order_file(path: Path, package: Package) -> Path:
    path.write_text(package.model_dump_json(), encoding="utf-8")
    return path
