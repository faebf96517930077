"""ShippingCalculator: public entry points for one carrier service.

Composes the package builder, cache keys, the rate cache, and the rate
provider.  One calculator serves one :class:`ShippingService`; a
storefront offering five services builds five calculators that share a
cache and a carrier client.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import timedelta

from shiprate.config.models import ShippingConfig
from shiprate.domain.cache_keys import build_cache_key, timings_key
from shiprate.domain.entries import ErrorEntry, RatesEntry, TransitEntry
from shiprate.domain.errors import ShippingError
from shiprate.domain.packing import PackageBuilder, check_shippable
from shiprate.domain.services import ShippingService
from shiprate.domain.types import Address, ContentItem, LineItem, Location, Package, StockLocation
from shiprate.infrastructure.cache.base import Cache
from shiprate.infrastructure.carriers.base import RateLookup
from shiprate.services.rate_cache import RateCache
from shiprate.services.rates import RateProvider

logger = logging.getLogger(__name__)

COMMERCIAL = "commercial"


def build_location(address: Address, *, address_type: str | None = COMMERCIAL) -> Location:
    """Carrier-facing location for a ship address or stock location."""
    return Location(
        country=address.country.iso,
        state=address.best_state,
        city=address.city,
        zip=address.zipcode,
        address_type=address_type,
    )


class ShippingCalculator:
    """Rate, availability, and transit time for one shipping service.

    Args:
        service: Capability record of the service being priced.
        lookup: Carrier client that prices the service.
        cache: Shared cache backend for rate tables and failures.
        config: Units, default weight, package limit, and handling fee.
        locale: Active locale; part of the cache key since carriers may
            localize service names.
    """

    def __init__(
        self,
        service: ShippingService,
        lookup: RateLookup,
        cache: Cache,
        *,
        config: ShippingConfig | None = None,
        locale: str = "en",
    ) -> None:
        self.service = service
        self.config = config or ShippingConfig()
        self.locale = locale
        self.provider = RateProvider(lookup)
        self.rate_cache = RateCache(cache)
        self.packages = PackageBuilder(
            unit_multiplier=self.config.unit_multiplier,
            default_weight=self.config.default_weight,
            max_weight_per_package=self.config.max_weight_per_package,
        )

    def cache_key(self, package: Package) -> str:
        return build_cache_key(package, carrier=self.provider.carrier, locale=self.locale)

    def is_available(self, package: Package) -> bool:
        """Whether this service can ship *package*.

        Known weight limits are checked before the carrier is asked.  A
        lookup that succeeds without a rate for this service (including an
        empty rate table) counts as unavailable.
        """
        try:
            check_shippable(package, self.service)
            return self.compute_cost(package) is not None
        except ShippingError as exc:
            logger.info("%s unavailable: %s", self.service.description, exc.message)
            return False

    def compute_cost(self, package: Package) -> float | None:
        """Cost in currency units, or None when the carrier gave no rate.

        Carrier prices are in cents; the handling fee is added before the
        conversion.  A failed lookup, fresh or cached, yields None.
        """
        origin = build_location(self._stock_location(package))
        destination = build_location(package.order.ship_address)

        def _compute() -> RatesEntry:
            parcels = self.packages.build(package)
            if not parcels:
                return RatesEntry()
            return RatesEntry(rates=self.provider.fetch_rates(origin, destination, parcels))

        entry = self.rate_cache.fetch_or_compute(self.cache_key(package), _compute)
        if isinstance(entry, ErrorEntry):
            logger.debug("No rate for %s: %s", self.service.description, entry.message)
            return None
        if not isinstance(entry, RatesEntry) or not entry.rates:
            return None

        rate = entry.rates.get(self.service.rate_name)
        if rate is None:
            return None
        return (rate + self.config.handling_fee) / 100.0

    def estimate_transit_time(
        self,
        line_items: Sequence[LineItem],
        stock_location: StockLocation,
    ) -> timedelta | None:
        """Time in transit for *line_items* shipped from *stock_location*.

        Raises:
            ShippingError: The transit lookup failed (now or within the TTL).
        """
        if not line_items:
            return None
        order = line_items[0].order
        package = Package(
            order=order,
            stock_location=stock_location,
            contents=tuple(
                ContentItem(variant=li.variant, quantity=li.quantity) for li in line_items
            ),
        )
        origin = build_location(stock_location, address_type=None)
        destination = build_location(order.ship_address, address_type=None)

        def _compute() -> TransitEntry:
            parcels = self.packages.build(package)
            times = self.provider.fetch_transit_time(origin, destination, parcels)
            return TransitEntry(times=times)

        entry = self.rate_cache.fetch_or_compute(timings_key(self.cache_key(package)), _compute)
        if isinstance(entry, ErrorEntry):
            raise entry.to_error()
        if not isinstance(entry, TransitEntry) or not entry.times:
            return None
        return entry.times.get(self.service.rate_name)

    @staticmethod
    def _stock_location(package: Package) -> StockLocation:
        if package.stock_location is None:
            raise ShippingError.from_detail("The package has no stock location to ship from.")
        return package.stock_location
