"""Package building: turning order contents into carrier parcels.

Three strategies share one weight model (catalog weight times the unit
multiplier, so carriers always see their own unit):

- ``weights()``: per-unit weights split into buckets that respect the
  per-package limit.  Returns a sorted list of bucket weights.
- ``item_packages()``: one parcel per product package template per unit.
- ``build()``: every template merged into a single cube-shaped parcel.
  This is what rate requests use; the storefront has already split
  packages by its own rules, so no further splitting happens here.

INVARIANT: a single unit heavier than the limit can never be shipped and
raises OverweightError rather than producing an oversized bucket.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from shiprate.domain.errors import OverweightError
from shiprate.domain.types import Package, ShipmentPackage

if TYPE_CHECKING:
    from shiprate.domain.services import ShippingService

# Extra box size and filler weight when several templates share a box.
MULTI_ITEM_DIMENSION_FACTOR = 1.2
MULTI_ITEM_WEIGHT_FACTOR = 1.05


def resolve_max_weight(
    country_limit: float,
    *,
    max_weight_per_package: float,
    unit_multiplier: float,
) -> float:
    """Combine a service's country limit with the global per-package limit.

    Both limits use ``0`` for unlimited.  The global limit is configured in
    catalog units and converted with *unit_multiplier*; it wins when the
    country has no limit or when it is the tighter of the two.

    Examples:
        >>> resolve_max_weight(0, max_weight_per_package=10, unit_multiplier=16)
        160
        >>> resolve_max_weight(100, max_weight_per_package=10, unit_multiplier=16)
        100
        >>> resolve_max_weight(200, max_weight_per_package=0, unit_multiplier=16)
        200
    """
    global_limit = max_weight_per_package * unit_multiplier
    if global_limit <= 0:
        return country_limit
    if country_limit == 0 or global_limit < country_limit:
        return global_limit
    return country_limit


def valid_weight_for_package(package: Package, max_weight: float | None) -> bool:
    """``None`` means the service is not offered, ``0`` means no limit."""
    if max_weight is None:
        return False
    if max_weight == 0:
        return True
    return package.weight <= max_weight


def check_shippable(package: Package, service: ShippingService) -> None:
    """Raise OverweightError when *service* cannot carry *package* at all.

    Runs before any carrier call so known limitations never cost a lookup.
    """
    max_weight = service.max_weight_for_country(package.order.ship_address.country)
    if not valid_weight_for_package(package, max_weight):
        raise OverweightError(max_weight)


class PackageBuilder:
    """Build carrier parcels from a Package.

    Args:
        unit_multiplier: Catalog weight unit to carrier unit factor.
        default_weight: Catalog weight for variants with no positive weight.
        max_weight_per_package: Global per-package limit in catalog units,
            ``0`` for none.
    """

    def __init__(
        self,
        *,
        unit_multiplier: float = 1.0,
        default_weight: float = 0.0,
        max_weight_per_package: float = 0.0,
    ) -> None:
        self.unit_multiplier = unit_multiplier
        self.default_weight = default_weight
        self.max_weight_per_package = max_weight_per_package

    def max_weight(self, package: Package, service: ShippingService) -> float:
        """Effective per-package limit for *package* shipped with *service*."""
        country_limit = service.max_weight_for_country(package.order.ship_address.country)
        if country_limit is None:
            raise OverweightError(None)
        return resolve_max_weight(
            country_limit,
            max_weight_per_package=self.max_weight_per_package,
            unit_multiplier=self.unit_multiplier,
        )

    def unit_weight(self, variant_weight: float) -> float:
        weight = variant_weight if variant_weight > 0 else self.default_weight
        return weight * self.unit_multiplier

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def weights(self, package: Package, max_weight: float) -> list[float]:
        """Sorted bucket weights, each within *max_weight* (``<= 0``: no limit)."""
        buckets: list[float] = []
        for item in package.contents:
            unit = self.unit_weight(item.variant.weight)
            quantity = item.quantity
            if max_weight <= 0:
                buckets.append(unit * quantity)
            elif unit == 0:
                continue
            elif unit >= max_weight:
                raise OverweightError(max_weight)
            else:
                per_bucket = math.floor(max_weight / unit)
                if quantity <= per_bucket:
                    buckets.append(unit * quantity)
                    continue
                while quantity > 0:
                    bucket_quantity = min(per_bucket, quantity)
                    buckets.append(unit * bucket_quantity)
                    quantity -= bucket_quantity
        return sorted(w for w in buckets if w)

    def item_packages(self, package: Package, max_weight: float) -> list[ShipmentPackage]:
        """One parcel per template per unit ordered."""
        parcels: list[ShipmentPackage] = []
        for item in package.contents:
            for template in item.variant.product.product_packages:
                weight = template.weight * self.unit_multiplier
                if max_weight > 0 and weight > max_weight:
                    raise OverweightError(max_weight)
                parcel = ShipmentPackage(
                    weight=weight,
                    dimensions=(template.length, template.width, template.height),
                )
                parcels.extend([parcel] * item.quantity)
        return parcels

    def build(self, package: Package) -> list[ShipmentPackage]:
        """Merge every template into one cube-shaped parcel."""
        weight = 0.0
        volume = 0.0
        count = 0
        for item in package.contents:
            for template in item.variant.product.product_packages:
                weight += template.weight
                volume += template.volume
                count += 1

        dimension = volume ** (1 / 3)
        if count > 1:
            dimension *= MULTI_ITEM_DIMENSION_FACTOR
            weight *= MULTI_ITEM_WEIGHT_FACTOR

        return [
            ShipmentPackage(
                weight=weight * self.unit_multiplier,
                dimensions=(dimension, dimension, dimension),
            )
        ]
