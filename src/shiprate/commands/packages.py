"""Command: show the parcels a package would be rated as."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from shiprate.commands._base import ShipCommand

if TYPE_CHECKING:
    from shiprate.commands._context import AppContext


@click.command(
    cls=ShipCommand,
    examples="""\
  shiprate packages order.json
  shiprate packages order.json --strategy weights --service "UPS Ground"
  shiprate --json packages order.json --strategy items""",
)
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--strategy",
    type=click.Choice(["cube", "weights", "items"]),
    default="cube",
    show_default=True,
    help="cube: one merged parcel; weights: split weight buckets; items: parcel per unit.",
)
@click.option(
    "--service", "service_name", default=None, help="Service whose weight limit applies."
)
@click.pass_obj
def packages(app: AppContext, order_file: Path, strategy: str, service_name: str | None) -> None:
    """Build shipment parcels for ORDER_FILE."""
    from shiprate.domain.errors import ShippingError
    from shiprate.domain.packing import PackageBuilder
    from shiprate.domain.services import ShippingService
    from shiprate.services.result import ServiceResult

    package = app.load_package(order_file)
    shipping = app.settings.shipping
    builder = PackageBuilder(
        unit_multiplier=shipping.unit_multiplier,
        default_weight=shipping.default_weight,
        max_weight_per_package=shipping.max_weight_per_package,
    )

    if strategy == "cube":
        parcels = builder.build(package)
        app.emit(
            ServiceResult(
                ok=True,
                op="packages",
                data={"strategy": strategy, "packages": [p.model_dump() for p in parcels]},
            )
        )
        return

    service = app.find_service(service_name) if service_name else None
    if service_name and service is None:
        message = f"No service {service_name!r}"
        app.emit(ServiceResult.failure("packages", "UNKNOWN_SERVICE", message))
        return
    service = service or ShippingService(carrier="", description="")

    try:
        max_weight = builder.max_weight(package, service)
        if strategy == "weights":
            data = {"weights": builder.weights(package, max_weight)}
        else:
            parcels = builder.item_packages(package, max_weight)
            data = {"packages": [p.model_dump() for p in parcels]}
    except ShippingError as exc:
        app.emit(ServiceResult.failure("packages", "OVERWEIGHT", exc.message))
        return

    app.emit(
        ServiceResult(
            ok=True,
            op="packages",
            data={"strategy": strategy, "max_weight": max_weight, **data},
        )
    )
