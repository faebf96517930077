"""Command: quote one service for a package from a recorded carrier reply."""

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
  shiprate quote order.json --rates ups.json --service Ground
  shiprate --json quote order.json --rates ups.json --service "UPS Ground" --transit""",
)
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--rates",
    "rates_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Recorded carrier reply (JSON).",
)
@click.option("--service", "service_name", required=True, help="Service to quote.")
@click.option("--transit", is_flag=True, help="Also estimate time in transit.")
@click.pass_obj
def quote(
    app: AppContext,
    order_file: Path,
    rates_file: Path,
    service_name: str,
    transit: bool,
) -> None:
    """Quote SERVICE for ORDER_FILE using the carrier reply in --rates."""
    from shiprate.domain.errors import ShippingError
    from shiprate.domain.services import ShippingService
    from shiprate.domain.types import LineItem
    from shiprate.infrastructure.carriers.static import StaticRateLookup
    from shiprate.services.calculator import ShippingCalculator
    from shiprate.services.result import ServiceResult

    package = app.load_package(order_file)
    lookup = StaticRateLookup.from_file(rates_file)
    service = app.find_service(service_name) or ShippingService(
        carrier=lookup.name, description=service_name
    )
    calculator = ShippingCalculator(
        service,
        lookup,
        app.cache,
        config=app.settings.shipping,
        locale=app.settings.locale,
    )

    available = calculator.is_available(package)
    cost = calculator.compute_cost(package) if available else None
    data: dict[str, object] = {
        "service": service.description,
        "carrier": lookup.name,
        "available": available,
        "cost": cost,
        "cache_key": calculator.cache_key(package),
    }

    if transit and package.stock_location is not None:
        line_items = [
            LineItem(order=package.order, variant=item.variant, quantity=item.quantity)
            for item in package.contents
        ]
        try:
            duration = calculator.estimate_transit_time(line_items, package.stock_location)
        except ShippingError as exc:
            app.emit(ServiceResult.failure("quote", "TRANSIT_FAILED", exc.message, **data))
            return
        data["transit_days"] = duration.total_seconds() / 86400 if duration else None

    app.emit(ServiceResult(ok=True, op="quote", data=data))
