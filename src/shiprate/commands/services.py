"""Command: list configured and plugin-provided shipping services."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shiprate.commands._base import ShipCommand

if TYPE_CHECKING:
    from shiprate.commands._context import AppContext


@click.command(cls=ShipCommand, examples="  shiprate services\n  shiprate --json services")
@click.pass_obj
def services(app: AppContext) -> None:
    """List shipping services available for quoting."""
    from shiprate.services.result import ServiceResult

    records = app.services()
    app.emit(
        ServiceResult(
            ok=True,
            op="services",
            data={
                "count": len(records),
                "services": [
                    {
                        "carrier": s.carrier,
                        "description": s.description,
                        "rate_name": s.rate_name,
                        "default_max_weight": s.default_max_weight,
                    }
                    for s in records
                ],
            },
        )
    )
