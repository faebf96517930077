"""Command: print the rate cache key for a package."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from shiprate.commands._base import ShipCommand

if TYPE_CHECKING:
    from shiprate.commands._context import AppContext


@click.command(
    "cache-key",
    cls=ShipCommand,
    examples="""\
  shiprate cache-key order.json --carrier UPS
  shiprate cache-key order.json --carrier UPS --locale fr""",
)
@click.argument("order_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--carrier", required=True, help="Carrier name used in the key.")
@click.option("--locale", default=None, help="Locale (defaults to the configured one).")
@click.pass_obj
def cache_key(app: AppContext, order_file: Path, carrier: str, locale: str | None) -> None:
    """Print the rate and transit-time cache keys for ORDER_FILE."""
    from shiprate.domain.cache_keys import build_cache_key, contents_digest, timings_key
    from shiprate.services.result import ServiceResult

    package = app.load_package(order_file)
    key = build_cache_key(package, carrier=carrier, locale=locale or app.settings.locale)
    app.emit(
        ServiceResult(
            ok=True,
            op="cache_key",
            data={
                "key": key,
                "timings_key": timings_key(key),
                "contents_digest": contents_digest(package),
            },
        )
    )
