"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy cache and plugin initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
from pydantic import ValidationError

from shiprate.output.formatters import format_result

if TYPE_CHECKING:
    from shiprate.config.settings import ShiprateSettings
    from shiprate.domain.services import ShippingService
    from shiprate.domain.types import Package
    from shiprate.infrastructure.cache.base import Cache
    from shiprate.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The cache is opened on first use so ``--help`` and ``--version`` never
    touch the SQLite file.
    """

    def __init__(self, settings: ShiprateSettings) -> None:
        self.settings = settings
        self._cache: Cache | None = None

        from shiprate.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def cache(self) -> Cache:
        """The configured cache backend (created lazily on first access)."""
        if self._cache is None:
            from shiprate.infrastructure.cache.factory import open_cache

            self._cache = open_cache(self.settings.cache, root=self.settings.root)
        return self._cache

    def services(self) -> list[ShippingService]:
        """Configured services followed by those contributed by plugins."""
        from shiprate.plugins.manager import PluginManager

        pm = PluginManager()
        pm.discover_and_load()
        return [*self.settings.services, *pm.shipping_services()]

    def find_service(self, name: str) -> ShippingService | None:
        for service in self.services():
            if name in (service.description, service.rate_name):
                return service
        return None

    @staticmethod
    def load_package(path: Path) -> Package:
        """Parse an order file (one Package as JSON)."""
        from shiprate.domain.types import Package

        try:
            return Package.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            raise click.ClickException(f"Invalid order file {path}: {exc}") from exc

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
