"""Plugin discovery and the shipping service registry.

Discovery: entry points in the ``shiprate.plugins`` group via pluggy's
setuptools loader, plus plugins registered directly by the host
application.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable

import pluggy
from pydantic import ValidationError

from shiprate.domain.services import ShippingService
from shiprate.plugins.hookspecs import ShiprateHookSpec

PROJECT_NAME = "shiprate"
ENTRY_POINT_GROUP = "shiprate.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery and collects their shipping services."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ShiprateHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins; returns the names of all registered plugins."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def shipping_services(self) -> list[ShippingService]:
        """Services contributed by every registered plugin.

        A plugin whose hook raises or returns malformed records is skipped
        with a warning.
        """
        services: list[ShippingService] = []
        for plugin in self._pm.get_plugins():
            hook = getattr(plugin, "register_shipping_services", None)
            if hook is None:
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            try:
                contributed = hook()
            except Exception:
                logger.warning(
                    "Failed to collect shipping services from plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue
            if contributed is None:
                continue
            services.extend(self._validate_services(contributed, plugin_name))
        return services

    @staticmethod
    def _validate_services(
        contributed: Iterable[object], plugin_name: str
    ) -> list[ShippingService]:
        valid: list[ShippingService] = []
        for record in contributed:
            if isinstance(record, ShippingService):
                valid.append(record)
                continue
            try:
                valid.append(ShippingService.model_validate(record))
            except ValidationError:
                logger.warning(
                    "Skipping malformed shipping service %r from plugin %s",
                    record,
                    plugin_name,
                )
        return valid

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)
