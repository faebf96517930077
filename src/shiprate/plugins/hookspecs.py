"""Pluggy hook specifications for shiprate extensions.

Carrier integrations ship as plugins that contribute service capability
records.  The calculator never special-cases a carrier; it only consumes
the records.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from shiprate.domain.services import ShippingService

hookspec = pluggy.HookspecMarker("shiprate")
hookimpl = pluggy.HookimplMarker("shiprate")


class ShiprateHookSpec:
    """Hook specifications for the shiprate plugin system."""

    @hookspec
    def register_shipping_services(self) -> list[ShippingService] | None:
        """Return additional shipping services offered by this plugin."""
