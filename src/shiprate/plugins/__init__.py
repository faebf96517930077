"""Extension layer: plugin system via pluggy.

INVARIANT: Plugin failures are warnings, never errors.
"""

from shiprate.plugins.hookspecs import hookimpl
from shiprate.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
