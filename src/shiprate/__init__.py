"""shiprate: carrier shipping rate estimation with cached lookups."""

__version__ = "0.3.0"
