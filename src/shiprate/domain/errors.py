"""ShippingError: the one error kind callers ever see.

Package-weight violations and carrier failures both surface as
ShippingError; only the message tells them apart.
"""

from __future__ import annotations

SHIPPING_ERROR_PREFIX = "Shipping Error"


class ShippingError(Exception):
    """A package cannot be rated by the selected service."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @classmethod
    def from_detail(cls, detail: str) -> ShippingError:
        """Build the error with the standard ``Shipping Error:`` prefix."""
        return cls(f"{SHIPPING_ERROR_PREFIX}: {detail}")


class OverweightError(ShippingError):
    """A unit or package exceeds the per-package weight limit."""

    def __init__(self, max_weight: float | None) -> None:
        super().__init__(
            f"{SHIPPING_ERROR_PREFIX}: The maximum per package weight for the selected "
            f"service from the selected country is {_format_weight(max_weight)} ounces."
        )
        self.max_weight = max_weight


def _format_weight(weight: float | None) -> str:
    if weight is None:
        return "unavailable"
    if float(weight).is_integer():
        return str(int(weight))
    return str(weight)
