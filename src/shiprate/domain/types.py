"""Read model for rate lookups.

Orders, addresses, and products are owned by the storefront; shiprate only
reads them.  Every model is frozen so a Package cannot change while a rate
lookup is in flight.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Addresses ---


class Country(BaseModel):
    """Country identified by its ISO 3166-1 alpha-2 code."""

    model_config = {"frozen": True}

    iso: str


class State(BaseModel):
    """Structured state or province."""

    model_config = {"frozen": True}

    abbr: str
    name: str = ""


class Address(BaseModel):
    """Postal address.

    ``state`` is the structured record when the storefront knows one;
    ``state_name`` is the free-text fallback typed by the customer.
    """

    model_config = {"frozen": True}

    country: Country
    state: State | None = None
    state_name: str | None = None
    city: str = ""
    zipcode: str = ""

    @property
    def best_state(self) -> str | None:
        """State abbreviation when structured, else the free-text name."""
        return self.state.abbr if self.state else self.state_name


class StockLocation(Address):
    """Warehouse the package ships from."""

    id: int
    name: str = ""


# --- Catalog ---


class ProductPackage(BaseModel):
    """Box template a product ships in (weight plus outer dimensions)."""

    model_config = {"frozen": True}

    weight: float = 0.0
    length: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


class Product(BaseModel):
    model_config = {"frozen": True}

    name: str = ""
    product_packages: tuple[ProductPackage, ...] = ()


class Variant(BaseModel):
    model_config = {"frozen": True}

    id: int
    weight: float = 0.0
    product: Product = Field(default_factory=Product)


# --- Orders ---


class Order(BaseModel):
    model_config = {"frozen": True}

    number: str
    ship_address: Address


class ContentItem(BaseModel):
    """One variant and how many of it are in a package."""

    model_config = {"frozen": True}

    variant: Variant
    quantity: int = Field(default=1, gt=0)


class LineItem(BaseModel):
    """Order line, as passed to transit-time estimation."""

    model_config = {"frozen": True}

    order: Order
    variant: Variant
    quantity: int = Field(default=1, gt=0)


class Package(BaseModel):
    """Order-level package: what ships together from one stock location."""

    model_config = {"frozen": True}

    order: Order
    stock_location: StockLocation | None = None
    contents: tuple[ContentItem, ...] = ()

    @property
    def weight(self) -> float:
        """Catalog weight of the contents (variant weight times quantity)."""
        return sum(item.variant.weight * item.quantity for item in self.contents)


# --- Carrier-facing ---


class Location(BaseModel):
    """Address in the shape carriers expect."""

    model_config = {"frozen": True}

    country: str
    state: str | None = None
    city: str = ""
    zip: str = ""
    address_type: str | None = None


class ShipmentPackage(BaseModel):
    """Physical parcel handed to the carrier for rating."""

    model_config = {"frozen": True}

    weight: float
    dimensions: tuple[float, float, float] = (0.0, 0.0, 0.0)
    units: str = "imperial"
