"""
Sales, catalog and inventory facts consumed by the analytics engine.
Includes SaleLine, Product, InventorySnapshot and SegmentCount dataclasses.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from models.enums import CustomerSegment, SaleStatus


@dataclass(frozen=True)
class SaleLine:
    """
    One line of a sale: a quantity of a product sold at a unit price.
    Immutable fact produced by order processing.
    """

    product_id: str
    quantity: int
    unit_price: float
    sale_timestamp: datetime
    sale_status: SaleStatus = SaleStatus.COMPLETED

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError(
                f"SaleLine quantity must be >= 1, got {self.quantity} for {self.product_id}"
            )
        # Naive timestamps are taken to be UTC
        if self.sale_timestamp.tzinfo is None:
            object.__setattr__(
                self, "sale_timestamp", self.sale_timestamp.replace(tzinfo=timezone.utc)
            )

    @property
    def sale_date(self):
        """Calendar day of the sale in UTC."""
        return self.sale_timestamp.astimezone(timezone.utc).date()


@dataclass
class Product:
    """
    Catalog reference data for a product.
    """

    product_id: str
    name: str
    base_price: float
    cost_price: float | None = None
    category: str = ""
    brand: str = ""


@dataclass
class InventorySnapshot:
    """Quantity on hand for a product, summed over all locations."""

    product_id: str
    quantity_on_hand: int = 0


@dataclass
class SegmentCount:
    """Number of customers in a CRM segment."""

    segment: CustomerSegment
    count: int
