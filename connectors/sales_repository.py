"""
Module: connectors.sales_repository

Data-access boundary of the analytics engine. ``SalesRepository`` is the
protocol the engine reads through; ``InMemorySalesRepository`` is an in-memory
implementation for demos and tests.
"""

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime
from typing import Protocol

import pandas as pd

from models.enums import SaleStatus
from models.sales import InventorySnapshot, Product, SaleLine, SegmentCount


class SalesRepository(Protocol):
    """Read-only access to products, completed sales, inventory and CRM segments."""

    async def find_product(self, product_id: str) -> Product | None: ...

    async def find_all_products(self) -> list[Product]: ...

    async def find_completed_sale_lines(
        self,
        since: datetime,
        product_id: str | None = None,
        until: datetime | None = None,
    ) -> list[SaleLine]: ...

    async def sum_inventory(self, product_id: str) -> int: ...

    async def inventory_levels(self) -> dict[str, int]: ...

    async def find_customer_segment_counts(self) -> list[SegmentCount]: ...


class InMemorySalesRepository:
    """
    In-memory sales repository. Products keep insertion order; inventory
    snapshots for the same product (one per location) are summed.
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        sale_lines: Iterable[SaleLine] = (),
        inventory: Iterable[InventorySnapshot] = (),
        segments: Iterable[SegmentCount] = (),
    ):
        self._products: dict[str, Product] = {p.product_id: p for p in products}
        self._sale_lines: list[SaleLine] = list(sale_lines)
        self._inventory: dict[str, int] = defaultdict(int)
        for snapshot in inventory:
            self._inventory[snapshot.product_id] += snapshot.quantity_on_hand
        self._segments: list[SegmentCount] = list(segments)

    @classmethod
    def from_frames(
        cls,
        sales_df: pd.DataFrame,
        product_df: pd.DataFrame,
        inventory_df: pd.DataFrame | None = None,
        segments: Iterable[SegmentCount] = (),
    ) -> "InMemorySalesRepository":
        """
        Build a repository from data frames shaped like
        ``utils.data_generation.generate_synthetic_sales_history`` output.
        """
        products = [
            Product(
                product_id=row.product_id,
                name=row.name,
                base_price=float(row.base_price),
                cost_price=None if pd.isna(row.cost_price) else float(row.cost_price),
                category=row.category,
                brand=getattr(row, "brand", ""),
            )
            for row in product_df.itertuples(index=False)
        ]
        lines = [
            SaleLine(
                product_id=row.product_id,
                quantity=int(row.quantity),
                unit_price=float(row.unit_price),
                sale_timestamp=pd.Timestamp(row.sale_timestamp).to_pydatetime(),
                sale_status=SaleStatus(row.sale_status),
            )
            for row in sales_df.itertuples(index=False)
        ]
        inventory = []
        if inventory_df is not None:
            inventory = [
                InventorySnapshot(product_id=row.product_id, quantity_on_hand=int(row.quantity_on_hand))
                for row in inventory_df.itertuples(index=False)
            ]
        return cls(products, lines, inventory, segments)

    def add_sale_line(self, line: SaleLine) -> None:
        self._sale_lines.append(line)

    def set_inventory(self, product_id: str, quantity: int) -> None:
        self._inventory[product_id] = quantity

    async def find_product(self, product_id: str) -> Product | None:
        """Get a product by ID."""
        return self._products.get(product_id)

    async def find_all_products(self) -> list[Product]:
        return list(self._products.values())

    async def find_completed_sale_lines(
        self,
        since: datetime,
        product_id: str | None = None,
        until: datetime | None = None,
    ) -> list[SaleLine]:
        """Completed lines with ``since <= timestamp (< until)``, optionally for one product."""
        return [
            line
            for line in self._sale_lines
            if line.sale_status == SaleStatus.COMPLETED
            and (product_id is None or line.product_id == product_id)
            and line.sale_timestamp >= since
            and (until is None or line.sale_timestamp < until)
        ]

    async def sum_inventory(self, product_id: str) -> int:
        return self._inventory.get(product_id, 0)

    async def inventory_levels(self) -> dict[str, int]:
        return dict(self._inventory)

    async def find_customer_segment_counts(self) -> list[SegmentCount]:
        return list(self._segments)
