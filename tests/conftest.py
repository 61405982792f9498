import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Ensure project root is on sys.path to allow `import analytics`, `import models`, etc.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from models.enums import SaleStatus  # noqa: E402
from models.sales import Product, SaleLine  # noqa: E402

FIXED_NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """A fixed 'current' instant all test histories are anchored to."""
    return FIXED_NOW


@pytest.fixture
def make_product():
    """Factory for catalog products with sensible defaults."""

    def _make(product_id="P1", name=None, base_price=10.0, cost_price=6.0, category="GROCERY"):
        return Product(
            product_id=product_id,
            name=name or f"Product {product_id}",
            base_price=base_price,
            cost_price=cost_price,
            category=category,
            brand="Acme",
        )

    return _make


@pytest.fixture
def daily_lines(now):
    """
    Factory for one completed sale line per day.

    ``quantities[i]`` is sold ``days_ago_start - i`` days before ``now``, so the
    last quantity is the most recent day.
    """

    def _make(product_id, quantities, days_ago_start=None, unit_price=10.0, status=SaleStatus.COMPLETED):
        start = days_ago_start if days_ago_start is not None else len(quantities)
        return [
            SaleLine(
                product_id=product_id,
                quantity=q,
                unit_price=unit_price,
                sale_timestamp=now - timedelta(days=start - i),
                sale_status=status,
            )
            for i, q in enumerate(quantities)
        ]

    return _make
