"""
Daily time-series aggregation of sale lines.

Only days with at least one sale appear in a series; gaps are not filled.
"""

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

import pandas as pd

from models.enums import SaleStatus
from models.sales import SaleLine


@dataclass
class DailySeries:
    """Chronological per-day quantities for one product."""

    days: list[date] = field(default_factory=list)
    quantity: list[int] = field(default_factory=list)
    line_count: int = 0

    @property
    def day_index(self) -> list[int]:
        return list(range(len(self.days)))

    def __len__(self) -> int:
        return len(self.days)

    def has_sufficient_data(self, min_days: int = 7) -> bool:
        return len(self.days) >= min_days


def aggregate_daily_sales(lines: Iterable[SaleLine]) -> DailySeries:
    """Bucket sale quantities by UTC calendar day."""
    lines = list(lines)
    if not lines:
        return DailySeries()

    frame = pd.DataFrame(
        {
            "day": [line.sale_date for line in lines],
            "quantity": [line.quantity for line in lines],
        }
    )
    daily = frame.groupby("day", sort=True)["quantity"].sum()
    return DailySeries(
        days=list(daily.index),
        quantity=[int(q) for q in daily.to_numpy()],
        line_count=len(lines),
    )


def in_window(line: SaleLine, since: datetime, until: datetime | None = None) -> bool:
    """True when ``since <= timestamp`` and, if given, ``timestamp < until``."""
    if line.sale_timestamp < since:
        return False
    return until is None or line.sale_timestamp < until


def filter_completed(
    lines: Iterable[SaleLine], since: datetime, until: datetime | None = None
) -> list[SaleLine]:
    """Completed sale lines inside the ``[since, until)`` window."""
    return [
        line
        for line in lines
        if line.sale_status == SaleStatus.COMPLETED and in_window(line, since, until)
    ]


def total_quantity(
    lines: Iterable[SaleLine], since: datetime, until: datetime | None = None
) -> int:
    """Units sold inside the ``[since, until)`` window."""
    return sum(line.quantity for line in lines if in_window(line, since, until))


def group_by_product(lines: Iterable[SaleLine]) -> dict[str, list[SaleLine]]:
    """Split a batch of lines per product, keeping their original order."""
    grouped: dict[str, list[SaleLine]] = defaultdict(list)
    for line in lines:
        grouped[line.product_id].append(line)
    return dict(grouped)
