"""
Anomaly detection over recent sales and inventory.

Three independent scans are run and merged:
- margin outliers: per-line margin z-scores over the trailing week
- sales swings: this week's units against the average of the previous weeks
- slow movers: stocked products without recent sales (slow-moving / deadstock)
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime, timedelta

from analytics.aggregation import group_by_product, in_window, total_quantity
from config.config import AnomalyConfig
from models.analytics import AnomalyAlert
from models.enums import SEVERITY_RANK, AlertSeverity, AnomalyType
from models.sales import Product, SaleLine
from utils.stats import mean, std, z_score

logger = logging.getLogger(__name__)


def line_margin_percent(unit_price: float, cost_price: float) -> float:
    return (unit_price - cost_price) / unit_price * 100


def detect_margin_anomalies(
    lines: Iterable[SaleLine],
    products_by_id: Mapping[str, Product],
    now: datetime,
    config: AnomalyConfig | None = None,
) -> list[AnomalyAlert]:
    """Flag sale lines whose margin sits more than two deviations below the mean."""
    config = config or AnomalyConfig()
    since = now - timedelta(days=config.margin_window_days)

    samples: list[tuple[Product, float]] = []
    for line in lines:
        if not in_window(line, since):
            continue
        product = products_by_id.get(line.product_id)
        # Lines without a known cost (or a free line) carry no margin
        if product is None or not product.cost_price or line.unit_price <= 0:
            continue
        samples.append((product, line_margin_percent(line.unit_price, product.cost_price)))

    if len(samples) < config.min_margin_samples:
        logger.debug(f"Margin scan skipped: {len(samples)} samples")
        return []

    margins = [margin for _, margin in samples]
    mu = mean(margins)
    sigma = std(margins)

    alerts = []
    for product, margin in samples:
        z = z_score(margin, mu, sigma)
        if z >= config.margin_z_medium:
            continue
        alerts.append(
            AnomalyAlert(
                type=AnomalyType.MARGIN,
                severity=AlertSeverity.HIGH if z < config.margin_z_high else AlertSeverity.MEDIUM,
                product_id=product.product_id,
                product_name=product.name,
                message=f"Abnormally low margin: {margin:.1f}%",
                value=margin,
                expected_value=mu,
                z_score=z,
            )
        )
    return alerts


def detect_sales_anomalies(
    products: Sequence[Product],
    lines: Iterable[SaleLine],
    now: datetime,
    config: AnomalyConfig | None = None,
) -> list[AnomalyAlert]:
    """Compare the trailing week with the weekly average of the weeks before it."""
    config = config or AnomalyConfig()
    week_start = now - timedelta(days=config.sales_window_days)
    history_start = week_start - timedelta(weeks=config.sales_history_weeks)
    by_product = group_by_product(lines)

    alerts = []
    for product in products[: config.sales_product_limit]:
        product_lines = by_product.get(product.product_id, [])
        this_week = total_quantity(product_lines, week_start)
        hist_avg_week = (
            total_quantity(product_lines, history_start, week_start) / config.sales_history_weeks
        )
        if hist_avg_week <= config.min_weekly_baseline:
            continue

        change_percent = (this_week - hist_avg_week) / hist_avg_week * 100
        if change_percent < config.drop_percent:
            severe = change_percent < config.severe_drop_percent
            alerts.append(
                AnomalyAlert(
                    type=AnomalyType.SALES_DROP,
                    severity=AlertSeverity.HIGH if severe else AlertSeverity.MEDIUM,
                    product_id=product.product_id,
                    product_name=product.name,
                    message=f"Sales drop: {change_percent:.0f}% vs average",
                    value=this_week,
                    expected_value=hist_avg_week,
                )
            )
        elif change_percent > config.spike_percent:
            alerts.append(
                AnomalyAlert(
                    type=AnomalyType.SALES_SPIKE,
                    severity=AlertSeverity.LOW,
                    product_id=product.product_id,
                    product_name=product.name,
                    message=f"Sales spike: +{change_percent:.0f}% vs average",
                    value=this_week,
                    expected_value=hist_avg_week,
                )
            )
    return alerts


def detect_slow_moving(
    products: Sequence[Product],
    lines: Iterable[SaleLine],
    inventory: Mapping[str, int],
    now: datetime,
    config: AnomalyConfig | None = None,
) -> list[AnomalyAlert]:
    """Stocked products with no sales in the slow-moving window; deadstock if none before it either."""
    config = config or AnomalyConfig()
    slow_since = now - timedelta(days=config.slow_moving_days)
    dead_since = now - timedelta(days=config.deadstock_days)
    by_product = group_by_product(lines)

    alerts = []
    for product in products:
        current_stock = inventory.get(product.product_id, 0)
        if current_stock <= 0:
            continue
        product_lines = by_product.get(product.product_id, [])
        if total_quantity(product_lines, slow_since) > 0:
            continue

        is_deadstock = not any(in_window(line, dead_since, slow_since) for line in product_lines)
        if is_deadstock:
            alert_type, severity = AnomalyType.DEADSTOCK, AlertSeverity.HIGH
            message = f"No sales in {config.deadstock_days}+ days. Stock: {current_stock}"
        else:
            alert_type, severity = AnomalyType.SLOW_MOVING, AlertSeverity.MEDIUM
            message = f"No sales in {config.slow_moving_days} days. Stock: {current_stock}"
        alerts.append(
            AnomalyAlert(
                type=alert_type,
                severity=severity,
                product_id=product.product_id,
                product_name=product.name,
                message=message,
                value=current_stock,
            )
        )
    return alerts


def merge_alerts(*groups: Iterable[AnomalyAlert]) -> list[AnomalyAlert]:
    """Concatenate detector outputs and order them HIGH, MEDIUM, LOW (stable)."""
    merged = [alert for group in groups for alert in group]
    return sorted(merged, key=lambda a: SEVERITY_RANK[a.severity])
