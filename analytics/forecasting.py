"""
Demand forecasting from daily sales history.

A product's forecast is the mean daily quantity over the window, projected
forward with the linear trend of the series. Products with too few sale-days
get a zero-confidence, zero-demand prediction rather than an error.
"""

import logging
from collections.abc import Iterable, Sequence

from analytics.aggregation import DailySeries, aggregate_daily_sales
from analytics.trend import classify_trend, estimate_trend, trend_percent
from config.config import ForecastConfig
from models.analytics import DemandPrediction
from models.enums import Trend
from models.sales import Product, SaleLine
from utils.stats import mean, round_half_up, std

logger = logging.getLogger(__name__)


def insufficient_data_prediction(product: Product) -> DemandPrediction:
    return DemandPrediction(
        product_id=product.product_id,
        product_name=product.name,
        avg_daily_sales=0.0,
        trend=Trend.STABLE,
        trend_percent=0.0,
        predicted_next_7_days=0,
        predicted_next_30_days=0,
        confidence=0.0,
    )


def project_demand(avg_daily_sales: float, percent: float, days: int) -> int:
    """Units expected over ``days``, never negative."""
    return max(0, int(round_half_up(avg_daily_sales * days * (1 + percent / 100))))


def forecast_confidence(series: DailySeries, avg_daily_sales: float, sample_size: int) -> float:
    """
    Sample adequacy (sale lines / sample_size, capped at 1) times stability
    (1 - coefficient of variation, floored at 0).
    """
    if avg_daily_sales <= 0:
        return 0.0
    adequacy = min(1.0, series.line_count / sample_size)
    stability = 1 - min(1.0, std(series.quantity) / avg_daily_sales)
    return adequacy * stability


def forecast_demand(
    product: Product, lines: Iterable[SaleLine], config: ForecastConfig | None = None
) -> DemandPrediction:
    """
    Forecast demand for ``product`` from its completed sale lines inside the
    forecast window (the caller applies the window).
    """
    config = config or ForecastConfig()
    series = aggregate_daily_sales(lines)

    if not series.has_sufficient_data(config.min_sale_days):
        logger.debug(
            f"{product.product_id}: {len(series)} sale-days < {config.min_sale_days}, "
            "returning insufficient-data prediction"
        )
        return insufficient_data_prediction(product)

    avg_daily_sales = mean(series.quantity)
    slope = estimate_trend(series).slope
    percent = trend_percent(slope, avg_daily_sales)
    confidence = forecast_confidence(series, avg_daily_sales, config.confidence_sample_size)

    return DemandPrediction(
        product_id=product.product_id,
        product_name=product.name,
        avg_daily_sales=round_half_up(avg_daily_sales, 2),
        trend=classify_trend(percent, config.trend_threshold_percent),
        trend_percent=round_half_up(percent, 1),
        predicted_next_7_days=project_demand(avg_daily_sales, percent, 7),
        predicted_next_30_days=project_demand(avg_daily_sales, percent, 30),
        confidence=round_half_up(confidence, 2),
    )


def rank_predictions(predictions: Sequence[DemandPrediction]) -> list[DemandPrediction]:
    """Predictions with demand, highest average daily sales first."""
    with_demand = [p for p in predictions if p.avg_daily_sales > 0]
    return sorted(with_demand, key=lambda p: p.avg_daily_sales, reverse=True)
