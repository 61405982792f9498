"""
Linear trend estimation over a daily sales series.
"""

from dataclasses import dataclass

from analytics.aggregation import DailySeries
from models.enums import Trend
from utils.stats import linear_regression


@dataclass(frozen=True)
class TrendLine:
    slope: float
    intercept: float


def estimate_trend(series: DailySeries) -> TrendLine:
    """OLS fit of quantity against day index (0..n-1)."""
    slope, intercept = linear_regression(series.day_index, series.quantity)
    return TrendLine(slope=slope, intercept=intercept)


def trend_percent(slope: float, avg_daily_sales: float) -> float:
    """Slope as a percentage of the mean; 0 when there is no demand."""
    if avg_daily_sales <= 0:
        return 0.0
    return slope / avg_daily_sales * 100


def classify_trend(percent: float, threshold: float = 5.0) -> Trend:
    if percent > threshold:
        return Trend.UP
    if percent < -threshold:
        return Trend.DOWN
    return Trend.STABLE
