"""Retail demand & inventory analytics engine"""

from .aggregation import DailySeries, aggregate_daily_sales
from .anomalies import (
    detect_margin_anomalies,
    detect_sales_anomalies,
    detect_slow_moving,
    merge_alerts,
)
from .forecasting import forecast_demand, rank_predictions
from .insights import build_insights_summary, build_marketing_alerts
from .pricing import (
    analyze_competitor_pricing,
    automatic_price_adjustments,
    pricing_suggestions,
)
from .promotions import generate_promotions
from .service import RetailIntelligenceService
from .stock import rank_recommendations, recommend_stock
from .trend import classify_trend, estimate_trend

__all__ = [
    # Time series
    "DailySeries",
    "aggregate_daily_sales",
    "estimate_trend",
    "classify_trend",
    # Demand & stock
    "forecast_demand",
    "rank_predictions",
    "recommend_stock",
    "rank_recommendations",
    # Anomalies
    "detect_margin_anomalies",
    "detect_sales_anomalies",
    "detect_slow_moving",
    "merge_alerts",
    # Pricing
    "pricing_suggestions",
    "analyze_competitor_pricing",
    "automatic_price_adjustments",
    # Marketing & dashboard
    "generate_promotions",
    "build_insights_summary",
    "build_marketing_alerts",
    # Facade
    "RetailIntelligenceService",
]
