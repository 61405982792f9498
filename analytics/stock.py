"""
Reorder-point and stock-health recommendations.
"""

import math
from collections.abc import Sequence

from config.config import StockPolicyConfig
from models.analytics import DemandPrediction, StockRecommendation
from models.enums import URGENCY_RANK, Urgency
from utils.stats import round_half_up


def classify_urgency(
    days_of_stock: float,
    reorder_point: int,
    avg_daily_sales: float,
    policy: StockPolicyConfig,
) -> Urgency:
    """
    CRITICAL inside the lead time, LOW inside the reorder cover
    (reorder_point / avg_daily_sales), OVERSTOCK beyond the overstock ceiling.
    """
    if days_of_stock <= policy.lead_time_days:
        return Urgency.CRITICAL
    # With no demand the reorder cover is undefined and never matches
    if avg_daily_sales > 0 and days_of_stock <= reorder_point / avg_daily_sales:
        return Urgency.LOW
    if days_of_stock > policy.overstock_days:
        return Urgency.OVERSTOCK
    return Urgency.OK


def recommend_stock(
    prediction: DemandPrediction,
    current_stock: int,
    policy: StockPolicyConfig | None = None,
) -> StockRecommendation:
    policy = policy or StockPolicyConfig()
    avg_daily_sales = prediction.avg_daily_sales

    reorder_point = math.ceil(avg_daily_sales * (policy.lead_time_days + policy.safety_days))
    if avg_daily_sales > 0:
        days_of_stock = current_stock / avg_daily_sales
    else:
        days_of_stock = float(policy.no_sales_days_of_stock)
    suggested_order_qty = max(0, math.ceil(avg_daily_sales * policy.coverage_days - current_stock))

    return StockRecommendation(
        product_id=prediction.product_id,
        product_name=prediction.product_name,
        current_stock=current_stock,
        avg_daily_sales=avg_daily_sales,
        days_of_stock=int(round_half_up(days_of_stock)),
        reorder_point=reorder_point,
        suggested_order_qty=suggested_order_qty,
        urgency=classify_urgency(days_of_stock, reorder_point, avg_daily_sales, policy),
    )


def rank_recommendations(
    recommendations: Sequence[StockRecommendation],
) -> list[StockRecommendation]:
    """Recommendations with demand, most urgent first."""
    with_demand = [r for r in recommendations if r.avg_daily_sales > 0]
    return sorted(with_demand, key=lambda r: URGENCY_RANK[r.urgency])
