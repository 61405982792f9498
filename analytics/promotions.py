"""
Campaign proposals assembled from anomaly, forecast and stock outputs.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta

from config.config import PromotionConfig
from models.analytics import (
    AnomalyAlert,
    DemandPrediction,
    Promotion,
    PromotionPlan,
    PromotionProduct,
    StockRecommendation,
)
from models.enums import AnomalyType, PromotionType, Trend, Urgency
from utils.stats import round_half_up


def _alert_product(alert: AnomalyAlert) -> PromotionProduct:
    return PromotionProduct(
        product_id=alert.product_id or "",
        product_name=alert.product_name or "",
        current_stock=int(alert.value),
    )


def _campaign(
    promotion_type: PromotionType,
    name: str,
    description: str,
    products: list[PromotionProduct],
    discount: int,
    impact: str,
    now: datetime,
    days: int,
) -> Promotion:
    return Promotion(
        type=promotion_type,
        name=name,
        description=description,
        products=products,
        suggested_discount=discount,
        estimated_impact=impact,
        start_date=now,
        end_date=now + timedelta(days=days),
    )


def generate_promotions(
    alerts: Sequence[AnomalyAlert],
    predictions: Sequence[DemandPrediction],
    recommendations: Sequence[StockRecommendation],
    now: datetime,
    config: PromotionConfig | None = None,
) -> PromotionPlan:
    """
    Build up to four campaigns:

    * DEADSTOCK_CLEARANCE when any product is deadstock
    * SLOW_MOVER when at least three products are slow-moving
    * BUNDLE pairing up-trending products with slow movers
    * VOLUME_DISCOUNT when at least two products are overstocked
    """
    config = config or PromotionConfig()
    deadstock = [a for a in alerts if a.type == AnomalyType.DEADSTOCK]
    slow_moving = [a for a in alerts if a.type == AnomalyType.SLOW_MOVING]
    promotions: list[Promotion] = []

    if deadstock:
        tied_up = sum(a.value * config.unit_capital_estimate for a in deadstock)
        promotions.append(
            _campaign(
                PromotionType.DEADSTOCK_CLEARANCE,
                "Stock Clearance",
                "Products without movement in 90+ days at special discounts",
                [_alert_product(a) for a in deadstock],
                config.clearance_discount,
                f"Free up ${tied_up:,.0f} in tied-up capital",
                now,
                config.clearance_days,
            )
        )

    if len(slow_moving) >= config.slow_mover_min_alerts:
        promotions.append(
            _campaign(
                PromotionType.SLOW_MOVER,
                "Seasonal Deals",
                "Selected products with slow turnover",
                [_alert_product(a) for a in slow_moving[:10]],
                config.slow_mover_discount,
                "Speed up turnover by 50%",
                now,
                config.slow_mover_days,
            )
        )

    fast_movers = [p for p in predictions if p.trend == Trend.UP][:3]
    slow_to_bundle = slow_moving[:3]
    if fast_movers and slow_to_bundle:
        # Stock of the fast movers is not looked up for bundles
        products = [
            PromotionProduct(product_id=p.product_id, product_name=p.product_name, current_stock=0)
            for p in fast_movers
        ] + [_alert_product(a) for a in slow_to_bundle]
        promotions.append(
            _campaign(
                PromotionType.BUNDLE,
                "Special Bundles",
                "Pair best sellers with special offers",
                products,
                config.bundle_discount,
                "Raise average ticket by 20%",
                now,
                config.bundle_days,
            )
        )

    overstock = [r for r in recommendations if r.urgency == Urgency.OVERSTOCK][:5]
    if len(overstock) >= config.volume_min_products:
        promotions.append(
            _campaign(
                PromotionType.VOLUME_DISCOUNT,
                "Volume Discount",
                "Buy more, save more on selected products",
                [
                    PromotionProduct(
                        product_id=r.product_id,
                        product_name=r.product_name,
                        current_stock=r.current_stock,
                    )
                    for r in overstock
                ],
                config.volume_discount,
                "Reduce inventory by 40%",
                now,
                config.volume_days,
            )
        )

    avg_discount = 0
    if promotions:
        avg_discount = int(
            round_half_up(sum(p.suggested_discount for p in promotions) / len(promotions))
        )
    return PromotionPlan(
        promotions=promotions,
        total_products=sum(len(p.products) for p in promotions),
        avg_discount=avg_discount,
    )
