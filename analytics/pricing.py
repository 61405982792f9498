"""
Rule-based pricing advice.

- suggestions: discount overstocked items, nudge up low-margin fast sellers
- competitor comparison: positions our price against a simulated market band
- automatic adjustments: auto-applied overstock discounts and approval-gated increases
"""

import logging
import math
from collections.abc import Mapping, Sequence

import numpy as np

from config.config import PricingConfig
from models.analytics import (
    CompetitorPricePoint,
    CompetitorPricingReport,
    CompetitorSummary,
    PriceAdjustment,
    PriceAdjustmentPlan,
    PricingSuggestion,
    StockRecommendation,
)
from models.enums import MarketPosition, Urgency
from models.sales import Product
from utils.stats import round_half_up

logger = logging.getLogger(__name__)


def margin_percent(product: Product, assumed_cost_ratio: float = 0.6) -> float:
    """Catalog margin; cost defaults to ``assumed_cost_ratio`` of the price when unknown."""
    price = product.base_price
    cost = product.cost_price if product.cost_price else price * assumed_cost_ratio
    return (price - cost) / price * 100


def overstock_discount(days_of_stock: int, step_days: int, cap: int) -> int:
    """5% per ``step_days`` of cover beyond 90 days, capped."""
    return min(cap, math.floor((days_of_stock - 90) / step_days) * 5)


def pricing_suggestions(
    products: Sequence[Product],
    recommendations: Mapping[str, StockRecommendation],
    config: PricingConfig | None = None,
) -> list[PricingSuggestion]:
    config = config or PricingConfig()
    suggestions = []

    for product in products[: config.suggestion_product_limit]:
        rec = recommendations.get(product.product_id)
        if rec is None or product.base_price <= 0:
            continue
        current_price = product.base_price
        margin = margin_percent(product, config.assumed_cost_ratio)

        if rec.urgency == Urgency.OVERSTOCK and rec.days_of_stock > 90:
            discount = overstock_discount(rec.days_of_stock, 30, config.max_overstock_discount)
            suggestions.append(
                PricingSuggestion(
                    product_id=product.product_id,
                    product_name=product.name,
                    current_price=current_price,
                    suggested_price=current_price * (1 - discount / 100),
                    reason=f"Overstock: {rec.days_of_stock} days of inventory",
                    impact=f"Reduce {discount}% to speed up turnover",
                )
            )

        if margin < config.low_margin_percent and rec.avg_daily_sales > config.high_demand_daily_sales:
            increase = config.price_increase_percent
            suggestions.append(
                PricingSuggestion(
                    product_id=product.product_id,
                    product_name=product.name,
                    current_price=current_price,
                    suggested_price=current_price * (1 + increase / 100),
                    reason=f"Low margin ({margin:.0f}%) with high demand",
                    impact=f"Raising {increase:g}% should hold demand",
                )
            )

    return suggestions


def classify_market_position(
    our_price: float, market_avg: float, threshold: float = 10.0
) -> tuple[MarketPosition, str]:
    diff = (our_price - market_avg) / market_avg * 100
    if diff < -threshold:
        return MarketPosition.BELOW, f"Price {abs(diff):.0f}% below market. Room to raise."
    if diff > threshold:
        return MarketPosition.ABOVE, f"Price {diff:.0f}% above market. Review competitiveness."
    return MarketPosition.COMPETITIVE, "Price within the competitive range."


def analyze_competitor_pricing(
    products: Sequence[Product],
    rng: np.random.Generator,
    config: PricingConfig | None = None,
) -> CompetitorPricingReport:
    """
    Compare prices against a simulated market.

    The market average is drawn uniformly within +/-5% of our price; the band
    around it is narrower for premium categories. ``rng`` supplies the draws so
    callers control reproducibility.
    """
    config = config or PricingConfig()
    analysis = []

    for product in products[: config.competitor_product_limit]:
        our_price = product.base_price
        if our_price <= 0:
            continue
        if product.category == config.premium_category:
            variance = config.premium_variance
        else:
            variance = config.default_variance
        market_avg = our_price * (0.95 + rng.random() * 0.10)
        position, suggestion = classify_market_position(
            our_price, market_avg, config.market_deviation_percent
        )
        analysis.append(
            CompetitorPricePoint(
                product_id=product.product_id,
                product_name=product.name,
                our_price=our_price,
                market_avg=round_half_up(market_avg, 2),
                market_min=round_half_up(market_avg * (1 - variance), 2),
                market_max=round_half_up(market_avg * (1 + variance), 2),
                position=position,
                suggestion=suggestion,
            )
        )

    summary = CompetitorSummary(
        below_market=sum(1 for a in analysis if a.position == MarketPosition.BELOW),
        competitive=sum(1 for a in analysis if a.position == MarketPosition.COMPETITIVE),
        above_market=sum(1 for a in analysis if a.position == MarketPosition.ABOVE),
    )
    return CompetitorPricingReport(analysis=analysis, summary=summary)


def automatic_price_adjustments(
    recommendations: Sequence[StockRecommendation],
    products_by_id: Mapping[str, Product],
    competitor: CompetitorPricingReport,
    config: PricingConfig | None = None,
) -> PriceAdjustmentPlan:
    """
    Price changes derived from stock health and market position.

    Stock-out risks are never touched. Deep overstock gets an automatic
    discount; an under-market price gets an increase that needs approval.
    """
    config = config or PricingConfig()
    positions = {point.product_id: point.position for point in competitor.analysis}
    adjustments = []

    for rec in recommendations:
        product = products_by_id.get(rec.product_id)
        if product is None or product.base_price <= 0:
            continue
        if rec.urgency == Urgency.CRITICAL:
            continue

        current_price = product.base_price
        new_price = current_price
        reason = ""
        auto_apply = False

        if rec.urgency == Urgency.OVERSTOCK and rec.days_of_stock > config.auto_discount_days:
            discount = overstock_discount(rec.days_of_stock, 15, config.max_auto_discount)
            new_price = current_price * (1 - discount / 100)
            reason = f"Critical overstock ({rec.days_of_stock} days). Automatic discount."
            auto_apply = True

        if positions.get(rec.product_id) == MarketPosition.BELOW and rec.urgency != Urgency.OVERSTOCK:
            increase = config.price_increase_percent
            new_price = current_price * (1 + increase / 100)
            reason = f"Price below market. Proposed +{increase:g}% adjustment."
            auto_apply = False

        if new_price == current_price:
            continue
        adjustments.append(
            PriceAdjustment(
                product_id=rec.product_id,
                product_name=rec.product_name,
                current_price=current_price,
                new_price=round_half_up(new_price, 2),
                change_percent=round_half_up((new_price / current_price - 1) * 100, 1),
                reason=reason,
                auto_apply=auto_apply,
            )
        )

    auto_count = sum(1 for a in adjustments if a.auto_apply)
    logger.debug(f"{len(adjustments)} price adjustments, {auto_count} auto-applied")
    return PriceAdjustmentPlan(
        adjustments=adjustments,
        auto_apply_count=auto_count,
        pending_approval_count=len(adjustments) - auto_count,
    )
