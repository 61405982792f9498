"""
Demo script for the retail demand & inventory intelligence engine.

Generates a synthetic sales history, loads it into an in-memory repository and
prints forecasts, stock recommendations, anomalies, pricing advice, promotions
and the dashboard summary.
"""

import asyncio
from datetime import timedelta

import numpy as np
import pandas as pd

from analytics.service import RetailIntelligenceService
from config.config import EngineConfig
from connectors.sales_repository import InMemorySalesRepository
from models.enums import CustomerSegment
from models.sales import SegmentCount
from utils.data_generation import generate_synthetic_sales_history
from utils.logger import get_logger

logger = get_logger("intelligence_demo")

END_DATE = "2024-06-30"


async def main():
    sales_df, product_df, inventory_df = generate_synthetic_sales_history(end_date_str=END_DATE, seed=7)
    repository = InMemorySalesRepository.from_frames(
        sales_df,
        product_df,
        inventory_df,
        segments=[
            SegmentCount(CustomerSegment.CHAMPIONS, 12),
            SegmentCount(CustomerSegment.AT_RISK, 9),
        ],
    )
    now = pd.Timestamp(END_DATE, tz="UTC").to_pydatetime() + timedelta(days=1)
    config = EngineConfig.from_env()
    service = RetailIntelligenceService(
        repository,
        config=config,
        rng=np.random.default_rng(config.pricing.competitor_seed or 7),
        clock=lambda: now,
    )
    logger.info(f"Loaded {len(product_df)} products and {len(sales_df)} sale lines")

    print("\n--- Demand predictions ---")
    for p in await service.get_all_predictions():
        print(
            f"{p.product_id} {p.product_name:<20} avg={p.avg_daily_sales:>6} "
            f"{p.trend.value:<6} ({p.trend_percent:+}%) 7d={p.predicted_next_7_days} "
            f"30d={p.predicted_next_30_days} conf={p.confidence}"
        )

    print("\n--- Stock recommendations ---")
    for r in await service.get_all_stock_recommendations():
        print(
            f"{r.product_id} {r.urgency.value:<9} stock={r.current_stock:<5} "
            f"days={r.days_of_stock:<4} reorder_at={r.reorder_point:<4} order={r.suggested_order_qty}"
        )

    print("\n--- Anomalies ---")
    for a in await service.detect_anomalies():
        print(f"[{a.severity.value}] {a.type.value} {a.product_id}: {a.message}")

    print("\n--- Pricing ---")
    for s in await service.get_pricing_suggestions():
        print(f"{s.product_id}: {s.current_price:.2f} -> {s.suggested_price:.2f} ({s.reason})")
    competitor = await service.analyze_competitor_pricing()
    print(f"Competitor summary: {competitor.summary.model_dump(by_alias=True)}")
    plan = await service.get_automatic_price_adjustments()
    print(f"Adjustments: {plan.auto_apply_count} automatic, {plan.pending_approval_count} pending")

    print("\n--- Promotions ---")
    promotions = await service.generate_promotions()
    for promo in promotions.promotions:
        print(f"{promo.type.value}: {promo.name} -{promo.suggested_discount}% ({len(promo.products)} products)")
    print(f"Average discount: {promotions.avg_discount}%")

    print("\n--- Marketing alerts ---")
    report = await service.get_marketing_alerts()
    for alert in report.alerts:
        print(f"[{alert.priority.value}] {alert.title}: {alert.message}")

    print("\n--- Dashboard ---")
    insights = await service.get_insights_summary()
    print(insights.summary.model_dump(by_alias=True))


if __name__ == "__main__":
    asyncio.run(main())
