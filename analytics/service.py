"""
RetailIntelligenceService: the engine's entry point for the presentation layer.

Each public coroutine reads what it needs from a ``SalesRepository`` in a few
batched queries, then runs the pure analytics functions over that snapshot.
The service holds no state between calls besides its collaborators.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import numpy as np

from analytics.aggregation import filter_completed, group_by_product
from analytics.anomalies import (
    detect_margin_anomalies,
    detect_sales_anomalies,
    detect_slow_moving,
    merge_alerts,
)
from analytics.forecasting import forecast_demand, rank_predictions
from analytics.insights import build_insights_summary, build_marketing_alerts
from analytics.pricing import (
    analyze_competitor_pricing,
    automatic_price_adjustments,
    pricing_suggestions,
)
from analytics.promotions import generate_promotions
from analytics.stock import rank_recommendations, recommend_stock
from config.config import EngineConfig
from connectors.sales_repository import SalesRepository
from models.analytics import (
    AnomalyAlert,
    CompetitorPricingReport,
    DemandPrediction,
    InsightsSummary,
    MarketingAlertReport,
    PriceAdjustmentPlan,
    PricingSuggestion,
    PromotionPlan,
    StockRecommendation,
)
from models.sales import Product, SaleLine

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SalesSnapshot:
    """Everything one operation reads, fetched once and anchored at ``now``."""

    now: datetime
    products: list[Product]
    lines: list[SaleLine]
    inventory: dict[str, int]

    @property
    def products_by_id(self) -> dict[str, Product]:
        return {p.product_id: p for p in self.products}


class RetailIntelligenceService:
    """
    Demand forecasts, stock recommendations, anomaly alerts, pricing advice and
    promotional campaigns computed from a sales repository.
    """

    def __init__(
        self,
        repository: SalesRepository,
        config: EngineConfig | None = None,
        rng: np.random.Generator | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.repository = repository
        self.config = config or EngineConfig()
        self.rng = rng or np.random.default_rng(self.config.pricing.competitor_seed)
        self.clock = clock or utc_now

    # --- reads --- #

    def _now(self) -> datetime:
        """Read the clock once; naive times are taken as UTC like sale timestamps."""
        now = self.clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    def _history_days(self) -> int:
        anomaly = self.config.anomaly
        sales_days = anomaly.sales_window_days + anomaly.sales_history_weeks * 7
        return max(
            self.config.forecast.window_days,
            anomaly.margin_window_days,
            anomaly.deadstock_days,
            sales_days,
        )

    async def _load_snapshot(self) -> SalesSnapshot:
        now = self._now()
        products = await self.repository.find_all_products()
        lines = await self.repository.find_completed_sale_lines(
            since=now - timedelta(days=self._history_days())
        )
        inventory = await self.repository.inventory_levels()
        logger.debug(f"Snapshot at {now.isoformat()}: {len(products)} products, {len(lines)} lines")
        return SalesSnapshot(now=now, products=products, lines=lines, inventory=inventory)

    # --- pure passes over a snapshot --- #

    def _forecast_all(self, snapshot: SalesSnapshot) -> list[DemandPrediction]:
        since = snapshot.now - timedelta(days=self.config.forecast.window_days)
        by_product = group_by_product(filter_completed(snapshot.lines, since))
        return [
            forecast_demand(product, by_product.get(product.product_id, []), self.config.forecast)
            for product in snapshot.products
        ]

    def _recommend_all(
        self, snapshot: SalesSnapshot, predictions: list[DemandPrediction]
    ) -> list[StockRecommendation]:
        return [
            recommend_stock(p, snapshot.inventory.get(p.product_id, 0), self.config.stock)
            for p in predictions
        ]

    def _detect_all(self, snapshot: SalesSnapshot) -> list[AnomalyAlert]:
        anomaly = self.config.anomaly
        return merge_alerts(
            detect_margin_anomalies(snapshot.lines, snapshot.products_by_id, snapshot.now, anomaly),
            detect_sales_anomalies(snapshot.products, snapshot.lines, snapshot.now, anomaly),
            detect_slow_moving(
                snapshot.products, snapshot.lines, snapshot.inventory, snapshot.now, anomaly
            ),
        )

    # --- demand --- #

    async def predict_demand(
        self, product_id: str, window_days: int | None = None
    ) -> DemandPrediction | None:
        """Forecast for one product, or None when the product does not exist."""
        product = await self.repository.find_product(product_id)
        if product is None:
            logger.warning(f"predict_demand: product {product_id} not found")
            return None
        days = self.config.forecast.window_days if window_days is None else window_days
        lines = await self.repository.find_completed_sale_lines(
            since=self._now() - timedelta(days=days), product_id=product_id
        )
        return forecast_demand(product, lines, self.config.forecast)

    async def get_all_predictions(self) -> list[DemandPrediction]:
        snapshot = await self._load_snapshot()
        predictions = rank_predictions(self._forecast_all(snapshot))
        logger.info(f"Computed {len(predictions)} demand predictions")
        return predictions

    # --- stock --- #

    async def get_stock_recommendation(self, product_id: str) -> StockRecommendation | None:
        prediction = await self.predict_demand(product_id)
        if prediction is None:
            return None
        current_stock = await self.repository.sum_inventory(product_id)
        return recommend_stock(prediction, current_stock, self.config.stock)

    async def get_all_stock_recommendations(self) -> list[StockRecommendation]:
        snapshot = await self._load_snapshot()
        recommendations = rank_recommendations(
            self._recommend_all(snapshot, self._forecast_all(snapshot))
        )
        logger.info(f"Computed {len(recommendations)} stock recommendations")
        return recommendations

    # --- anomalies --- #

    async def detect_anomalies(self) -> list[AnomalyAlert]:
        snapshot = await self._load_snapshot()
        alerts = self._detect_all(snapshot)
        logger.info(f"Detected {len(alerts)} anomalies")
        return alerts

    # --- dashboard --- #

    async def get_insights_summary(self) -> InsightsSummary:
        snapshot = await self._load_snapshot()
        forecasts = self._forecast_all(snapshot)
        return build_insights_summary(
            rank_predictions(forecasts),
            rank_recommendations(self._recommend_all(snapshot, forecasts)),
            self._detect_all(snapshot),
        )

    # --- pricing --- #

    async def get_pricing_suggestions(self) -> list[PricingSuggestion]:
        snapshot = await self._load_snapshot()
        recommendations = {
            r.product_id: r for r in self._recommend_all(snapshot, self._forecast_all(snapshot))
        }
        suggestions = pricing_suggestions(snapshot.products, recommendations, self.config.pricing)
        logger.info(f"Generated {len(suggestions)} pricing suggestions")
        return suggestions

    async def analyze_competitor_pricing(self) -> CompetitorPricingReport:
        products = await self.repository.find_all_products()
        return analyze_competitor_pricing(products, self.rng, self.config.pricing)

    async def get_automatic_price_adjustments(self) -> PriceAdjustmentPlan:
        snapshot = await self._load_snapshot()
        recommendations = rank_recommendations(
            self._recommend_all(snapshot, self._forecast_all(snapshot))
        )
        competitor = analyze_competitor_pricing(snapshot.products, self.rng, self.config.pricing)
        plan = automatic_price_adjustments(
            recommendations, snapshot.products_by_id, competitor, self.config.pricing
        )
        logger.info(
            f"Price adjustments: {plan.auto_apply_count} automatic, "
            f"{plan.pending_approval_count} pending approval"
        )
        return plan

    # --- marketing --- #

    async def generate_promotions(self) -> PromotionPlan:
        snapshot = await self._load_snapshot()
        forecasts = self._forecast_all(snapshot)
        plan = generate_promotions(
            self._detect_all(snapshot),
            rank_predictions(forecasts),
            rank_recommendations(self._recommend_all(snapshot, forecasts)),
            snapshot.now,
            self.config.promotion,
        )
        logger.info(f"Generated {len(plan.promotions)} promotions over {plan.total_products} products")
        return plan

    async def get_marketing_alerts(self) -> MarketingAlertReport:
        snapshot = await self._load_snapshot()
        segments = await self.repository.find_customer_segment_counts()
        return build_marketing_alerts(
            self._detect_all(snapshot),
            rank_predictions(self._forecast_all(snapshot)),
            segments,
            snapshot.now,
        )
