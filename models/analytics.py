"""
Result models produced by the analytics engine.

These are derived, per-request shapes. Field names are snake_case in Python and
serialize to camelCase (``model_dump(by_alias=True)``) for the presentation layer.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.enums import (
    AlertSeverity,
    AnomalyType,
    MarketingAlertType,
    MarketPosition,
    PromotionType,
    Trend,
    Urgency,
)


class EngineModel(BaseModel):
    """Base for engine results: camelCase aliases, constructible by field name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DemandPrediction(EngineModel):
    product_id: str
    product_name: str
    avg_daily_sales: float
    trend: Trend
    trend_percent: float
    predicted_next_7_days: int = Field(alias="predictedNext7Days")
    predicted_next_30_days: int = Field(alias="predictedNext30Days")
    confidence: float = Field(ge=0.0, le=1.0)


class StockRecommendation(EngineModel):
    product_id: str
    product_name: str
    current_stock: int
    avg_daily_sales: float
    days_of_stock: int
    reorder_point: int
    suggested_order_qty: int
    urgency: Urgency


class AnomalyAlert(EngineModel):
    type: AnomalyType
    severity: AlertSeverity
    product_id: str | None = None
    product_name: str | None = None
    message: str
    value: float
    expected_value: float | None = None
    z_score: float | None = None


class PricingSuggestion(EngineModel):
    product_id: str
    product_name: str
    current_price: float
    suggested_price: float
    reason: str
    impact: str


class CompetitorPricePoint(EngineModel):
    product_id: str
    product_name: str
    our_price: float
    market_avg: float
    market_min: float
    market_max: float
    position: MarketPosition
    suggestion: str


class CompetitorSummary(EngineModel):
    below_market: int = 0
    competitive: int = 0
    above_market: int = 0


class CompetitorPricingReport(EngineModel):
    analysis: list[CompetitorPricePoint]
    summary: CompetitorSummary


class PriceAdjustment(EngineModel):
    product_id: str
    product_name: str
    current_price: float
    new_price: float
    change_percent: float
    reason: str
    auto_apply: bool


class PriceAdjustmentPlan(EngineModel):
    adjustments: list[PriceAdjustment]
    auto_apply_count: int
    pending_approval_count: int


class PromotionProduct(EngineModel):
    product_id: str
    product_name: str
    current_stock: int


class Promotion(EngineModel):
    type: PromotionType
    name: str
    description: str
    products: list[PromotionProduct]
    suggested_discount: int
    estimated_impact: str
    start_date: datetime
    end_date: datetime


class PromotionPlan(EngineModel):
    promotions: list[Promotion]
    total_products: int
    avg_discount: int


class MarketingAlert(EngineModel):
    type: MarketingAlertType
    priority: AlertSeverity
    title: str
    message: str
    action: str | None = None
    data: dict | None = None


class MarketingSummary(EngineModel):
    action_required: int = 0
    opportunities: int = 0
    info: int = 0


class MarketingAlertReport(EngineModel):
    alerts: list[MarketingAlert]
    summary: MarketingSummary


class InsightsCounts(EngineModel):
    total_products: int
    trending_up: int
    trending_down: int
    critical_stock_items: int
    high_priority_alerts: int


class InsightsSummary(EngineModel):
    summary: InsightsCounts
    top_trending: list[DemandPrediction]
    critical_stock: list[StockRecommendation]
    high_alerts: list[AnomalyAlert]
