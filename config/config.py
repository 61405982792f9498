"""
Configuration classes for the retail demand & inventory intelligence engine.
Defines the policy constants of each analytics stage in a type-safe, extensible way.
Defaults are the production policy; environment variables may override them.
"""

import os
from dataclasses import dataclass, field


@dataclass
class ForecastConfig:
    window_days: int = 90
    min_sale_days: int = 7  # Fewer distinct sale-days => insufficient data
    trend_threshold_percent: float = 5.0
    confidence_sample_size: int = 50  # Sale lines needed for full sample confidence


@dataclass
class StockPolicyConfig:
    lead_time_days: int = 7
    safety_days: int = 3
    coverage_days: int = 30  # Order quantity targets this many days of cover
    overstock_days: int = 90
    no_sales_days_of_stock: int = 999  # Sentinel for "effectively infinite"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if self.lead_time_days < 0 or self.safety_days < 0:
            raise ValueError("lead_time_days and safety_days must be non-negative")


@dataclass
class AnomalyConfig:
    margin_window_days: int = 7
    min_margin_samples: int = 10
    margin_z_medium: float = -2.0
    margin_z_high: float = -3.0
    sales_window_days: int = 7
    sales_history_weeks: int = 4
    sales_product_limit: int = 50
    min_weekly_baseline: float = 5.0
    drop_percent: float = -50.0
    severe_drop_percent: float = -75.0
    spike_percent: float = 100.0
    slow_moving_days: int = 60
    deadstock_days: int = 90


@dataclass
class PricingConfig:
    suggestion_product_limit: int = 50
    competitor_product_limit: int = 30
    assumed_cost_ratio: float = 0.6  # Cost as a share of price when unknown
    low_margin_percent: float = 20.0
    high_demand_daily_sales: float = 5.0
    price_increase_percent: float = 5.0
    max_overstock_discount: int = 20
    max_auto_discount: int = 25
    auto_discount_days: int = 120
    market_deviation_percent: float = 10.0
    premium_category: str = "PREMIUM"
    premium_variance: float = 0.15
    default_variance: float = 0.25
    competitor_seed: int | None = None


@dataclass
class PromotionConfig:
    clearance_discount: int = 30
    clearance_days: int = 14
    slow_mover_discount: int = 15
    slow_mover_days: int = 7
    slow_mover_min_alerts: int = 3
    bundle_discount: int = 10
    bundle_days: int = 30
    volume_discount: int = 20
    volume_days: int = 21
    volume_min_products: int = 2
    unit_capital_estimate: float = 100.0  # Capital tied up per deadstock unit


@dataclass
class EngineConfig:
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    stock: StockPolicyConfig = field(default_factory=StockPolicyConfig)
    anomaly: AnomalyConfig = field(default_factory=AnomalyConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    promotion: PromotionConfig = field(default_factory=PromotionConfig)

    @classmethod
    def from_env(cls, environ=None) -> "EngineConfig":
        """
        Build a config from ``RETAIL_*`` environment variables, falling back to
        defaults. A project-level ``.env`` is loaded first when present.
        """
        if environ is None:
            from utils.env import load_project_dotenv

            load_project_dotenv()
            environ = os.environ

        config = cls()
        for var, (section, attr, cast) in ENV_OVERRIDES.items():
            raw = environ.get(var)
            if raw is None or raw == "":
                continue
            try:
                value = cast(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {var}: {raw!r}") from e
            setattr(getattr(config, section), attr, value)
        config.stock.validate()
        return config


ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "RETAIL_FORECAST_WINDOW_DAYS": ("forecast", "window_days", int),
    "RETAIL_MIN_SALE_DAYS": ("forecast", "min_sale_days", int),
    "RETAIL_TREND_THRESHOLD_PERCENT": ("forecast", "trend_threshold_percent", float),
    "RETAIL_LEAD_TIME_DAYS": ("stock", "lead_time_days", int),
    "RETAIL_SAFETY_DAYS": ("stock", "safety_days", int),
    "RETAIL_COVERAGE_DAYS": ("stock", "coverage_days", int),
    "RETAIL_OVERSTOCK_DAYS": ("stock", "overstock_days", int),
    "RETAIL_SALES_PRODUCT_LIMIT": ("anomaly", "sales_product_limit", int),
    "RETAIL_COMPETITOR_SEED": ("pricing", "competitor_seed", int),
}


# Example usage:
# config = EngineConfig.from_env()
# service = RetailIntelligenceService(repository, config=config)
