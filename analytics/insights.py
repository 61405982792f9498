"""
Dashboard composition: the insights summary and marketing alerts.
"""

from collections.abc import Sequence
from datetime import datetime

from models.analytics import (
    AnomalyAlert,
    DemandPrediction,
    InsightsCounts,
    InsightsSummary,
    MarketingAlert,
    MarketingAlertReport,
    MarketingSummary,
    StockRecommendation,
)
from models.enums import (
    SEVERITY_RANK,
    AlertSeverity,
    AnomalyType,
    CustomerSegment,
    MarketingAlertType,
    Trend,
    Urgency,
)
from models.sales import SegmentCount

TRENDING_ALERT_PERCENT = 20.0
AT_RISK_ALERT_MIN = 5
HIGH_SEASON_MONTHS = (12, 1)


def build_insights_summary(
    predictions: Sequence[DemandPrediction],
    recommendations: Sequence[StockRecommendation],
    alerts: Sequence[AnomalyAlert],
) -> InsightsSummary:
    trending_up = [p for p in predictions if p.trend == Trend.UP]
    critical = [r for r in recommendations if r.urgency == Urgency.CRITICAL]
    high_alerts = [a for a in alerts if a.severity == AlertSeverity.HIGH]

    return InsightsSummary(
        summary=InsightsCounts(
            total_products=len(predictions),
            trending_up=len(trending_up),
            trending_down=sum(1 for p in predictions if p.trend == Trend.DOWN),
            critical_stock_items=len(critical),
            high_priority_alerts=len(high_alerts),
        ),
        top_trending=sorted(trending_up, key=lambda p: p.trend_percent, reverse=True)[:5],
        critical_stock=critical[:10],
        high_alerts=high_alerts[:10],
    )


def _segment_count(segments: Sequence[SegmentCount], segment: CustomerSegment) -> int:
    return next((s.count for s in segments if s.segment == segment), 0)


def build_marketing_alerts(
    alerts: Sequence[AnomalyAlert],
    predictions: Sequence[DemandPrediction],
    segments: Sequence[SegmentCount],
    now: datetime,
) -> MarketingAlertReport:
    """Turn inventory, demand and CRM signals into prioritized marketing actions."""
    marketing: list[MarketingAlert] = []

    deadstock_count = sum(1 for a in alerts if a.type == AnomalyType.DEADSTOCK)
    if deadstock_count > 0:
        marketing.append(
            MarketingAlert(
                type=MarketingAlertType.ACTION_REQUIRED,
                priority=AlertSeverity.HIGH,
                title="Products Without Movement",
                message=f"{deadstock_count} products without sales in 90+ days. A clearance campaign is recommended.",
                action="Create clearance promotion",
                data={"count": deadstock_count},
            )
        )

    trending = [
        p for p in predictions if p.trend == Trend.UP and p.trend_percent > TRENDING_ALERT_PERCENT
    ]
    if trending:
        marketing.append(
            MarketingAlert(
                type=MarketingAlertType.OPPORTUNITY,
                priority=AlertSeverity.MEDIUM,
                title="Trending Products",
                message=f"{len(trending)} products growing >20%. Opportunity to feature in marketing.",
                action="Create best-seller campaign",
                data={"products": [p.product_name for p in trending[:5]]},
            )
        )

    at_risk = _segment_count(segments, CustomerSegment.AT_RISK)
    if at_risk > AT_RISK_ALERT_MIN:
        marketing.append(
            MarketingAlert(
                type=MarketingAlertType.ACTION_REQUIRED,
                priority=AlertSeverity.HIGH,
                title="Customers At Risk",
                message=f"{at_risk} customers at risk of churning. Retention campaign recommended.",
                action="Send reactivation campaign",
                data={"count": at_risk},
            )
        )

    champions = _segment_count(segments, CustomerSegment.CHAMPIONS)
    if champions > 0:
        marketing.append(
            MarketingAlert(
                type=MarketingAlertType.OPPORTUNITY,
                priority=AlertSeverity.LOW,
                title="VIP Customers",
                message=f"{champions} champion customers. Opportunity for a referral program.",
                action="Launch referral program",
                data={"count": champions},
            )
        )

    if now.month in HIGH_SEASON_MONTHS:
        marketing.append(
            MarketingAlert(
                type=MarketingAlertType.INFO,
                priority=AlertSeverity.MEDIUM,
                title="High Season",
                message="Holiday season. Prepare stock and special promotions.",
                action="Review inventory for the holidays",
            )
        )

    summary = MarketingSummary(
        action_required=sum(1 for a in marketing if a.type == MarketingAlertType.ACTION_REQUIRED),
        opportunities=sum(1 for a in marketing if a.type == MarketingAlertType.OPPORTUNITY),
        info=sum(1 for a in marketing if a.type == MarketingAlertType.INFO),
    )
    return MarketingAlertReport(
        alerts=sorted(marketing, key=lambda a: SEVERITY_RANK[a.priority]),
        summary=summary,
    )
