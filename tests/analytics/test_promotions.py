from datetime import timedelta

from analytics.promotions import generate_promotions
from models.analytics import AnomalyAlert, DemandPrediction, StockRecommendation
from models.enums import AlertSeverity, AnomalyType, PromotionType, Trend, Urgency


def _alert(product_id, alert_type, stock=10):
    severity = AlertSeverity.HIGH if alert_type == AnomalyType.DEADSTOCK else AlertSeverity.MEDIUM
    return AnomalyAlert(
        type=alert_type,
        severity=severity,
        product_id=product_id,
        product_name=product_id,
        message="",
        value=stock,
    )


def _prediction(product_id, trend):
    return DemandPrediction(
        product_id=product_id,
        product_name=product_id,
        avg_daily_sales=5.0,
        trend=trend,
        trend_percent=10.0 if trend == Trend.UP else 0.0,
        predicted_next_7_days=35,
        predicted_next_30_days=150,
        confidence=0.5,
    )


def _rec(product_id, urgency):
    return StockRecommendation(
        product_id=product_id,
        product_name=product_id,
        current_stock=500,
        avg_daily_sales=5.0,
        days_of_stock=100,
        reorder_point=50,
        suggested_order_qty=0,
        urgency=urgency,
    )


def _types(plan):
    return [p.type for p in plan.promotions]


def test_nothing_to_promote(now):
    plan = generate_promotions([], [], [], now)
    assert plan.promotions == []
    assert plan.total_products == 0
    assert plan.avg_discount == 0


def test_no_deadstock_means_no_clearance(now):
    alerts = [_alert(f"S{i}", AnomalyType.SLOW_MOVING) for i in range(3)]
    plan = generate_promotions(alerts, [], [], now)
    assert PromotionType.DEADSTOCK_CLEARANCE not in _types(plan)
    assert _types(plan) == [PromotionType.SLOW_MOVER]


def test_two_slow_movers_are_below_threshold(now):
    alerts = [_alert("S1", AnomalyType.SLOW_MOVING), _alert("S2", AnomalyType.SLOW_MOVING)]
    plan = generate_promotions(alerts, [], [], now)
    assert PromotionType.SLOW_MOVER not in _types(plan)


def test_deadstock_clearance(now):
    alerts = [_alert("D1", AnomalyType.DEADSTOCK, stock=40), _alert("D2", AnomalyType.DEADSTOCK, stock=10)]
    plan = generate_promotions(alerts, [], [], now)
    (promo,) = plan.promotions
    assert promo.type == PromotionType.DEADSTOCK_CLEARANCE
    assert promo.suggested_discount == 30
    assert [p.current_stock for p in promo.products] == [40, 10]
    assert promo.end_date - promo.start_date == timedelta(days=14)
    assert "5,000" in promo.estimated_impact


def test_all_four_campaigns(now):
    alerts = [_alert("D1", AnomalyType.DEADSTOCK)] + [
        _alert(f"S{i}", AnomalyType.SLOW_MOVING) for i in range(12)
    ]
    predictions = [_prediction(f"U{i}", Trend.UP) for i in range(4)] + [_prediction("F", Trend.STABLE)]
    recs = [_rec(f"O{i}", Urgency.OVERSTOCK) for i in range(7)] + [_rec("K", Urgency.OK)]

    plan = generate_promotions(alerts, predictions, recs, now)
    promos = {p.type: p for p in plan.promotions}

    assert _types(plan) == [
        PromotionType.DEADSTOCK_CLEARANCE,
        PromotionType.SLOW_MOVER,
        PromotionType.BUNDLE,
        PromotionType.VOLUME_DISCOUNT,
    ]
    assert len(promos[PromotionType.SLOW_MOVER].products) == 10
    bundle_ids = [p.product_id for p in promos[PromotionType.BUNDLE].products]
    assert bundle_ids == ["U0", "U1", "U2", "S0", "S1", "S2"]
    assert len(promos[PromotionType.VOLUME_DISCOUNT].products) == 5
    assert promos[PromotionType.VOLUME_DISCOUNT].end_date == now + timedelta(days=21)
    assert plan.total_products == 1 + 10 + 6 + 5
    # (30 + 15 + 10 + 20) / 4 = 18.75
    assert plan.avg_discount == 19


def test_bundle_needs_both_sides(now):
    predictions = [_prediction("U1", Trend.UP)]
    assert generate_promotions([], predictions, [], now).promotions == []


def test_single_overstock_is_not_a_volume_campaign(now):
    plan = generate_promotions([], [], [_rec("O1", Urgency.OVERSTOCK)], now)
    assert plan.promotions == []


def test_promotion_plan_serializes(now):
    alerts = [_alert("D1", AnomalyType.DEADSTOCK)]
    payload = generate_promotions(alerts, [], [], now).model_dump(by_alias=True)
    assert payload["totalProducts"] == 1
    assert payload["avgDiscount"] == 30
    assert payload["promotions"][0]["suggestedDiscount"] == 30
    assert payload["promotions"][0]["products"][0]["currentStock"] == 10
