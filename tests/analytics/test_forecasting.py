from datetime import timedelta

import pytest

from analytics.forecasting import forecast_demand, rank_predictions
from models.enums import Trend
from models.sales import SaleLine


@pytest.mark.parametrize("sale_days", [0, 1, 6])
def test_fewer_than_seven_sale_days_is_insufficient(make_product, daily_lines, sale_days):
    product = make_product("P1")
    prediction = forecast_demand(product, daily_lines("P1", [20] * sale_days))
    assert prediction.confidence == 0
    assert prediction.trend == Trend.STABLE
    assert prediction.avg_daily_sales == 0
    assert prediction.trend_percent == 0
    assert prediction.predicted_next_7_days == 0
    assert prediction.predicted_next_30_days == 0


def test_many_lines_on_few_days_is_still_insufficient(make_product, now):
    product = make_product("P1")
    lines = [
        SaleLine(product_id="P1", quantity=3, unit_price=10.0, sale_timestamp=now - timedelta(days=d % 3 + 1))
        for d in range(12)
    ]
    prediction = forecast_demand(product, lines)
    assert prediction.confidence == 0
    assert prediction.predicted_next_30_days == 0


def test_flat_series_is_stable(make_product, daily_lines):
    prediction = forecast_demand(make_product("P1"), daily_lines("P1", [10] * 10))
    assert prediction.trend == Trend.STABLE
    assert prediction.trend_percent == pytest.approx(0.0)
    assert prediction.avg_daily_sales == 10
    assert prediction.predicted_next_7_days == 70
    assert prediction.predicted_next_30_days == 300
    # 10 lines out of 50 for full sample confidence, zero variation
    assert prediction.confidence == 0.2


def test_steadily_increasing_series_trends_up(make_product, daily_lines):
    quantities = [1 + i for i in range(30)]  # slope 1 on a mean of 15.5
    prediction = forecast_demand(make_product("P1"), daily_lines("P1", quantities))
    assert prediction.trend == Trend.UP
    assert prediction.trend_percent > 5
    assert prediction.trend_percent == 6.5
    assert prediction.predicted_next_30_days > prediction.avg_daily_sales * 30


def test_ten_plus_day_index_series_is_below_trend_threshold(make_product, daily_lines):
    # slope 1 on a mean of 24.5 is a 4.08% daily trend
    quantities = [10 + i for i in range(30)]
    prediction = forecast_demand(make_product("P1"), daily_lines("P1", quantities))
    assert prediction.avg_daily_sales == 24.5
    assert prediction.trend_percent == 4.1
    assert prediction.trend == Trend.STABLE
    assert prediction.confidence == 0.39


def test_decreasing_series_trends_down_and_never_predicts_negative(make_product, daily_lines):
    quantities = [40 - 4 * i for i in range(10)]  # 40 down to 4
    prediction = forecast_demand(make_product("P1"), daily_lines("P1", quantities))
    assert prediction.trend == Trend.DOWN
    assert prediction.trend_percent < -5
    assert prediction.predicted_next_7_days >= 0
    assert prediction.predicted_next_30_days >= 0


def test_confidence_stays_in_unit_interval(make_product, daily_lines):
    quantities = [1, 50, 1, 50, 1, 50, 1, 50] * 10
    prediction = forecast_demand(make_product("P1"), daily_lines("P1", quantities))
    assert 0.0 <= prediction.confidence <= 1.0


def test_rank_predictions_drops_zero_demand_and_sorts(make_product, daily_lines):
    slow = forecast_demand(make_product("A"), daily_lines("A", [2] * 8))
    fast = forecast_demand(make_product("B"), daily_lines("B", [9] * 8))
    empty = forecast_demand(make_product("C"), [])
    ranked = rank_predictions([slow, empty, fast])
    assert [p.product_id for p in ranked] == ["B", "A"]


def test_prediction_serializes_to_camel_case(make_product, daily_lines):
    prediction = forecast_demand(make_product("P1"), daily_lines("P1", [10] * 7))
    payload = prediction.model_dump(by_alias=True)
    assert payload["avgDailySales"] == 10
    assert payload["predictedNext7Days"] == 70
    assert payload["predictedNext30Days"] == 300
    assert payload["trendPercent"] == 0
