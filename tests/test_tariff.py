from datetime import datetime

import pytest

from planner_config.planner_config import PRICING_CONFIG
from trip_planner.utils.tariff import get_price_per_kwh, parse_usage_cost


def test_parse_usage_cost():
    assert parse_usage_cost("$0.43/kWh") == pytest.approx(0.43)
    assert parse_usage_cost("0.35 per kWh; parking extra") == pytest.approx(0.35)
    assert parse_usage_cost("Free") is None
    assert parse_usage_cost(None) is None


def test_public_base_rate_off_peak():
    assert get_price_per_kwh(None, datetime(2024, 5, 1, 10), PRICING_CONFIG) == pytest.approx(0.30)


def test_station_price_with_peak_multiplier():
    station = {"estimated_cost_per_kwh": 0.40}
    assert get_price_per_kwh(station, datetime(2024, 5, 1, 18), PRICING_CONFIG) == pytest.approx(0.60)


def test_home_rate():
    assert get_price_per_kwh(None, datetime(2024, 5, 1, 18), PRICING_CONFIG, is_home=True) == pytest.approx(0.15)
