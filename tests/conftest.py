import pytest

from trip_planner.models.entities import ChargingStationCandidate, EVModel, RouteCandidate


@pytest.fixture(autouse=True)
def no_inference_key(monkeypatch):
    """Keep every test on the deterministic path unless a key is passed explicitly."""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture
def model_3():
    return EVModel(
        battery_capacity_kwh=82.0,
        efficiency_kwh_per_mile=0.229,
        range_miles=358.0,
        manufacturer="Tesla",
        model_name="Model 3",
    )


@pytest.fixture
def routes():
    return [
        RouteCandidate(id="route-1", name="I-5 South", distance_miles=300, duration_min=300,
                       energy_efficiency=0.25, estimated_cost=22.5, battery_usage_pct=91, charging_stops=1),
        RouteCandidate(id="route-2", name="US-101 South", distance_miles=320, duration_min=310,
                       energy_efficiency=0.22, estimated_cost=21.1, battery_usage_pct=86, charging_stops=1),
    ]


@pytest.fixture
def stations():
    return [
        ChargingStationCandidate(name="Harris Ranch", power_kw=150, cost_per_kwh=0.40,
                                 distance_from_route_miles=150),
        ChargingStationCandidate(name="Kettleman City", power_kw=250, cost_per_kwh=0.45,
                                 distance_from_route_miles=250),
        ChargingStationCandidate(name="Buttonwillow", power_kw=120, cost_per_kwh=0.35,
                                 distance_from_route_miles=280),
        ChargingStationCandidate(name="Library L2", power_kw=7.2, cost_per_kwh=0.20,
                                 distance_from_route_miles=40),
    ]
