from datetime import datetime

from planner_config.traffic_config import CONGESTION_LEVELS
from planner_app.services.traffic_cache import TrafficSnapshotCache, derive_traffic_alerts
from trip_planner.data_processing.traffic_simulator import TrafficSimulator
from trip_planner.models.entities import RoadConditions, TrafficIncident, TrafficSnapshot

SF = (37.7749, -122.4194)
LA = (34.0522, -118.2437)


class FakeClock:
    def __init__(self, now=1_700_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


def _snapshot(level="low", closures=None, construction=False, incidents=None):
    return TrafficSnapshot(
        current_delay_min=20,
        congestion_level=level,
        alternative_routes=[],
        incidents=incidents or [],
        confidence=90,
        last_updated="2024-01-01T00:00:00+00:00",
        road_conditions=RoadConditions(construction=construction, closures=closures or []),
    )


def test_simulator_output_ranges():
    snapshot = TrafficSimulator(seed=42).generate(SF, LA)

    assert 5 <= snapshot.current_delay_min <= 35
    assert 80 <= snapshot.confidence <= 99
    assert snapshot.congestion_level in CONGESTION_LEVELS
    assert [r.id for r in snapshot.alternative_routes] == ["alt1", "alt2"]
    assert len(snapshot.incidents) <= 1
    geometry = snapshot.alternative_routes[0].geometry
    assert len(geometry) == 6
    assert geometry[0] == SF and geometry[-1] == LA


def test_cache_returns_same_snapshot_within_ttl():
    clock = FakeClock()
    cache = TrafficSnapshotCache(source=TrafficSimulator(seed=1), clock=clock)

    first = cache.get_traffic_data(SF, LA)
    clock.now += 119
    second = cache.get_traffic_data(SF, LA)

    assert second is first
    assert second.last_updated == first.last_updated
    assert cache.get_stats()["hits"] == 1


def test_cache_refreshes_after_ttl():
    clock = FakeClock()
    cache = TrafficSnapshotCache(source=TrafficSimulator(seed=1), clock=clock)

    first = cache.get_traffic_data(SF, LA)
    clock.now += 121
    second = cache.get_traffic_data(SF, LA)

    assert second is not first
    assert datetime.fromisoformat(second.last_updated) > datetime.fromisoformat(first.last_updated)
    assert cache.get_stats()["misses"] == 2


def test_cache_key_rounds_coordinates():
    cache = TrafficSnapshotCache(source=TrafficSimulator(seed=3), clock=FakeClock())

    first = cache.get_traffic_data((37.774901, -122.419401), LA)
    second = cache.get_traffic_data((37.774904, -122.419398), LA)

    assert second is first
    assert cache.get_stats()["total_items"] == 1


def test_severe_congestion_alert():
    alerts = derive_traffic_alerts(_snapshot("severe"))

    assert len(alerts) == 1
    assert alerts[0].severity == "high"
    assert alerts[0].action == "View Alternatives"


def test_quiet_traffic_has_no_alerts():
    assert derive_traffic_alerts(_snapshot("low")) == []


def test_closure_and_incident_alerts():
    incident = TrafficIncident(id="inc1", type="accident", severity="severe", description="Crash on I-5",
                               latitude=36.0, longitude=-120.0, start_time="2024-01-01T00:00:00+00:00")
    alerts = derive_traffic_alerts(_snapshot("high", closures=["Grapevine closed", "Exit 12 closed"],
                                             construction=True, incidents=[incident]))

    by_id = {a.id: a for a in alerts}
    assert by_id["high-congestion"].severity == "medium"
    assert by_id["construction"].type == "warning"
    assert by_id["road-closure"].message == "Road closure detected: Grapevine closed"
    assert by_id["road-closure"].dismissible is False
    assert by_id["incident-inc1"].severity == "critical"
    assert by_id["incident-inc1"].title == "Accident Alert"
