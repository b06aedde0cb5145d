import pytest

from trip_planner.models.entities import ElevationSample, WindSample
from trip_planner.models.environment import analyze_elevation_wind_impact, calculate_weather_impact


def _profile(*elevations):
    return [
        ElevationSample(lat=37.0 + i * 0.1, lng=-122.0, elevation_m=e, cumulative_distance_miles=i * 10.0)
        for i, e in enumerate(elevations)
    ]


def test_climb_increases_energy():
    impact = analyze_elevation_wind_impact(_profile(0, 100, 300), [])

    assert impact.elevation_gain == pytest.approx(300)
    assert impact.elevation_loss == 0
    assert impact.elevation_delta_pct == pytest.approx(0.6)
    assert impact.combined_delta_pct == pytest.approx(0.6)
    assert impact.recommendations == []


def test_empty_inputs_give_zero_impact():
    impact = analyze_elevation_wind_impact([], [])

    assert impact.elevation_gain == 0
    assert impact.headwind_mph == 0
    assert impact.combined_delta_pct == 0
    assert impact.recommendations == []


def test_flat_route_note():
    impact = analyze_elevation_wind_impact(_profile(10, 20, 15), [])

    assert impact.net_change == pytest.approx(5)
    assert "Route is relatively flat - minimal elevation impact" in impact.recommendations


def test_big_climb_warning():
    impact = analyze_elevation_wind_impact(_profile(0, 400, 900, 800), [])

    assert impact.elevation_gain == pytest.approx(900)
    assert impact.elevation_loss == pytest.approx(100)
    assert impact.recommendations[0] == "Expect 15-25% range reduction due to 900m elevation gain"


def test_headwind_from_south():
    impact = analyze_elevation_wind_impact([], [WindSample(speed_mph=20, direction_deg=180)])

    assert impact.headwind_mph == pytest.approx(20)
    assert impact.tailwind_mph == 0
    assert impact.crosswind_mph == pytest.approx(0, abs=1e-9)
    assert impact.wind_delta_pct == pytest.approx(10)
    assert "Strong headwind (20 mph) will reduce range by 5-10%" in impact.recommendations


def test_route_bearing_rotates_wind():
    impact = analyze_elevation_wind_impact(
        [], [WindSample(speed_mph=20, direction_deg=180)], route_bearing_deg=180
    )

    assert impact.tailwind_mph == pytest.approx(20)
    assert impact.headwind_mph == pytest.approx(0, abs=1e-9)
    assert impact.wind_delta_pct == pytest.approx(-10)


def test_weather_impact_cold_and_snow():
    impact = calculate_weather_impact(10, "Light Snow")

    assert impact.efficiency == pytest.approx(0.63)
    assert impact.range_loss_pct == 37
    assert impact.charging_speed_factor == 0.8
    assert impact.message == "Extreme cold reducing range by ~30% & Snow"


def test_weather_impact_mild():
    impact = calculate_weather_impact(70, "Clear")

    assert impact.efficiency == 1.0
    assert impact.range_loss_pct == 0
    assert impact.message is None


def test_single_sample_counts_as_flat():
    impact = analyze_elevation_wind_impact(_profile(250), [])

    assert impact.elevation_gain == 0
    assert impact.recommendations == ["Route is relatively flat - minimal elevation impact"]
