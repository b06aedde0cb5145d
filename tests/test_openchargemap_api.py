import warnings
from datetime import datetime
from unittest.mock import MagicMock

import pytest
import requests

from planner_config.api_config import OPENCHARGEMAP_CONFIG
from planner_config.planner_config import PRICING_CONFIG
from trip_planner.data_processing.openchargemap_api import OpenChargeMapAPI, to_station_candidates
from trip_planner.utils.geo import distance_miles

ROUTE = [(37.0, -122.0), (37.5, -121.5), (38.0, -121.0)]


def _raw_station(station_id, lat, lon, operational=True):
    return {
        "ID": station_id,
        "AddressInfo": {"Title": f"Station {station_id}", "Latitude": lat, "Longitude": lon, "Town": "Somewhere"},
        "OperatorInfo": {"Title": "ChargeCo"},
        "StatusType": {"IsOperational": operational},
        "UsageCost": "$0.40/kWh",
        "Connections": [{"PowerKW": 150, "Quantity": 2}, {"PowerKW": 50}],
    }


def _api(payload=None, status_code=200):
    response = MagicMock(status_code=status_code, text="error body")
    response.json.return_value = payload if payload is not None else []
    session = MagicMock()
    session.get.return_value = response
    config = {**OPENCHARGEMAP_CONFIG, "min_request_interval": 0}
    return OpenChargeMapAPI(api_key="ocm-key", session=session, config=config), session


def test_find_nearby_stations_passes_query():
    api, session = _api([_raw_station(1, 37.5, -121.5)])

    stations = api.find_nearby_stations(37.5, -121.5, distance_miles=5)

    assert len(stations) == 1
    params = session.get.call_args.kwargs["params"]
    assert params["distance"] == 5
    assert params["key"] == "ocm-key"


def test_find_nearby_stations_swallows_errors():
    api, session = _api()
    session.get.side_effect = requests.exceptions.ConnectionError("down")
    assert api.find_nearby_stations(37.5, -121.5) == []

    api, _ = _api(status_code=500)
    assert api.find_nearby_stations(37.5, -121.5) == []


def test_extract_station_data():
    api, _ = _api()
    data = api.extract_station_data(_raw_station(7, 37.5, -121.5))

    assert data["max_power_kw"] == 150
    assert data["has_fast_charging"]
    assert data["num_points"] == 3
    assert data["estimated_cost_per_kwh"] == pytest.approx(0.40)


def test_stations_along_route():
    api, session = _api([_raw_station(1, 37.5, -121.5), _raw_station(2, 37.9, -121.1, operational=False)])

    df = api.get_stations_along_route(ROUTE)

    # every sample point returns the same two stations
    assert session.get.call_count == len(ROUTE)
    assert list(df["ocm_id"]) == [1]
    assert df.loc[0, "distance_from_route_miles"] == pytest.approx(distance_miles(ROUTE[0], ROUTE[1]))

    candidates = to_station_candidates(df, when=datetime(2024, 5, 1, 10), pricing_config=PRICING_CONFIG)
    assert len(candidates) == 1
    assert candidates[0].power_kw == 150
    assert candidates[0].cost_per_kwh == pytest.approx(0.40)
    assert candidates[0].name == "Station 1"


def test_empty_route():
    api, session = _api()
    assert api.get_stations_along_route([]).empty
    assert to_station_candidates(api.get_stations_along_route([])) == []
    session.get.assert_not_called()


def test_filtering_operational_stations_does_not_write_to_a_slice():
    api, _ = _api([_raw_station(1, 37.5, -121.5), _raw_station(2, 37.9, -121.1, operational=False)])

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        df = api.get_stations_along_route(ROUTE)

    assert len(df) == 1
    assert not [w for w in caught if w.category.__name__ == "SettingWithCopyWarning"]
