import pytest
import yaml
from pydantic import ValidationError

from planner_config.planner_config import PLANNER_CONFIG
from planner_app.services.config_service import (
    ChargingConfigSchema,
    PlannerOverrides,
    load_overrides,
    merged_runtime_config,
    save_overrides,
)


def test_missing_file_gives_defaults(tmp_path):
    overrides = load_overrides(tmp_path / "absent.yaml")

    assert overrides.charging.max_stops == 3
    assert overrides.traffic.cache_ttl_seconds == 120


def test_save_then_load(tmp_path):
    path = tmp_path / "config" / "planner_overrides.yaml"
    overrides = PlannerOverrides(charging=ChargingConfigSchema(min_station_power_kw=100))

    save_overrides(overrides, path)

    assert load_overrides(path).charging.min_station_power_kw == 100


def test_out_of_range_value_is_rejected(tmp_path):
    path = tmp_path / "overrides.yaml"
    path.write_text(yaml.safe_dump({"charging": {"max_stops": 7}}), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_overrides(path)


def test_merged_runtime_config(tmp_path):
    path = tmp_path / "overrides.yaml"
    path.write_text(yaml.safe_dump({
        "charging": {"max_stops": 2, "cost_savings_factor": 0.2},
        "traffic": {"cache_ttl_seconds": 300},
        "ev_models_parameters": {"tesla_model_3": {"range_miles": 330}},
    }), encoding="utf-8")

    runtime = merged_runtime_config(path)

    assert runtime["planner"]["max_stops"] == 2
    assert runtime["planner"]["cost_savings_factor"] == 0.2
    assert runtime["planner"]["strategy_targets"] == PLANNER_CONFIG["strategy_targets"]
    assert runtime["traffic"]["cache_ttl_seconds"] == 300
    assert runtime["traffic"]["coordinate_precision"] == 4
    assert runtime["ev_models_parameters"]["tesla_model_3"]["range_miles"] == 330
    # module defaults are untouched
    assert PLANNER_CONFIG["max_stops"] == 3
