from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, confloat, conint


OVERRIDES_PATH = Path("config/planner_overrides.yaml")


class FeasibilityConfigSchema(BaseModel):
    safety_buffer_pct: confloat(ge=0, le=50) = 10.0
    advisory_pct_per_stop: confloat(gt=0, le=100) = 50.0


class ChargingConfigSchema(BaseModel):
    min_station_power_kw: confloat(ge=3, le=350) = 50.0
    max_charging_speed_kw: confloat(ge=20, le=350) = 150.0
    max_stops: conint(ge=0, le=3) = 3
    stop_trigger_soc_pct: confloat(ge=0, le=60) = 20.0
    average_speed_mph: confloat(gt=0, le=90) = 60.0
    cost_savings_factor: confloat(ge=0, le=1) = 0.10
    default_strategy: str = Field("balanced", pattern="^(minimize_time|minimize_cost|balanced)$")


class PricingConfigSchema(BaseModel):
    base_public_cost_per_kwh: confloat(ge=0, le=2) = 0.30
    base_home_cost_per_kwh: confloat(ge=0, le=2) = 0.15
    peak_pricing_multiplier: confloat(ge=1, le=5) = 1.5


class TrafficConfigSchema(BaseModel):
    cache_ttl_seconds: confloat(gt=0, le=3600) = 120
    coordinate_precision: conint(ge=0, le=8) = 4


class PlannerOverrides(BaseModel):
    feasibility: FeasibilityConfigSchema = FeasibilityConfigSchema()
    charging: ChargingConfigSchema = ChargingConfigSchema()
    pricing: PricingConfigSchema = PricingConfigSchema()
    traffic: TrafficConfigSchema = TrafficConfigSchema()
    # Optional per-model parameter overrides, e.g. {'tesla_model_3': {'range_miles': 330}}
    ev_models_parameters: Optional[Dict[str, Dict[str, Any]]] = None


def load_overrides(path: Path = OVERRIDES_PATH) -> PlannerOverrides:
    path = Path(path)
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        return PlannerOverrides(**data)
    return PlannerOverrides()


def save_overrides(overrides: PlannerOverrides, path: Path = OVERRIDES_PATH) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(overrides.model_dump(), sort_keys=False), encoding="utf-8")


def merged_runtime_config(path: Path = OVERRIDES_PATH) -> Dict[str, Any]:
    """Dict defaults with validated YAML overrides applied (code files are never mutated)."""
    from planner_config.planner_config import PLANNER_CONFIG, PRICING_CONFIG
    from planner_config.traffic_config import TRAFFIC_CONFIG

    overrides = load_overrides(path)

    planner = copy.deepcopy(PLANNER_CONFIG)
    planner.update(overrides.feasibility.model_dump())
    planner.update(overrides.charging.model_dump())
    pricing = {**PRICING_CONFIG, **overrides.pricing.model_dump()}
    traffic = {**TRAFFIC_CONFIG, **overrides.traffic.model_dump()}

    return {
        "planner": planner,
        "pricing": pricing,
        "traffic": traffic,
        "ev_models_parameters": dict(overrides.ev_models_parameters or {}),
    }
