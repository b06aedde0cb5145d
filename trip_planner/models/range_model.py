"""
Battery-percent consumption and remaining range for a single trip leg.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from planner_config.ev_models import DEFAULT_EV_MODEL, EV_MODELS
from planner_config.planner_config import PLANNER_CONFIG
from trip_planner.models.entities import EVModel, RangePrediction
from trip_planner.utils.logger import get_logger

logger = get_logger('range_model')


def get_ev_model(key: str = DEFAULT_EV_MODEL, overrides: Optional[Dict[str, Any]] = None) -> EVModel:
    """Build an EVModel from the catalogue, applying optional parameter overrides."""
    if key not in EV_MODELS:
        raise KeyError(f"Unknown EV model '{key}'. Options: {', '.join(sorted(EV_MODELS))}")
    spec = {**EV_MODELS[key], **(overrides or {})}
    return EVModel(
        battery_capacity_kwh=float(spec['battery_capacity_kwh']),
        efficiency_kwh_per_mile=float(spec['efficiency_kwh_per_mile']),
        range_miles=float(spec['range_miles']),
        manufacturer=spec.get('manufacturer', ''),
        model_name=spec.get('model_name', key),
    )


def battery_percent_for_distance(distance_miles: float, ev_model: EVModel) -> float:
    """Percentage of battery capacity consumed over `distance_miles`."""
    if ev_model.battery_capacity_kwh <= 0:
        raise ValueError("battery capacity must be positive")
    energy_needed_kwh = distance_miles * ev_model.efficiency_kwh_per_mile
    return energy_needed_kwh / ev_model.battery_capacity_kwh * 100


def predict_range(distance_miles: float, starting_battery_pct: float, ev_model: EVModel,
                  config: Optional[Dict[str, Any]] = None) -> RangePrediction:
    """
    Decide whether the trip can be completed on the current charge.

    suggested_stops is an advisory estimate (about 50 SOC points per stop) and
    is independent of the stop count produced by the charge stop optimizer.
    """
    cfg = config or PLANNER_CONFIG
    buffer_pct = cfg['safety_buffer_pct']

    battery_needed_pct = battery_percent_for_distance(distance_miles, ev_model)
    remaining_pct = starting_battery_pct - battery_needed_pct

    can_reach = remaining_pct > buffer_pct
    needs_charging = not can_reach
    suggested_stops = 0
    if needs_charging:
        shortfall = battery_needed_pct - starting_battery_pct + buffer_pct
        suggested_stops = max(0, math.ceil(shortfall / cfg['advisory_pct_per_stop']))

    prediction = RangePrediction(
        can_reach=can_reach,
        range_at_destination_miles=max(0.0, remaining_pct / 100 * ev_model.range_miles),
        needs_charging=needs_charging,
        suggested_stops=suggested_stops,
        battery_needed_pct=battery_needed_pct,
        remaining_pct=remaining_pct,
    )
    logger.debug(
        f"Range check {distance_miles:.1f} mi from {starting_battery_pct:.0f}%: "
        f"needs {battery_needed_pct:.2f}%, remaining {remaining_pct:.2f}%, can_reach={can_reach}"
    )
    return prediction
