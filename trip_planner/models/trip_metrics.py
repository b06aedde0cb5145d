"""
Deterministic trip scorecard: efficiency score, CO2 and fuel cost savings.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from planner_config.planner_config import PLANNER_CONFIG
from trip_planner.models.entities import EVModel, RouteCandidate, TripMetrics


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def calculate_trip_metrics(route: RouteCandidate, ev_model: EVModel,
                           config: Optional[Dict[str, Any]] = None) -> TripMetrics:
    cfg = config or PLANNER_CONFIG
    distance = route.distance_miles

    # Tailpipe emissions avoided versus an average gasoline car
    co2_saved = _round_half_up(distance * cfg['co2_kg_saved_per_mile'], 1)
    equivalent_trees = max(1, int(_round_half_up(co2_saved / cfg['co2_kg_per_tree'])))

    gas_cost = distance * cfg['gas_cost_per_mile']
    ev_cost = distance * ev_model.efficiency_kwh_per_mile * cfg['electricity_cost_per_kwh']
    fuel_cost_saved = _round_half_up(max(0.0, gas_cost - ev_cost), 2)

    route_efficiency = route.energy_efficiency or ev_model.efficiency_kwh_per_mile
    ratio = ev_model.efficiency_kwh_per_mile / route_efficiency
    efficiency_score = int(min(cfg['max_efficiency_score'],
                               max(cfg['min_efficiency_score'], _round_half_up(ratio * 100))))

    return TripMetrics(
        efficiency_score=efficiency_score,
        co2_saved_kg=co2_saved,
        equivalent_trees=equivalent_trees,
        fuel_cost_saved=fuel_cost_saved,
    )
