"""
Greedy, threshold-driven charging stop planner.

Given the trip distance, the starting state of charge and the candidate
stations, decide where to stop and to which SOC to charge. This is a
heuristic: it returns a feasible, reasonable plan, not a global optimum.

Plan invariants (checked with assertions):
- at most ``max_stops`` stops, numbered 1..n in order
- each target SOC lies in (SOC on arrival at the stop, 100]
- dwell time and cost are never negative
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence

from planner_config.logging_config import is_detailed_logging_enabled
from planner_config.planner_config import PLANNER_CONFIG, VALID_STRATEGIES
from trip_planner.models.entities import (
    ChargeStop,
    ChargingStationCandidate,
    EVModel,
    SOCOptimizationResult,
)
from trip_planner.models.range_model import battery_percent_for_distance
from trip_planner.utils.logger import get_logger, log_detailed

logger = get_logger('charge_optimizer')


def _driving_time_min(distance_miles: float, cfg: Dict[str, Any]) -> float:
    return distance_miles / cfg['average_speed_mph'] * 60


def _target_soc(current_battery: float, strategy: str, cfg: Dict[str, Any]) -> float:
    target = cfg['strategy_targets'][strategy]
    return min(target['max_soc'], current_battery + target['soc_gain'])


def _dwell_minutes(energy_kwh: float, charging_speed_kw: float) -> int:
    return math.ceil(energy_kwh / charging_speed_kw * 60)


def select_candidate_stations(stations: Sequence[ChargingStationCandidate],
                              config: Optional[Dict[str, Any]] = None) -> List[ChargingStationCandidate]:
    """Fast chargers only, nearest first, at most ``max_stops`` of them."""
    cfg = config or PLANNER_CONFIG
    qualifying = [s for s in stations if s.power_kw >= cfg['min_station_power_kw']]
    # sorted() is stable: equal distances keep their input order
    qualifying = sorted(qualifying, key=lambda s: s.distance_from_route_miles)
    return qualifying[:cfg['max_stops']]


def check_plan_invariants(result: SOCOptimizationResult,
                          config: Optional[Dict[str, Any]] = None) -> None:
    """Assert the structural guarantees of a charging plan."""
    cfg = config or PLANNER_CONFIG
    assert len(result.stops) <= cfg['max_stops'], f"plan has {len(result.stops)} stops"
    for expected_number, stop in enumerate(result.stops, start=1):
        assert stop.stop_number == expected_number, "stop numbers must ascend from 1"
        assert stop.arrival_soc < stop.target_soc <= 100, (
            f"stop {stop.stop_number}: target SOC {stop.target_soc} outside ({stop.arrival_soc}, 100]"
        )
        assert stop.dwell_time_minutes >= 0, f"stop {stop.stop_number}: negative dwell time"
        assert stop.cost_usd >= 0, f"stop {stop.stop_number}: negative cost"
        assert stop.charging_speed_kw <= cfg['max_charging_speed_kw']


def optimize_charging_stops(
    distance_miles: float,
    starting_battery_pct: float,
    ev_model: EVModel,
    stations: Sequence[ChargingStationCandidate],
    strategy: str = "balanced",
    config: Optional[Dict[str, Any]] = None,
) -> SOCOptimizationResult:
    """
    Build an ordered charging plan for one route and strategy.

    Stations are visited nearest-first; a stop is made wherever reaching the
    station would leave less than the trigger SOC. Savings are measured
    against charging to 100% at each of the chosen stops.
    """
    cfg = config or PLANNER_CONFIG
    if strategy not in VALID_STRATEGIES:
        raise ValueError(f"Unknown strategy '{strategy}'. Options: {', '.join(VALID_STRATEGIES)}")

    capacity = ev_model.battery_capacity_kwh
    driving_time = _driving_time_min(distance_miles, cfg)
    battery_needed = battery_percent_for_distance(distance_miles, ev_model)

    if battery_needed <= starting_battery_pct - cfg['safety_buffer_pct']:
        logger.info(
            f"No charging needed: {battery_needed:.1f}% of {starting_battery_pct:.0f}% "
            f"for {distance_miles:.0f} mi"
        )
        return SOCOptimizationResult(
            total_trip_time_min=driving_time,
            total_charging_time_min=0,
            stops=[],
            strategy=strategy,
        )

    detailed = is_detailed_logging_enabled('charging_plan')
    candidates = select_candidate_stations(stations, cfg)
    warnings: List[str] = []
    if not candidates:
        message = (
            f"Charging required ({battery_needed:.1f}% needed, {starting_battery_pct:.0f}% available) "
            f"but no station offers at least {cfg['min_station_power_kw']:.0f} kW"
        )
        logger.warning(message)
        warnings.append(message)

    stops: List[ChargeStop] = []
    current_battery = starting_battery_pct
    total_charging_time = 0
    total_cost = 0.0
    reason = cfg['strategy_reasons'][strategy]

    for station in candidates:
        battery_to_station = battery_percent_for_distance(station.distance_from_route_miles, ev_model)
        arrival_soc = current_battery - battery_to_station
        if detailed:
            log_detailed(
                f"{station.name}: {station.distance_from_route_miles:.1f} mi, "
                f"arrive at {arrival_soc:.1f}% (current {current_battery:.1f}%)",
                "charging_plan",
            )
        if arrival_soc >= cfg['stop_trigger_soc_pct']:
            continue

        target_soc = _target_soc(current_battery, strategy, cfg)
        if target_soc <= arrival_soc:
            logger.debug(f"Skipping {station.name}: target {target_soc:.0f}% <= arrival {arrival_soc:.0f}%")
            continue

        # At or above the strategy ceiling the stop refills from the arrival level
        charge_from = current_battery if target_soc > current_battery else arrival_soc
        energy_to_add = max(0.0, target_soc - charge_from) / 100 * capacity
        charging_speed = min(station.power_kw, cfg['max_charging_speed_kw'])
        dwell_time = _dwell_minutes(energy_to_add, charging_speed)
        cost = energy_to_add * station.cost_per_kwh

        stops.append(ChargeStop(
            stop_number=len(stops) + 1,
            location=station.name,
            target_soc=target_soc,
            charging_speed_kw=charging_speed,
            dwell_time_minutes=dwell_time,
            cost_usd=cost,
            reason=reason,
            arrival_soc=arrival_soc,
        ))
        logger.debug(
            f"Stop {len(stops)} at {station.name}: {current_battery:.0f}% -> {target_soc:.0f}%, "
            f"{dwell_time} min @ {charging_speed:.0f} kW, ${cost:.2f}"
        )

        current_battery = target_soc
        total_charging_time += dwell_time
        total_cost += cost

    if candidates and not stops:
        message = "Charging required but no candidate station triggered a stop"
        logger.warning(message)
        warnings.append(message)

    naive_target = cfg['naive_target_soc_pct']
    naive_charging_time = sum(
        _dwell_minutes((naive_target - stop.target_soc) / 100 * capacity, stop.charging_speed_kw)
        for stop in stops
    )

    result = SOCOptimizationResult(
        total_trip_time_min=driving_time + total_charging_time,
        total_charging_time_min=total_charging_time,
        stops=stops,
        strategy=strategy,
        time_saved_min=max(0, naive_charging_time - total_charging_time),
        cost_saved_usd=max(0.0, total_cost * cfg['cost_savings_factor']),
        warnings=warnings,
    )
    check_plan_invariants(result, cfg)

    logger.info(
        f"{strategy} plan: {len(stops)} stop(s), {total_charging_time} min charging, "
        f"${total_cost:.2f}, trip {result.total_trip_time_min:.0f} min"
    )
    return result
