"""
Command-line trip planning.

    ev-trip-plan request.yaml --strategy minimize_cost --output plan.json
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from planner_config.logging_config import LOGGING_MODES
from planner_config.planner_config import VALID_STRATEGIES
from planner_app.services.config_service import OVERRIDES_PATH, merged_runtime_config
from planner_app.services.planning_service import PlanningRequest, TripPlan, TripPlanningService
from planner_app.services.traffic_cache import TrafficSnapshotCache
from trip_planner.data_processing.openchargemap_api import OpenChargeMapAPI
from trip_planner.utils.logger import error, info, print_summary, setup_logger


def load_request(path: Path) -> Dict[str, Any]:
    text = Path(path).read_text(encoding="utf-8")
    if Path(path).suffix.lower() == ".json":
        return json.loads(text)
    return yaml.safe_load(text) or {}


def summarize(plan: TripPlan):
    rec = plan.recommendation
    print_summary("ROUTE RECOMMENDATION", {
        "Route": plan.route.name or plan.route.id,
        "Recommended": rec.recommended_route_id,
        "Confidence": rec.confidence,
        "Source": rec.source,
        "Summary": rec.summary,
    })

    rp = plan.range_prediction
    print_summary("RANGE", {
        "Distance (mi)": plan.route.distance_miles,
        "Battery needed (%)": rp.battery_needed_pct,
        "Can reach": rp.can_reach,
        "Range at destination (mi)": rp.range_at_destination_miles,
        "Suggested stops": rp.suggested_stops,
    })

    cp = plan.charging_plan
    charging = {
        "Strategy": cp.strategy,
        "Stops": len(cp.stops),
        "Charging time (min)": cp.total_charging_time_min,
        "Trip time (min)": cp.total_trip_time_min,
        "Time saved (min)": cp.time_saved_min,
        "Cost saved (USD)": cp.cost_saved_usd,
    }
    for stop in cp.stops:
        charging[f"Stop {stop.stop_number}"] = (
            f"{stop.location}: to {stop.target_soc:g}% in {stop.dwell_time_minutes} min, ${stop.cost_usd:.2f}"
        )
    for i, warning_text in enumerate(cp.warnings, start=1):
        charging[f"Warning {i}"] = warning_text
    print_summary("CHARGING PLAN", charging)

    impact = {
        "Efficiency score": plan.metrics.efficiency_score,
        "CO2 saved (kg)": plan.metrics.co2_saved_kg,
        "Fuel cost saved (USD)": plan.metrics.fuel_cost_saved,
        "Elevation/wind delta (%)": plan.environment.combined_delta_pct,
        "Weather range delta (%)": plan.predictions.range_delta_percent,
        "Degradation risk": plan.predictions.battery_degradation_risk,
        "Traffic": plan.traffic.congestion_level if plan.traffic else "n/a",
        "Traffic alerts": len(plan.traffic_alerts),
    }
    for point, weather in plan.weather_impacts.items():
        impact[f"Weather at {point}"] = f"efficiency x{weather.efficiency:g}, range -{weather.range_loss_pct}%"
    print_summary("TRIP IMPACT", impact)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Plan charging stops and energy feasibility for an EV trip")
    parser.add_argument('request', type=str, help='Planning request (YAML or JSON)')
    parser.add_argument('--strategy', type=str, choices=list(VALID_STRATEGIES), default=None,
                        help='Charging strategy (overrides the request)')
    parser.add_argument('--route', type=str, default=None, help='Route id to plan (default: recommended route)')
    parser.add_argument('--log-mode', type=str, choices=sorted(LOGGING_MODES), default=None)
    parser.add_argument('--overrides', type=str, default=str(OVERRIDES_PATH), help='YAML config overrides')
    parser.add_argument('--no-station-lookup', action='store_true',
                        help='Do not query OpenChargeMap when the request lists no stations')
    parser.add_argument('--no-traffic', action='store_true', help='Skip the traffic snapshot')
    parser.add_argument('--output', type=str, default=None, help='Write the full plan as JSON')
    args = parser.parse_args(argv)

    setup_logger(args.log_mode)

    runtime = merged_runtime_config(Path(args.overrides))

    try:
        request = PlanningRequest.from_dict(load_request(args.request), runtime['ev_models_parameters'])
    except (OSError, ValueError, KeyError, TypeError, yaml.YAMLError) as e:
        error(f"Could not load planning request {args.request}: {e}", "cli")
        return 2
    if args.strategy:
        request.strategy = args.strategy
    if args.route:
        request.selected_route_id = args.route

    traffic_cache = None if args.no_traffic else TrafficSnapshotCache(config=runtime['traffic'])
    station_directory = None if args.no_station_lookup else OpenChargeMapAPI()
    service = TripPlanningService(traffic_cache=traffic_cache, station_directory=station_directory,
                                  config=runtime['planner'], pricing_config=runtime['pricing'])

    try:
        plan = service.plan_trip(request)
    except ValueError as e:
        error(f"Planning failed: {e}", "cli")
        return 1

    summarize(plan)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(plan.to_dict(), indent=2), encoding="utf-8")
        info(f"Plan written to {output_path}", "cli")
    return 0


if __name__ == "__main__":
    sys.exit(main())
