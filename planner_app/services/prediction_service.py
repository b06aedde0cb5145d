"""
Trip risk predictions (battery stress, charging windows, weather range delta).
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence

from planner_config.api_config import INFERENCE_CONFIG
from planner_config.planner_config import PREDICTION_CONFIG
from planner_app.services.inference_client import InferenceClient
from trip_planner.models.entities import (
    ChargingWindow,
    EVModel,
    RouteCandidate,
    TripPredictions,
    WeatherPoint,
)
from trip_planner.utils.json_extraction import as_float, as_str, as_str_list, extract_json_object
from trip_planner.utils.logger import get_logger

logger = get_logger('predictions')

_ADVERSE_WEATHER_RE = re.compile(r"rain|snow|storm|wind", re.IGNORECASE)
_RISK_LEVELS = ('low', 'medium', 'high')


def build_predictions_prompt(starting_battery_pct: float, ev_model: EVModel, route: RouteCandidate,
                             weather: Sequence[WeatherPoint]) -> str:
    weather_text = "; ".join(f"{w.point}: {w.temp_f:g}F, {w.condition}" for w in weather)
    return "\n".join([
        "Analyze EV trip risks and recommendations. Return JSON with keys: ",
        "batteryDegradationRisk (low|medium|high), ",
        "optimalChargingWindows (array of {start, end, reason}), ",
        "weatherImpact ({rangeDeltaPercent, notes}).",
        f"EV: {ev_model.display_name}, range {ev_model.range_miles:g}mi, "
        f"eff {ev_model.efficiency_kwh_per_mile:g}kWh/mi, battery {ev_model.battery_capacity_kwh:g}kWh.",
        f"Trip: distance {route.distance_miles:g}mi, duration {route.duration_min:g}min, "
        f"startingBattery {starting_battery_pct:g}%.",
        f"Weather: {weather_text}.",
        "Assume typical U.S. TOU: off-peak 10pm-6am; prefer windows that minimize cost and degradation.",
    ])


def parse_predictions(text: Optional[str]) -> Optional[TripPredictions]:
    extracted = extract_json_object(text)
    if not extracted.ok:
        logger.warning(f"Could not parse prediction reply: {extracted.error}")
        return None
    parsed = extracted.value

    risk = as_str(parsed.get('batteryDegradationRisk'), 'medium').lower()
    if risk not in _RISK_LEVELS:
        risk = 'medium'

    windows = []
    raw_windows = parsed.get('optimalChargingWindows')
    if isinstance(raw_windows, list):
        for item in raw_windows:
            item = item if isinstance(item, dict) else {}
            windows.append(ChargingWindow(start=as_str(item.get('start')), end=as_str(item.get('end')),
                                          reason=as_str(item.get('reason'))))

    weather_impact = parsed.get('weatherImpact')
    weather_impact = weather_impact if isinstance(weather_impact, dict) else {}
    return TripPredictions(
        battery_degradation_risk=risk,
        optimal_charging_windows=windows,
        range_delta_percent=as_float(weather_impact.get('rangeDeltaPercent'), 0.0),
        notes=as_str_list(weather_impact.get('notes')),
        source='ai',
    )


def local_predictions(starting_battery_pct: float, weather: Sequence[WeatherPoint],
                      config: Optional[Dict[str, Any]] = None) -> TripPredictions:
    cfg = config or PREDICTION_CONFIG
    temps = [w.temp_f for w in weather]
    avg_temp = sum(temps) / len(temps) if temps else cfg['default_temp_f']

    range_delta = 0.0
    for comparison, threshold, delta in cfg['range_delta_rules']:
        if (comparison == 'lt' and avg_temp < threshold) or (comparison == 'gt' and avg_temp > threshold):
            range_delta = delta
            break

    risk = 'medium' if starting_battery_pct > cfg['medium_risk_battery_pct'] else 'low'

    notes: List[str] = []
    if range_delta < 0:
        notes.append("Expect reduced range due to temperature")
    if any(_ADVERSE_WEATHER_RE.search(w.condition or "") for w in weather):
        notes.append("Adverse weather can increase consumption")

    return TripPredictions(
        battery_degradation_risk=risk,
        optimal_charging_windows=[ChargingWindow(**cfg['off_peak_window'])],
        range_delta_percent=range_delta,
        notes=notes,
        source='fallback',
    )


class PredictionService:
    def __init__(self, client: Optional[InferenceClient] = None,
                 config: Optional[Dict[str, Any]] = None,
                 inference_config: Optional[Dict[str, Any]] = None):
        self.client = client or InferenceClient()
        self.config = config or PREDICTION_CONFIG
        self.inference_config = inference_config or INFERENCE_CONFIG

    def analyze_predictions(self, starting_battery_pct: float, ev_model: EVModel, route: RouteCandidate,
                            weather: Sequence[WeatherPoint] = ()) -> TripPredictions:
        if self.client.enabled:
            try:
                reply = self.client.generate(
                    build_predictions_prompt(starting_battery_pct, ev_model, route, weather),
                    temperature=self.inference_config['prediction_temperature'],
                    max_output_tokens=self.inference_config['prediction_max_tokens'],
                )
                predictions = parse_predictions(reply) if reply is not None else None
            except Exception as e:
                logger.error(f"Prediction inference failed unexpectedly: {e}")
                predictions = None
            if predictions is not None:
                return predictions
        return local_predictions(starting_battery_pct, weather, self.config)
