"""
Route recommendation: an optional inference-service pick composed with a
deterministic local ranking that always produces an answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from planner_config.api_config import INFERENCE_CONFIG
from planner_config.planner_config import RECOMMENDATION_CONFIG
from planner_app.services.inference_client import InferenceClient
from trip_planner.models.entities import (
    ChargingPlanEntry,
    EVModel,
    Recommendation,
    RouteCandidate,
)
from trip_planner.utils.json_extraction import as_float, as_str, as_str_list, extract_json_object
from trip_planner.utils.logger import get_logger

logger = get_logger('recommendation')


@dataclass
class TripAnalysisInput:
    origin: str
    destination: str
    starting_battery_pct: float
    ev_model: EVModel
    routes: Sequence[RouteCandidate]


def build_prompt(trip: TripAnalysisInput) -> str:
    ev = trip.ev_model
    header = "You are analyzing EV trip routes. Pick the best route and explain why."
    ev_text = (f"{ev.display_name}, range {ev.range_miles:g} mi, "
               f"efficiency {ev.efficiency_kwh_per_mile:g} kWh/mi")
    routes = "\n".join(
        f"- {r.id} {r.name or r.id}: {r.distance_miles:g} mi, {r.duration_min:g} min, "
        f"battery {r.battery_usage_pct:g}%, stops {r.charging_stops}, cost ${r.estimated_cost:.2f}"
        for r in trip.routes
    )
    body = (
        f"From {trip.origin} to {trip.destination}. Starting battery {trip.starting_battery_pct:g}%. "
        f"EV: {ev_text}. Routes:\n{routes}\n"
        "Return JSON with keys: summary, recommendedRouteId, confidence (0-100), reasons (array), "
        "chargingPlan (array of {stop, minutes}), risks (array)."
    )
    return f"{header}\n{body}"


def parse_recommendation(text: Optional[str], routes: Sequence[RouteCandidate],
                         config: Optional[Dict[str, Any]] = None) -> Optional[Recommendation]:
    """Lenient parse of a model reply; None unless it names one of `routes`."""
    cfg = config or RECOMMENDATION_CONFIG
    extracted = extract_json_object(text)
    if not extracted.ok:
        logger.warning(f"Could not parse inference reply: {extracted.error}")
        return None

    parsed = extracted.value
    route_id = as_str(parsed.get('recommendedRouteId'))
    if route_id not in {r.id for r in routes}:
        logger.warning(f"Inference reply recommended unknown route '{route_id}'")
        return None

    plan = []
    raw_plan = parsed.get('chargingPlan')
    if isinstance(raw_plan, list):
        for item in raw_plan:
            item = item if isinstance(item, dict) else {}
            plan.append(ChargingPlanEntry(stop=as_str(item.get('stop')),
                                          minutes=as_float(item.get('minutes'), 0.0)))

    confidence = as_float(parsed.get('confidence'), cfg['default_ai_confidence'])
    return Recommendation(
        summary=as_str(parsed.get('summary')),
        recommended_route_id=route_id,
        confidence=min(100.0, max(0.0, confidence)),
        reasons=as_str_list(parsed.get('reasons')),
        charging_plan=plan,
        risks=as_str_list(parsed.get('risks')),
        source='ai',
    )


def local_recommendation(trip: TripAnalysisInput,
                         config: Optional[Dict[str, Any]] = None) -> Recommendation:
    """
    Deterministic pick: the most energy-efficient route, unless the fastest
    route saves more than `fastest_preference_min` minutes.
    """
    cfg = config or RECOMMENDATION_CONFIG
    routes = list(trip.routes)
    if not routes:
        return Recommendation(
            summary="No routes available to compare",
            recommended_route_id="",
            confidence=0,
        )

    # min() keeps the first route on ties
    best = min(routes, key=lambda r: r.energy_efficiency)
    fastest = min(routes, key=lambda r: r.duration_min)
    recommended = fastest if best.duration_min - fastest.duration_min > cfg['fastest_preference_min'] else best

    reasons = [
        f"Energy efficiency {recommended.energy_efficiency:g} kWh/mi",
        f"Duration {recommended.duration_min:g} min",
        f"Estimated cost ${recommended.estimated_cost:.2f}",
    ]
    risks = []
    if recommended.battery_usage_pct > trip.starting_battery_pct or recommended.charging_stops > 0:
        risks.append("Requires at least one charging stop")
    if recommended.duration_min - fastest.duration_min > cfg['slower_risk_min']:
        risks.append("Significantly slower than the fastest route")

    charging_plan = []
    if recommended.charging_stops > 0:
        charging_plan.append(ChargingPlanEntry(
            stop="Mid-route fast charger",
            minutes=cfg['minutes_per_charging_stop'] * recommended.charging_stops,
        ))

    return Recommendation(
        summary=f"Recommended {recommended.name or recommended.id} balancing time and efficiency",
        recommended_route_id=recommended.id,
        confidence=cfg['fallback_confidence'],
        reasons=reasons,
        charging_plan=charging_plan,
        risks=risks,
        source='fallback',
    )


class RecommendationService:
    def __init__(self, client: Optional[InferenceClient] = None,
                 config: Optional[Dict[str, Any]] = None,
                 inference_config: Optional[Dict[str, Any]] = None):
        self.client = client or InferenceClient()
        self.config = config or RECOMMENDATION_CONFIG
        self.inference_config = inference_config or INFERENCE_CONFIG

    def _ai_recommendation(self, trip: TripAnalysisInput) -> Optional[Recommendation]:
        if not self.client.enabled or not trip.routes:
            return None
        reply = self.client.generate(
            build_prompt(trip),
            temperature=self.inference_config['recommendation_temperature'],
            max_output_tokens=self.inference_config['recommendation_max_tokens'],
        )
        if reply is None:
            return None
        return parse_recommendation(reply, trip.routes, self.config)

    def analyze_trip(self, trip: TripAnalysisInput) -> Recommendation:
        """Always returns a Recommendation; inference failures fall back to the local ranking."""
        try:
            recommendation = self._ai_recommendation(trip)
        except Exception as e:
            logger.error(f"Inference path failed unexpectedly: {e}")
            recommendation = None

        if recommendation is None:
            logger.info("Using local route ranking")
            recommendation = local_recommendation(trip, self.config)

        if trip.routes:
            assert recommendation.recommended_route_id in {r.id for r in trip.routes}, (
                f"recommended route '{recommendation.recommended_route_id}' not among inputs"
            )
        return recommendation
