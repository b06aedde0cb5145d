import json
from unittest.mock import MagicMock

import requests

from planner_app.services.inference_client import InferenceClient
from planner_app.services.recommendation_service import (
    RecommendationService,
    TripAnalysisInput,
    local_recommendation,
)


def _trip(model_3, routes, battery=80):
    return TripAnalysisInput(origin="San Francisco", destination="Los Angeles",
                             starting_battery_pct=battery, ev_model=model_3, routes=routes)


def _session_replying(text, ok=True, status_code=200):
    response = MagicMock(ok=ok, status_code=status_code)
    response.json.return_value = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    session = MagicMock()
    session.post.return_value = response
    return session


def _service(session):
    return RecommendationService(client=InferenceClient(api_key="test-key", session=session))


def test_local_prefers_efficient_route(model_3, routes):
    recommendation = local_recommendation(_trip(model_3, routes))

    assert recommendation.recommended_route_id == "route-2"
    assert recommendation.confidence == 80
    assert recommendation.source == "fallback"
    assert recommendation.reasons[0] == "Energy efficiency 0.22 kWh/mi"
    assert "Requires at least one charging stop" in recommendation.risks
    assert recommendation.charging_plan[0].minutes == 25


def test_local_prefers_fastest_when_much_quicker(model_3, routes):
    routes[1].duration_min = 330
    recommendation = local_recommendation(_trip(model_3, routes))

    assert recommendation.recommended_route_id == "route-1"


def test_local_flags_slow_pick(model_3, routes):
    routes[1].duration_min = 318
    recommendation = local_recommendation(_trip(model_3, routes))

    assert recommendation.recommended_route_id == "route-2"
    assert "Significantly slower than the fastest route" in recommendation.risks


def test_unconfigured_service_is_deterministic(model_3, routes):
    session = MagicMock()
    service = RecommendationService(client=InferenceClient(api_key="", session=session))

    first = service.analyze_trip(_trip(model_3, routes))
    second = service.analyze_trip(_trip(model_3, routes))

    assert first == second
    assert first.source == "fallback"
    session.post.assert_not_called()


def test_ai_recommendation_is_used(model_3, routes):
    reply = json.dumps({
        "summary": "Route 1 is faster",
        "recommendedRouteId": "route-1",
        "confidence": 140,
        "reasons": ["Shorter"],
        "chargingPlan": [{"stop": "Kettleman City", "minutes": "20"}],
        "risks": [],
    })
    session = _session_replying(f"```json\n{reply}\n```")

    recommendation = _service(session).analyze_trip(_trip(model_3, routes))

    assert recommendation.source == "ai"
    assert recommendation.recommended_route_id == "route-1"
    assert recommendation.confidence == 100
    assert recommendation.charging_plan[0].minutes == 20
    payload = session.post.call_args.kwargs["json"]
    assert payload["generationConfig"]["temperature"] == 0.3
    assert session.post.call_args.kwargs["params"] == {"key": "test-key"}


def test_missing_confidence_defaults(model_3, routes):
    session = _session_replying('{"recommendedRouteId": "route-2"}')
    recommendation = _service(session).analyze_trip(_trip(model_3, routes))

    assert recommendation.source == "ai"
    assert recommendation.confidence == 75


def test_unknown_route_id_falls_back(model_3, routes):
    session = _session_replying('{"recommendedRouteId": "route-9", "confidence": 90}')
    recommendation = _service(session).analyze_trip(_trip(model_3, routes))

    assert recommendation.source == "fallback"
    assert recommendation.recommended_route_id == "route-2"


def test_http_error_falls_back(model_3, routes):
    session = _session_replying("", ok=False, status_code=503)
    recommendation = _service(session).analyze_trip(_trip(model_3, routes))

    assert recommendation.source == "fallback"


def test_network_error_falls_back(model_3, routes):
    session = MagicMock()
    session.post.side_effect = requests.exceptions.Timeout("slow")
    recommendation = _service(session).analyze_trip(_trip(model_3, routes))

    assert recommendation.source == "fallback"
    assert recommendation.recommended_route_id in {r.id for r in routes}


def test_no_routes(model_3):
    recommendation = RecommendationService(client=InferenceClient(api_key="")).analyze_trip(_trip(model_3, []))

    assert recommendation.recommended_route_id == ""
    assert recommendation.confidence == 0
