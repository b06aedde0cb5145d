import json
from unittest.mock import MagicMock

from planner_app.services.inference_client import InferenceClient
from planner_app.services.prediction_service import PredictionService, local_predictions
from trip_planner.models.entities import WeatherPoint


def _weather(*points):
    names = ["start", "midpoint", "end"]
    return [WeatherPoint(point=names[i], temp_f=t, condition=c) for i, (t, c) in enumerate(points)]


def _client_replying(text):
    response = MagicMock(ok=True, status_code=200)
    response.json.return_value = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
    session = MagicMock()
    session.post.return_value = response
    return InferenceClient(api_key="test-key", session=session), session


def test_cold_snowy_trip():
    predictions = local_predictions(95, _weather((30, "Cloudy"), (35, "Light Snow"), (40, "Clear")))

    assert predictions.range_delta_percent == -15
    assert predictions.battery_degradation_risk == "medium"
    assert predictions.notes == [
        "Expect reduced range due to temperature",
        "Adverse weather can increase consumption",
    ]


def test_hot_trip():
    predictions = local_predictions(60, _weather((88, "Sunny"), (92, "Sunny")))

    assert predictions.range_delta_percent == -6
    assert predictions.battery_degradation_risk == "low"


def test_no_weather_defaults_to_mild():
    predictions = local_predictions(80, [])

    assert predictions.range_delta_percent == 0
    assert predictions.notes == []
    assert len(predictions.optimal_charging_windows) == 1
    window = predictions.optimal_charging_windows[0]
    assert (window.start, window.end) == ("22:00", "06:00")
    assert predictions.source == "fallback"


def test_ai_predictions_are_parsed(model_3, routes):
    reply = json.dumps({
        "batteryDegradationRisk": "HIGH",
        "optimalChargingWindows": [{"start": "23:00", "end": "05:00", "reason": "Cheap"}],
        "weatherImpact": {"rangeDeltaPercent": "-12", "notes": ["Headwinds"]},
    })
    client, session = _client_replying(reply)

    predictions = PredictionService(client=client).analyze_predictions(80, model_3, routes[0], [])

    assert predictions.source == "ai"
    assert predictions.battery_degradation_risk == "high"
    assert predictions.optimal_charging_windows[0].start == "23:00"
    assert predictions.range_delta_percent == -12
    config = session.post.call_args.kwargs["json"]["generationConfig"]
    assert config["temperature"] == 0.2
    assert config["maxOutputTokens"] == 400


def test_ai_predictions_lenient_defaults(model_3, routes):
    client, _ = _client_replying('{"batteryDegradationRisk": "extreme"}')

    predictions = PredictionService(client=client).analyze_predictions(80, model_3, routes[0], [])

    assert predictions.source == "ai"
    assert predictions.battery_degradation_risk == "medium"
    assert predictions.optimal_charging_windows == []
    assert predictions.range_delta_percent == 0


def test_unparseable_reply_falls_back(model_3, routes):
    client, _ = _client_replying("I cannot help with that.")

    predictions = PredictionService(client=client).analyze_predictions(80, model_3, routes[0], [])

    assert predictions.source == "fallback"
