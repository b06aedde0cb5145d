"""
Planning facade: runs every planning component for one request and
collects the results into a single TripPlan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from planner_config.planner_config import PLANNER_CONFIG, PRICING_CONFIG
from planner_app.services.prediction_service import PredictionService
from planner_app.services.recommendation_service import RecommendationService, TripAnalysisInput
from planner_app.services.traffic_cache import TrafficSnapshotCache, derive_traffic_alerts
from trip_planner.data_processing.openchargemap_api import to_station_candidates
from trip_planner.models.charge_optimizer import optimize_charging_stops
from trip_planner.models.entities import (
    ChargingStationCandidate,
    ElevationSample,
    ElevationWindImpact,
    EVModel,
    LatLng,
    RangePrediction,
    Recommendation,
    RouteCandidate,
    SOCOptimizationResult,
    TrafficAlert,
    TrafficSnapshot,
    TripMetrics,
    TripPredictions,
    WeatherImpact,
    WeatherPoint,
    WindSample,
    to_dict,
)
from trip_planner.models.environment import analyze_elevation_wind_impact, calculate_weather_impact
from trip_planner.models.range_model import get_ev_model, predict_range
from trip_planner.models.trip_metrics import calculate_trip_metrics
from trip_planner.utils.geo import initial_bearing
from trip_planner.utils.logger import get_logger

logger = get_logger('planning')


@dataclass
class PlanningRequest:
    ev_model: EVModel
    routes: List[RouteCandidate]
    starting_battery_pct: float
    selected_route_id: Optional[str] = None
    stations: List[ChargingStationCandidate] = field(default_factory=list)
    strategy: str = "balanced"
    origin: str = "Origin"
    destination: str = "Destination"
    origin_coords: Optional[LatLng] = None
    destination_coords: Optional[LatLng] = None
    # Route geometry used for the station lookup when no stations are supplied
    route_points: List[LatLng] = field(default_factory=list)
    departure_time: Optional[datetime] = None
    elevation_samples: List[ElevationSample] = field(default_factory=list)
    wind_samples: List[WindSample] = field(default_factory=list)
    weather_points: List[WeatherPoint] = field(default_factory=list)
    # Project wind onto the origin->destination bearing instead of due north
    route_relative_wind: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any],
                  ev_models_parameters: Optional[Dict[str, Dict[str, Any]]] = None) -> "PlanningRequest":
        """
        Build a request from plain data (as loaded from YAML or JSON).

        `ev_models_parameters` holds per-model overrides from the runtime
        config; values given inline in the request take precedence.
        """
        model_overrides = ev_models_parameters or {}
        ev_data = data.get('ev_model', {})
        if isinstance(ev_data, str):
            ev_model = get_ev_model(ev_data, model_overrides.get(ev_data))
        elif 'key' in ev_data:
            inline = {k: v for k, v in ev_data.items() if k != 'key'}
            ev_model = get_ev_model(ev_data['key'], {**model_overrides.get(ev_data['key'], {}), **inline})
        else:
            ev_model = EVModel(**ev_data)

        def _coords(value):
            return (float(value[0]), float(value[1])) if value else None

        departure = data.get('departure_time')
        if isinstance(departure, str):
            departure = datetime.fromisoformat(departure)

        return cls(
            ev_model=ev_model,
            routes=[RouteCandidate(**r) for r in data.get('routes', [])],
            starting_battery_pct=float(data['starting_battery_pct']),
            selected_route_id=data.get('selected_route_id'),
            stations=[ChargingStationCandidate(**s) for s in data.get('stations', [])],
            strategy=data.get('strategy', PLANNER_CONFIG['default_strategy']),
            origin=data.get('origin', 'Origin'),
            destination=data.get('destination', 'Destination'),
            origin_coords=_coords(data.get('origin_coords')),
            destination_coords=_coords(data.get('destination_coords')),
            route_points=[_coords(p) for p in data.get('route_points', [])],
            departure_time=departure,
            elevation_samples=[ElevationSample(**s) for s in data.get('elevation_samples', [])],
            wind_samples=[WindSample(**s) for s in data.get('wind_samples', [])],
            weather_points=[WeatherPoint(**w) for w in data.get('weather_points', [])],
            route_relative_wind=bool(data.get('route_relative_wind', False)),
        )


@dataclass
class TripPlan:
    route: RouteCandidate
    recommendation: Recommendation
    metrics: TripMetrics
    range_prediction: RangePrediction
    charging_plan: SOCOptimizationResult
    environment: ElevationWindImpact
    predictions: TripPredictions
    weather_impacts: Dict[str, WeatherImpact] = field(default_factory=dict)
    stations: List[ChargingStationCandidate] = field(default_factory=list)
    traffic: Optional[TrafficSnapshot] = None
    traffic_alerts: List[TrafficAlert] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return to_dict(self)


class TripPlanningService:
    def __init__(self, recommendation_service: Optional[RecommendationService] = None,
                 traffic_cache: Optional[TrafficSnapshotCache] = None,
                 prediction_service: Optional[PredictionService] = None,
                 station_directory: Optional[Any] = None,
                 config: Optional[Dict[str, Any]] = None,
                 pricing_config: Optional[Dict[str, Any]] = None):
        self.recommendation_service = recommendation_service or RecommendationService()
        self.traffic_cache = traffic_cache
        self.prediction_service = prediction_service or PredictionService()
        # Anything offering get_stations_along_route(points) -> DataFrame, e.g. OpenChargeMapAPI
        self.station_directory = station_directory
        self.config = config or PLANNER_CONFIG
        self.pricing_config = pricing_config or PRICING_CONFIG

    def _select_route(self, request: PlanningRequest, recommendation: Recommendation) -> RouteCandidate:
        by_id = {r.id: r for r in request.routes}
        if request.selected_route_id is not None:
            if request.selected_route_id not in by_id:
                raise ValueError(f"Unknown route id '{request.selected_route_id}'")
            return by_id[request.selected_route_id]
        return by_id[recommendation.recommended_route_id]

    def _stations(self, request: PlanningRequest) -> List[ChargingStationCandidate]:
        if request.stations or self.station_directory is None:
            return list(request.stations)

        points = list(request.route_points)
        if not points and request.origin_coords and request.destination_coords:
            points = [request.origin_coords, request.destination_coords]
        if not points:
            return []

        df = self.station_directory.get_stations_along_route(points)
        stations = to_station_candidates(df, when=request.departure_time, pricing_config=self.pricing_config)
        logger.info(f"Station directory returned {len(stations)} stations along the route")
        return stations

    def _traffic(self, request: PlanningRequest):
        if self.traffic_cache is None or request.origin_coords is None or request.destination_coords is None:
            return None, []
        try:
            snapshot = self.traffic_cache.get_traffic_data(request.origin_coords, request.destination_coords)
        except Exception as e:
            logger.error(f"Traffic lookup failed: {e}")
            return None, []
        return snapshot, derive_traffic_alerts(snapshot)

    def plan_trip(self, request: PlanningRequest) -> TripPlan:
        if not request.routes:
            raise ValueError("At least one route candidate is required")

        recommendation = self.recommendation_service.analyze_trip(TripAnalysisInput(
            origin=request.origin,
            destination=request.destination,
            starting_battery_pct=request.starting_battery_pct,
            ev_model=request.ev_model,
            routes=request.routes,
        ))
        route = self._select_route(request, recommendation)
        logger.info(f"Planning {route.name or route.id}: {route.distance_miles:g} mi "
                    f"from {request.starting_battery_pct:g}% ({request.strategy})")

        range_prediction = predict_range(route.distance_miles, request.starting_battery_pct,
                                         request.ev_model, self.config)
        stations = self._stations(request)
        charging_plan = optimize_charging_stops(
            route.distance_miles,
            request.starting_battery_pct,
            request.ev_model,
            stations,
            strategy=request.strategy,
            config=self.config,
        )

        bearing = None
        if request.route_relative_wind and request.origin_coords and request.destination_coords:
            bearing = initial_bearing(request.origin_coords, request.destination_coords)
        environment = analyze_elevation_wind_impact(request.elevation_samples, request.wind_samples,
                                                    route_bearing_deg=bearing, config=self.config)
        weather_impacts = {w.point: calculate_weather_impact(w.temp_f, w.condition)
                           for w in request.weather_points}

        predictions = self.prediction_service.analyze_predictions(
            request.starting_battery_pct, request.ev_model, route, request.weather_points
        )
        traffic, alerts = self._traffic(request)

        return TripPlan(
            route=route,
            recommendation=recommendation,
            metrics=calculate_trip_metrics(route, request.ev_model, self.config),
            range_prediction=range_prediction,
            charging_plan=charging_plan,
            environment=environment,
            predictions=predictions,
            weather_impacts=weather_impacts,
            stations=stations,
            traffic=traffic,
            traffic_alerts=alerts,
        )
