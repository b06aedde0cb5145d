"""
Data model shared by the planning components.

Inputs (EV model, routes, stations, samples) are supplied by external
collaborators; everything else is derived per planning request.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple

Strategy = Literal["minimize_time", "minimize_cost", "balanced"]
CongestionLevel = Literal["low", "medium", "high", "severe"]
AlertType = Literal["warning", "info", "error", "success"]
AlertSeverity = Literal["low", "medium", "high", "critical"]
RiskLevel = Literal["low", "medium", "high"]
LatLng = Tuple[float, float]


@dataclass(frozen=True)
class EVModel:
    battery_capacity_kwh: float
    efficiency_kwh_per_mile: float
    range_miles: float
    manufacturer: str = ""
    model_name: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.manufacturer} {self.model_name}".strip() or "EV"


@dataclass
class RouteCandidate:
    id: str
    distance_miles: float
    duration_min: float
    energy_efficiency: float          # kWh per mile along this route
    estimated_cost: float
    name: str = ""
    battery_usage_pct: float = 0.0
    charging_stops: int = 0


@dataclass
class ChargingStationCandidate:
    power_kw: float
    cost_per_kwh: float
    distance_from_route_miles: float
    name: str = "Charging station"
    station_id: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass
class ChargeStop:
    stop_number: int
    location: str
    target_soc: float
    charging_speed_kw: float
    dwell_time_minutes: int
    cost_usd: float
    reason: str
    arrival_soc: float = 0.0


@dataclass
class SOCOptimizationResult:
    total_trip_time_min: float
    total_charging_time_min: float
    stops: List[ChargeStop]
    strategy: Strategy
    time_saved_min: float = 0.0
    cost_saved_usd: float = 0.0
    warnings: List[str] = field(default_factory=list)


@dataclass
class RangePrediction:
    can_reach: bool
    range_at_destination_miles: float
    needs_charging: bool
    suggested_stops: int
    battery_needed_pct: float = 0.0
    remaining_pct: float = 0.0


@dataclass
class ElevationSample:
    lat: float
    lng: float
    elevation_m: float
    cumulative_distance_miles: float


@dataclass
class WindSample:
    speed_mph: float
    direction_deg: float
    gust_mph: float = 0.0


@dataclass
class ElevationWindImpact:
    elevation_gain: float = 0.0
    elevation_loss: float = 0.0
    net_change: float = 0.0
    headwind_mph: float = 0.0
    tailwind_mph: float = 0.0
    crosswind_mph: float = 0.0
    elevation_delta_pct: float = 0.0
    wind_delta_pct: float = 0.0
    combined_delta_pct: float = 0.0
    recommendations: List[str] = field(default_factory=list)


@dataclass
class WeatherImpact:
    efficiency: float
    range_loss_pct: int
    charging_speed_factor: float
    message: Optional[str] = None


@dataclass
class TrafficRoute:
    id: str
    name: str
    duration_min: int
    distance_miles: int
    delay_min: int
    congestion_level: CongestionLevel
    geometry: List[LatLng]
    summary: str
    warnings: List[str] = field(default_factory=list)


@dataclass
class TrafficIncident:
    id: str
    type: str
    severity: CongestionLevel
    description: str
    latitude: float
    longitude: float
    start_time: str
    impact: str = "moderate"
    end_time: Optional[str] = None


@dataclass
class RoadConditions:
    weather: str = "Clear"
    construction: bool = False
    closures: List[str] = field(default_factory=list)


@dataclass
class TrafficSnapshot:
    current_delay_min: int
    congestion_level: CongestionLevel
    alternative_routes: List[TrafficRoute]
    incidents: List[TrafficIncident]
    confidence: int
    last_updated: str
    road_conditions: RoadConditions = field(default_factory=RoadConditions)


@dataclass
class TrafficAlert:
    id: str
    type: AlertType
    title: str
    message: str
    severity: AlertSeverity
    dismissible: bool
    action: Optional[str] = None
    expires_at: Optional[str] = None


@dataclass
class ChargingPlanEntry:
    stop: str
    minutes: float


@dataclass
class Recommendation:
    summary: str
    recommended_route_id: str
    confidence: float
    reasons: List[str] = field(default_factory=list)
    charging_plan: List[ChargingPlanEntry] = field(default_factory=list)
    risks: List[str] = field(default_factory=list)
    source: Literal["ai", "fallback"] = "fallback"


@dataclass
class TripMetrics:
    efficiency_score: int
    co2_saved_kg: float
    equivalent_trees: int
    fuel_cost_saved: float


@dataclass
class WeatherPoint:
    point: Literal["start", "midpoint", "end"]
    temp_f: float
    condition: str


@dataclass
class ChargingWindow:
    start: str
    end: str
    reason: str


@dataclass
class TripPredictions:
    battery_degradation_risk: RiskLevel
    optimal_charging_windows: List[ChargingWindow]
    range_delta_percent: float
    notes: List[str] = field(default_factory=list)
    source: Literal["ai", "fallback"] = "fallback"


def to_dict(entity: Any) -> Dict[str, Any]:
    """Plain-dict view of any entity (for JSON export)."""
    return asdict(entity)
