"""
In-process traffic/incident source.

Stands in for a live traffic provider: produces a plausible TrafficSnapshot
for an origin/destination pair. A real provider only needs to offer the same
`generate(origin, destination, now)` call.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import numpy as np

from planner_config.traffic_config import CONGESTION_LEVELS, TRAFFIC_CONFIG
from trip_planner.models.entities import (
    LatLng,
    RoadConditions,
    TrafficIncident,
    TrafficRoute,
    TrafficSnapshot,
)


class TrafficSimulator:
    def __init__(self, seed: Optional[int] = None, config: Optional[Dict[str, Any]] = None):
        self.config = config or TRAFFIC_CONFIG
        self.rng = np.random.default_rng(seed)

    def _randint(self, low: int, high: int) -> int:
        """Inclusive on both ends."""
        return int(self.rng.integers(low, high + 1))

    def _route_geometry(self, origin: LatLng, destination: LatLng, offset: float) -> List[LatLng]:
        """Straight line between the endpoints with jittered interior points."""
        steps = self.config['geometry_steps']
        points = [tuple(origin)]
        for i in range(1, steps):
            t = i / steps
            lat = origin[0] + (destination[0] - origin[0]) * t + (self.rng.random() - 0.5) * offset
            lng = origin[1] + (destination[1] - origin[1]) * t + (self.rng.random() - 0.5) * offset
            points.append((float(lat), float(lng)))
        points.append(tuple(destination))
        return points

    def _alternative_routes(self, origin: LatLng, destination: LatLng) -> List[TrafficRoute]:
        base = self.config['base_duration_min']
        offset_1, offset_2 = self.config['alternative_offsets']
        return [
            TrafficRoute(
                id='alt1',
                name='Alternative Route 1',
                duration_min=base + self._randint(5, 19),
                distance_miles=self._randint(25, 34),
                delay_min=self._randint(2, 21),
                congestion_level='low',
                geometry=self._route_geometry(origin, destination, offset_1),
                summary='Scenic route with less traffic',
            ),
            TrafficRoute(
                id='alt2',
                name='Alternative Route 2',
                duration_min=base + self._randint(10, 34),
                distance_miles=self._randint(30, 44),
                delay_min=self._randint(5, 34),
                congestion_level='medium',
                geometry=self._route_geometry(origin, destination, offset_2),
                summary='Highway route with moderate traffic',
                warnings=['Construction ahead'],
            ),
        ]

    def _incidents(self, origin: LatLng, destination: LatLng, now: datetime) -> List[TrafficIncident]:
        if self.rng.random() >= self.config['incident_probability']:
            return []
        jitter = self.config['incident_jitter_deg']
        return [TrafficIncident(
            id='inc1',
            type='construction',
            severity='medium',
            description='Road construction along the route',
            latitude=float((origin[0] + destination[0]) / 2 + (self.rng.random() - 0.5) * jitter),
            longitude=float((origin[1] + destination[1]) / 2 + (self.rng.random() - 0.5) * jitter),
            start_time=now.isoformat(),
            impact='moderate',
        )]

    def generate(self, origin: LatLng, destination: LatLng, now: Optional[datetime] = None) -> TrafficSnapshot:
        now = now or datetime.now(timezone.utc)
        delay_low, delay_high = self.config['delay_min_range']
        conf_low, conf_high = self.config['confidence_range']

        congestion_level = CONGESTION_LEVELS[self._randint(0, len(CONGESTION_LEVELS) - 1)]
        closures = []
        if self.rng.random() < self.config['closure_probability']:
            closures = list(self.config['closure_messages'][:1])
        road_conditions = RoadConditions(
            weather=str(self.rng.choice(self.config['weather_conditions'])),
            construction=bool(self.rng.random() < self.config['construction_probability']),
            closures=closures,
        )

        return TrafficSnapshot(
            current_delay_min=self._randint(delay_low, delay_high),
            congestion_level=congestion_level,
            alternative_routes=self._alternative_routes(origin, destination),
            incidents=self._incidents(origin, destination, now),
            confidence=self._randint(conf_low, conf_high),
            last_updated=now.isoformat(),
            road_conditions=road_conditions,
        )
