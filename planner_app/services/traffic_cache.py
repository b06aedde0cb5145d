from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from planner_config.logging_config import is_detailed_logging_enabled
from planner_config.traffic_config import TRAFFIC_CONFIG
from trip_planner.data_processing.traffic_simulator import TrafficSimulator
from trip_planner.models.entities import LatLng, TrafficAlert, TrafficSnapshot
from trip_planner.utils.logger import get_logger, log_detailed

logger = get_logger('traffic_cache')

CacheKey = Tuple[float, float, float, float]


class TrafficSnapshotCache:
    """Time-bounded cache over a traffic source, keyed by rounded coordinates.

    Staleness is checked lazily on read; an expired entry is simply
    overwritten by a freshly generated snapshot. The cache is meant to be
    created by the caller and passed into each planning request.
    """

    def __init__(self, source: Optional[Any] = None, ttl_seconds: Optional[float] = None,
                 clock: Callable[[], float] = time.time, config: Optional[Dict[str, Any]] = None):
        self.config = config or TRAFFIC_CONFIG
        self.source = source or TrafficSimulator(config=self.config)
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else self.config['cache_ttl_seconds']
        self.clock = clock
        self._entries: Dict[CacheKey, Dict[str, Any]] = {}
        self.hits = 0
        self.misses = 0

    def _cache_key(self, origin: LatLng, destination: LatLng) -> CacheKey:
        digits = self.config['coordinate_precision']
        return (
            round(float(origin[0]), digits),
            round(float(origin[1]), digits),
            round(float(destination[0]), digits),
            round(float(destination[1]), digits),
        )

    def get_traffic_data(self, origin: LatLng, destination: LatLng) -> TrafficSnapshot:
        """Return the cached snapshot while fresh, otherwise generate and store a new one."""
        cache_key = self._cache_key(origin, destination)
        now = self.clock()

        entry = self._entries.get(cache_key)
        if entry is not None and now - entry['timestamp'] < self.ttl_seconds:
            self.hits += 1
            return entry['data']

        self.misses += 1
        generated_at = datetime.fromtimestamp(now, tz=timezone.utc)
        snapshot = self.source.generate(origin, destination, now=generated_at)
        self._entries[cache_key] = {'data': snapshot, 'timestamp': now}

        logger.debug(f"Traffic snapshot refreshed for {cache_key}: {snapshot.congestion_level}, "
                     f"{snapshot.current_delay_min} min delay")
        if is_detailed_logging_enabled('traffic'):
            log_detailed(f"{generated_at.isoformat()} {cache_key} -> {snapshot}", "traffic")
        return snapshot

    def get_traffic_alerts(self, origin: LatLng, destination: LatLng) -> List[TrafficAlert]:
        return derive_traffic_alerts(self.get_traffic_data(origin, destination))

    def clear(self):
        self._entries.clear()

    def get_stats(self) -> Dict[str, Any]:
        return {
            "total_items": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "ttl_seconds": self.ttl_seconds,
        }


def derive_traffic_alerts(snapshot: TrafficSnapshot) -> List[TrafficAlert]:
    """Map a traffic snapshot to user-facing alerts."""
    alerts: List[TrafficAlert] = []

    if snapshot.congestion_level == 'severe':
        alerts.append(TrafficAlert(
            id='severe-congestion',
            type='warning',
            title='Severe Traffic Congestion',
            message=(f"Heavy traffic detected with {snapshot.current_delay_min} minute delay. "
                     "Consider alternative routes."),
            severity='high',
            action='View Alternatives',
            dismissible=True,
        ))
    elif snapshot.congestion_level == 'high':
        alerts.append(TrafficAlert(
            id='high-congestion',
            type='info',
            title='Heavy Traffic',
            message=f"Traffic is heavier than usual with {snapshot.current_delay_min} minute delay.",
            severity='medium',
            dismissible=True,
        ))

    conditions = snapshot.road_conditions
    if conditions.construction:
        alerts.append(TrafficAlert(
            id='construction',
            type='warning',
            title='Road Construction',
            message='Construction work detected along your route. Expect delays.',
            severity='medium',
            dismissible=True,
        ))

    if conditions.closures:
        alerts.append(TrafficAlert(
            id='road-closure',
            type='error',
            title='Road Closure',
            message=f"Road closure detected: {conditions.closures[0]}",
            severity='high',
            action='Reroute',
            dismissible=False,
        ))

    for incident in snapshot.incidents:
        kind = incident.type or 'other'
        alerts.append(TrafficAlert(
            id=f"incident-{incident.id}",
            type='warning',
            title=f"{kind.capitalize()} Alert",
            message=incident.description,
            severity='critical' if incident.severity == 'severe' else incident.severity,
            dismissible=True,
            expires_at=incident.end_time,
        ))

    return alerts
