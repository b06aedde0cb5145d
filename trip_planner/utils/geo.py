from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from geopy.distance import geodesic

LatLng = Tuple[float, float]


def initial_bearing(origin: LatLng, destination: LatLng) -> float:
    """Return heading in degrees from origin to destination (0-360)."""
    lat1, lon1 = origin
    lat2, lon2 = destination
    if (lat1 == lat2) and (lon1 == lon2):
        return 0.0
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dlon = math.radians(lon2 - lon1)
    x = math.sin(dlon) * math.cos(phi2)
    y = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlon)
    return float((math.degrees(math.atan2(x, y)) + 360.0) % 360.0)


def distance_miles(a: LatLng, b: LatLng) -> float:
    return float(geodesic(a, b).miles)


def cumulative_distances_miles(points: Sequence[LatLng]) -> List[float]:
    """Distance along a polyline from its first point to each vertex."""
    totals = [0.0]
    for prev, curr in zip(points, points[1:]):
        totals.append(totals[-1] + distance_miles(prev, curr))
    return totals


def sample_points(points: Sequence[LatLng], count: int) -> List[LatLng]:
    """Take roughly `count` evenly spaced vertices (first one always included)."""
    if not points:
        return []
    step = max(1, len(points) // max(1, count))
    return [p for i, p in enumerate(points) if i % step == 0]
