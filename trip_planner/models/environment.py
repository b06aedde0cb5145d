"""
Elevation, wind and weather adjustments to expected range.

The wind projection assumes a fixed travel bearing of 0 degrees (absolute
compass projection) unless a route bearing is supplied.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Sequence

import numpy as np

from planner_config.planner_config import PLANNER_CONFIG
from trip_planner.models.entities import (
    ElevationSample,
    ElevationWindImpact,
    WeatherImpact,
    WindSample,
)
from trip_planner.utils.logger import get_logger

logger = get_logger('environment')


def _elevation_changes(samples: Sequence[ElevationSample]):
    if len(samples) < 2:
        return 0.0, 0.0
    deltas = np.diff(np.array([s.elevation_m for s in samples], dtype=float))
    gain = float(deltas[deltas > 0].sum())
    loss = float(-deltas[deltas < 0].sum())
    return gain, loss


def _wind_components(samples: Sequence[WindSample], route_bearing_deg: Optional[float]):
    if not samples:
        return 0.0, 0.0, 0.0
    avg_speed = float(np.mean([w.speed_mph for w in samples]))
    avg_direction = float(np.mean([w.direction_deg for w in samples]))
    if route_bearing_deg is not None:
        avg_direction -= route_bearing_deg

    headwind = max(0.0, avg_speed * math.cos((avg_direction - 180) * math.pi / 180))
    tailwind = max(0.0, avg_speed * math.cos(avg_direction * math.pi / 180))
    crosswind = abs(avg_speed * math.sin(avg_direction * math.pi / 180))
    return headwind, tailwind, crosswind


def analyze_elevation_wind_impact(
    elevation_samples: Sequence[ElevationSample],
    wind_samples: Sequence[WindSample],
    route_bearing_deg: Optional[float] = None,
    config: Optional[Dict[str, Any]] = None,
) -> ElevationWindImpact:
    """
    Summarise elevation and wind along a route and estimate the range delta.

    Positive deltas mean more energy is needed. Empty inputs produce an
    all-zero result with no recommendations.
    """
    cfg = config or PLANNER_CONFIG

    gain, loss = _elevation_changes(elevation_samples)
    net_change = gain - loss
    headwind, tailwind, crosswind = _wind_components(wind_samples, route_bearing_deg)

    elevation_delta = (net_change / 1000) * cfg['elevation_pct_per_1000m']
    wind_delta = (headwind - tailwind) * cfg['wind_pct_per_mph']

    recommendations = []
    if gain > cfg['elevation_gain_warning_m']:
        recommendations.append(f"Expect 15-25% range reduction due to {round(gain)}m elevation gain")
    if headwind > cfg['headwind_warning_mph']:
        recommendations.append(f"Strong headwind ({round(headwind)} mph) will reduce range by 5-10%")
    if tailwind > cfg['tailwind_note_mph']:
        recommendations.append(f"Tailwind ({round(tailwind)} mph) will improve range by 3-7%")
    if crosswind > cfg['crosswind_note_mph']:
        recommendations.append(f"Crosswind ({round(crosswind)} mph) may affect stability")
    if elevation_samples and abs(net_change) < cfg['flat_route_threshold_m']:
        recommendations.append("Route is relatively flat - minimal elevation impact")

    impact = ElevationWindImpact(
        elevation_gain=gain,
        elevation_loss=loss,
        net_change=net_change,
        headwind_mph=headwind,
        tailwind_mph=tailwind,
        crosswind_mph=crosswind,
        elevation_delta_pct=elevation_delta,
        wind_delta_pct=wind_delta,
        combined_delta_pct=elevation_delta + wind_delta,
        recommendations=recommendations,
    )
    logger.debug(
        f"Elevation +{gain:.0f}/-{loss:.0f} m, wind head {headwind:.1f} tail {tailwind:.1f} "
        f"cross {crosswind:.1f} mph -> {impact.combined_delta_pct:+.2f}%"
    )
    return impact


def calculate_weather_impact(temp_f: float, condition: str) -> WeatherImpact:
    """Efficiency multiplier for ambient temperature and precipitation (65-75F is ideal)."""
    efficiency = 1.0
    message = None

    if temp_f < 20:
        efficiency *= 0.70
        message = "Extreme cold reducing range by ~30%"
    elif temp_f < 40:
        efficiency *= 0.85
        message = "Cold weather affecting battery efficiency"
    elif temp_f > 95:
        efficiency *= 0.85
        message = "High heat increasing energy consumption"

    condition = condition or ""
    if 'Rain' in condition or 'Drizzle' in condition:
        efficiency *= 0.95
    elif 'Snow' in condition:
        efficiency *= 0.90
        message = f"{message} & Snow" if message else "Snow increasing rolling resistance"

    return WeatherImpact(
        efficiency=efficiency,
        range_loss_pct=int(round((1 - efficiency) * 100)),
        # Cold batteries charge slower
        charging_speed_factor=0.8 if temp_f < 40 else 1.0,
        message=message,
    )
