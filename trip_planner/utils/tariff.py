from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Dict, Optional

_PER_KWH_RE = re.compile(r"\$?\s*(\d+(?:\.\d+)?)\s*(?:/|per)\s*kwh", re.IGNORECASE)


def parse_usage_cost(text: Optional[str]) -> Optional[float]:
    """Pull a USD/kWh figure out of free-text usage cost (e.g. '$0.43/kWh')."""
    if not text:
        return None
    match = _PER_KWH_RE.search(text)
    if not match:
        return None
    return float(match.group(1))


def get_price_per_kwh(
    station: Optional[Dict[str, Any]],
    when: datetime,
    pricing_config: Dict[str, Any],
    is_home: bool = False,
) -> float:
    """
    Return USD/kWh for a charge starting at 'when'.

    Rules:
    - Home: flat rate from pricing_config['base_home_cost_per_kwh']
    - Public:
      base = station['estimated_cost_per_kwh'] when known, else
      pricing_config['base_public_cost_per_kwh'].
      Inside any peak interval of pricing_config['peak_hours'] the base is
      multiplied by pricing_config['peak_pricing_multiplier'].
    """
    if is_home:
        return float(pricing_config.get('base_home_cost_per_kwh', 0.15))

    base_price = float(pricing_config.get('base_public_cost_per_kwh', 0.30))
    if station is not None and station.get('estimated_cost_per_kwh') is not None:
        base_price = float(station['estimated_cost_per_kwh'])

    peak_hours = pricing_config.get('peak_hours', [])
    is_peak = any(start <= when.hour <= end for start, end in peak_hours)

    if is_peak:
        return base_price * float(pricing_config.get('peak_pricing_multiplier', 1.5))
    return base_price
