"""
Centralized configuration for trip planning.

Only energy / charging-plan knobs live here; traffic simulation, external
APIs and logging have their own modules.
"""

PLANNER_CONFIG = {
    # Feasibility
    # Percentage points of battery kept in reserve at the destination
    "safety_buffer_pct": 10.0,
    # Coarse advisory figure used by the range model only (SOC points gained per stop)
    "advisory_pct_per_stop": 50.0,

    # Charging stop selection
    "min_station_power_kw": 50.0,
    "max_charging_speed_kw": 150.0,
    "max_stops": 3,
    # A stop is scheduled when the battery would arrive below this level
    "stop_trigger_soc_pct": 20.0,

    # Target SOC per strategy: (ceiling, SOC points added)
    "strategy_targets": {
        "minimize_time": {"max_soc": 80.0, "soc_gain": 30.0},
        "minimize_cost": {"max_soc": 90.0, "soc_gain": 40.0},
        "balanced": {"max_soc": 85.0, "soc_gain": 35.0},
    },
    "strategy_reasons": {
        "minimize_time": "Fast charging for time efficiency",
        "minimize_cost": "Optimal charging for cost efficiency",
        "balanced": "Balanced charging strategy",
    },
    "default_strategy": "balanced",

    # Timing
    "average_speed_mph": 60.0,

    # Savings vs. charging to 100% at every stop
    "naive_target_soc_pct": 100.0,
    # Flat share of charging cost reported as saved; placeholder without physical basis
    "cost_savings_factor": 0.10,

    # Environmental adjustment
    "elevation_pct_per_1000m": 2.0,
    "wind_pct_per_mph": 0.5,
    "elevation_gain_warning_m": 500.0,
    "headwind_warning_mph": 10.0,
    "tailwind_note_mph": 10.0,
    "crosswind_note_mph": 15.0,
    "flat_route_threshold_m": 100.0,

    # Trip metrics
    "co2_kg_saved_per_mile": 0.404,
    "co2_kg_per_tree": 20.0,
    "gas_cost_per_mile": 0.14,
    "electricity_cost_per_kwh": 0.15,
    "min_efficiency_score": 40,
    "max_efficiency_score": 100,
}

# Route recommendation fallback (used when the inference service is unavailable)
RECOMMENDATION_CONFIG = {
    # Prefer the fastest route when the most efficient one is this much slower
    "fastest_preference_min": 20.0,
    # Flag a risk when the pick is this much slower than the fastest route
    "slower_risk_min": 15.0,
    "fallback_confidence": 80,
    "default_ai_confidence": 75,
    "minutes_per_charging_stop": 25,
}

# Trip prediction fallback
PREDICTION_CONFIG = {
    "default_temp_f": 70.0,
    "range_delta_rules": [
        # (comparison, threshold_f, range delta %) evaluated in order
        ("lt", 40.0, -15.0),
        ("lt", 55.0, -8.0),
        ("gt", 95.0, -10.0),
        ("gt", 85.0, -6.0),
    ],
    "medium_risk_battery_pct": 90.0,
    "off_peak_window": {"start": "22:00", "end": "06:00", "reason": "Off-peak rates and reduced battery stress"},
}

# Public charging tariff
PRICING_CONFIG = {
    "base_public_cost_per_kwh": 0.30,
    "base_home_cost_per_kwh": 0.15,
    # Inclusive hour ranges
    "peak_hours": [(16, 21)],
    "peak_pricing_multiplier": 1.5,
}

VALID_STRATEGIES = ("minimize_time", "minimize_cost", "balanced")

__all__ = [
    "PLANNER_CONFIG",
    "RECOMMENDATION_CONFIG",
    "PREDICTION_CONFIG",
    "PRICING_CONFIG",
    "VALID_STRATEGIES",
]
