"""
Traffic snapshot cache and simulator settings
"""

CONGESTION_LEVELS = ('low', 'medium', 'high', 'severe')

TRAFFIC_CONFIG = {
    # Cache
    'cache_ttl_seconds': 120,        # 2 minutes for traffic data
    'coordinate_precision': 4,       # decimals used when building cache keys

    # Simulator
    'base_duration_min': 45,
    'delay_min_range': (5, 35),      # inclusive minutes
    'confidence_range': (80, 99),    # inclusive percent
    'alternative_offsets': (0.1, 0.2),
    'geometry_steps': 5,
    'incident_probability': 0.5,
    'construction_probability': 0.3,
    'closure_probability': 0.2,
    'weather_conditions': ['Clear', 'Cloudy', 'Rainy', 'Snowy'],
    'closure_messages': ['Main Street closed for event'],
    'incident_jitter_deg': 0.01,
}

__all__ = ["CONGESTION_LEVELS", "TRAFFIC_CONFIG"]
