"""
External service settings (inference service, charging station directory).
Secrets are read from the environment; a local .env file is honoured.
"""

import os

from dotenv import load_dotenv

load_dotenv()

INFERENCE_CONFIG = {
    'base_url': 'https://generativelanguage.googleapis.com/v1beta/models',
    'model': os.getenv('GEMINI_MODEL', 'gemini-1.5-flash'),
    'api_key_env': 'GEMINI_API_KEY',
    'timeout_seconds': 20,
    # Route recommendation request
    'recommendation_temperature': 0.3,
    'recommendation_max_tokens': 512,
    # Trip prediction request
    'prediction_temperature': 0.2,
    'prediction_max_tokens': 400,
    'response_mime_type': 'application/json',
}

OPENCHARGEMAP_CONFIG = {
    'base_url': 'https://api.openchargemap.io/v3',
    'api_key_env': 'OPENCHARGEMAP_API_KEY',
    'default_radius_miles': 6.2,     # 10 km
    'max_results': 20,
    'route_sample_points': 5,
    'min_request_interval': 0.5,     # seconds between requests
    'timeout_seconds': 15,
}


def get_inference_api_key():
    """Return the inference API key, or None when the AI path is disabled."""
    key = os.getenv(INFERENCE_CONFIG['api_key_env'], '').strip()
    return key or None


def get_openchargemap_api_key():
    key = os.getenv(OPENCHARGEMAP_CONFIG['api_key_env'], '').strip()
    return key or None
