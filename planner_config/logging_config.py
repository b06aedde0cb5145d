"""
Logging configuration for the EV trip planner
Easy switching between different logging modes
"""

# =============================================================================
# LOGGING CONFIGURATIONS
# =============================================================================

# Production mode - minimal logging
PRODUCTION_LOGGING = {
    'log_level': 'WARNING',
    'enable_console': True,
    'enable_file': False,
    'detailed_logging': False,
    'log_format': 'minimal'
}

# Development mode - standard logging
DEVELOPMENT_LOGGING = {
    'log_level': 'INFO',
    'enable_console': True,
    'enable_file': False,
    'detailed_logging': False,
    'log_format': 'simple'
}

# Debug mode - detailed logging
DEBUG_LOGGING = {
    'log_level': 'DEBUG',
    'enable_console': True,
    'enable_file': True,
    'detailed_logging': True,
    'log_format': 'detailed'
}

# Silent mode - no logging
SILENT_LOGGING = {
    'log_level': 'CRITICAL',
    'enable_console': False,
    'enable_file': False,
    'detailed_logging': False,
    'log_format': 'minimal'
}

# Testing mode - file only logging
TESTING_LOGGING = {
    'log_level': 'DEBUG',
    'enable_console': False,
    'enable_file': True,
    'detailed_logging': True,
    'log_format': 'detailed'
}

LOGGING_MODES = {
    'PRODUCTION': PRODUCTION_LOGGING,
    'DEVELOPMENT': DEVELOPMENT_LOGGING,
    'DEBUG': DEBUG_LOGGING,
    'SILENT': SILENT_LOGGING,
    'TESTING': TESTING_LOGGING
}

# =============================================================================
# QUICK SWITCHES
# =============================================================================

# Change this to switch logging modes
CURRENT_LOGGING_MODE = 'DEVELOPMENT'  # Options: PRODUCTION, DEVELOPMENT, DEBUG, SILENT, TESTING

# =============================================================================
# MODULE-SPECIFIC LOGGING
# =============================================================================

# Enable/disable logging for specific modules
MODULE_LOGGING = {
    'range_model': True,
    'environment': True,
    'charge_optimizer': True,
    'traffic_cache': True,
    'recommendation': True,
    'predictions': True,
    'openchargemap_api': True,
    'planning': True,
    'inference': True,
    'cli': True,
}

# =============================================================================
# DETAILED LOGGING SETTINGS
# =============================================================================

# Enable detailed logging for specific components
DETAILED_LOGGING_COMPONENTS = {
    'charging_plan': False,   # Per-station decisions of the stop optimizer
    'inference': False,       # Raw prompts / replies of the inference service
    'traffic': False,         # Snapshot generation and cache hits
}

# =============================================================================
# LOG FILE SETTINGS
# =============================================================================

LOG_DIR = "debug_logs"

# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def get_logging_config(mode: str = None) -> dict:
    """Get logging configuration for specified mode"""
    if mode is None:
        mode = CURRENT_LOGGING_MODE
    return LOGGING_MODES.get(mode.upper(), DEVELOPMENT_LOGGING)

def is_module_logging_enabled(module_name: str) -> bool:
    """Check if logging is enabled for a specific module"""
    return MODULE_LOGGING.get(module_name, True)

def is_detailed_logging_enabled(component: str) -> bool:
    """Check if detailed logging is enabled for a specific component"""
    return DETAILED_LOGGING_COMPONENTS.get(component, False)

def switch_mode(mode: str):
    """Switch the current logging mode"""
    global CURRENT_LOGGING_MODE
    if mode.upper() not in LOGGING_MODES:
        raise ValueError(f"Unknown logging mode '{mode}'. Options: {', '.join(LOGGING_MODES)}")
    CURRENT_LOGGING_MODE = mode.upper()

def enable_module_logging(module_name: str):
    """Enable logging for a specific module"""
    MODULE_LOGGING[module_name] = True

def disable_module_logging(module_name: str):
    """Disable logging for a specific module"""
    MODULE_LOGGING[module_name] = False

def enable_detailed_logging(component: str):
    """Enable detailed logging for a specific component"""
    DETAILED_LOGGING_COMPONENTS[component] = True

def disable_detailed_logging(component: str):
    """Disable detailed logging for a specific component"""
    DETAILED_LOGGING_COMPONENTS[component] = False
