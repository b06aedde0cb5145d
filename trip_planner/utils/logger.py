"""
Centralized logging module for the EV trip planner
Provides easy on/off switching and consistent logging across all modules
"""

import logging
import os
import sys
from datetime import datetime
from typing import Any, Dict, Optional

from planner_config.logging_config import (
    LOG_DIR,
    get_logging_config,
    is_module_logging_enabled,
)

ROOT_LOGGER_NAME = 'ev_trip'


class TripPlannerLogger:
    """
    Centralized logger for the trip planner
    Provides easy switching between different logging levels and outputs
    """

    def __init__(self,
                 log_level: str = "INFO",
                 enable_console: bool = True,
                 enable_file: bool = False,
                 log_dir: str = LOG_DIR,
                 detailed_logging: bool = False,
                 log_format: str = "simple"):
        """
        Initialize the logger

        Args:
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            enable_console: Whether to log to console
            enable_file: Whether to log to files
            log_dir: Directory for log files
            detailed_logging: Enable per-component detail files
            log_format: Log format style ("simple", "detailed", "minimal")
        """
        self.log_level = getattr(logging, log_level.upper())
        self.enable_console = enable_console
        self.enable_file = enable_file
        self.log_dir = log_dir
        self.detailed_logging = detailed_logging
        self.log_format = log_format

        if self.enable_file or self.detailed_logging:
            os.makedirs(self.log_dir, exist_ok=True)

        self._setup_loggers()

        # Track detailed logging files
        self.detailed_log_files = {}

    def _build_formatter(self) -> logging.Formatter:
        if self.log_format == "detailed":
            return logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
            )
        if self.log_format == "simple":
            return logging.Formatter('%(levelname)s - %(name)s - %(message)s')
        return logging.Formatter('%(message)s')

    def _setup_loggers(self):
        """Setup the root planner logger with proper configuration"""
        self.logger = logging.getLogger(ROOT_LOGGER_NAME)
        self.logger.setLevel(self.log_level)
        self.logger.handlers.clear()

        formatter = self._build_formatter()

        if self.enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.log_level)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if self.enable_file:
            timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
            log_file = os.path.join(self.log_dir, f'ev_trip_{timestamp}.log')

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(self.log_level)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

            self.log_file = log_file
        else:
            self.log_file = None

        if not self.logger.handlers:
            self.logger.addHandler(logging.NullHandler())

    def get_logger(self, name: str = None) -> logging.Logger:
        """Get a logger instance for a specific module"""
        if not name:
            return self.logger
        module_logger = logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')
        module_logger.disabled = not is_module_logging_enabled(name)
        return module_logger

    def print_summary(self, title: str, data: Dict[str, Any]):
        """Print a formatted summary"""
        if not self.enable_console:
            return

        print(f"\n{'='*50}")
        print(title)
        print(f"{'='*50}")

        for key, value in data.items():
            if isinstance(value, float):
                print(f"  {key}: {value:,.2f}")
            elif isinstance(value, int) and not isinstance(value, bool) and value >= 1000:
                print(f"  {key}: {value:,}")
            else:
                print(f"  {key}: {value}")

        print(f"{'='*50}")

    def create_detailed_log_file(self, name: str, trip_id: str = "unknown") -> Optional[str]:
        """Create a detailed log file for specific analysis"""
        if not self.detailed_logging:
            return None

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        filepath = os.path.join(self.log_dir, f"{name}_{trip_id}_{timestamp}.log")
        self.detailed_log_files[name] = filepath

        with open(filepath, 'w', encoding='utf-8') as f:
            f.write(f"Detailed Log: {name}\n")
            f.write(f"Trip ID: {trip_id}\n")
            f.write(f"Timestamp: {datetime.now().isoformat()}\n")
            f.write(f"{'='*60}\n\n")

        return filepath

    def log_detailed(self, message: str, log_name: str, trip_id: str = "unknown"):
        """Log detailed message to specific log file"""
        if not self.detailed_logging:
            return

        if log_name not in self.detailed_log_files:
            self.create_detailed_log_file(log_name, trip_id)

        with open(self.detailed_log_files[log_name], 'a', encoding='utf-8') as f:
            f.write(f"{message}\n")


# Global logger instance
_global_logger = None

def get_global_logger() -> TripPlannerLogger:
    """Get the global logger instance, configured from the current logging mode"""
    global _global_logger
    if _global_logger is None:
        _global_logger = TripPlannerLogger(**get_logging_config())
    return _global_logger

def get_logger(name: str = None) -> logging.Logger:
    """Get a module logger"""
    return get_global_logger().get_logger(name)

def setup_logger(mode: str = None, **kwargs) -> TripPlannerLogger:
    """Setup the global logger from a named mode, with optional overrides"""
    global _global_logger
    settings = dict(get_logging_config(mode))
    settings.update(kwargs)
    _global_logger = TripPlannerLogger(**settings)
    return _global_logger

# Convenience functions
def info(message: str, module: str = None):
    get_logger(module).info(message)

def error(message: str, module: str = None):
    get_logger(module).error(message)

def print_summary(title: str, data: Dict[str, Any]):
    """Print a formatted summary"""
    get_global_logger().print_summary(title, data)

def log_detailed(message: str, log_name: str, trip_id: str = "unknown"):
    """Log detailed message"""
    get_global_logger().log_detailed(message, log_name, trip_id)
