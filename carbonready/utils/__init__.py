"""Utility modules for the CarbonReady core."""

from .config import Settings, get_settings
from .log_config import LOG_FORMAT, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "LOG_FORMAT",
    "setup_logging",
]
