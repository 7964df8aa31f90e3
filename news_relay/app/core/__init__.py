"""
Core utilities for the News Relay service.

This module provides the foundation for configuration management and structured
logging used to assemble the application.
"""

from .config import APP_VERSION, Settings, get_settings
from .logging import CorrelationIDMiddleware, configure_logging, get_logger

__all__ = [
    # Configuration
    "APP_VERSION",
    "Settings",
    "get_settings",
    # Logging
    "CorrelationIDMiddleware",
    "configure_logging",
    "get_logger",
]
