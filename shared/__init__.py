"""
HSR Tools - Shared module.

This module contains shared utilities, configuration, and clients
used across the application.
"""

from shared.config import Settings, get_settings
from shared.logging_config import configure_logging
from shared.mihomo_client import MihomoClient
from shared.errors import (
    ErrorCategory,
    APIErrorResponse,
    ErrorLogger,
    SeedingError,
    get_error_logger,
    map_status_to_category,
)
from shared.fastapi_errors import register_error_handlers

__all__ = [
    # Core utilities
    "Settings",
    "get_settings",
    "configure_logging",
    # Clients
    "MihomoClient",
    # Error handling
    "ErrorCategory",
    "APIErrorResponse",
    "ErrorLogger",
    "SeedingError",
    "get_error_logger",
    "map_status_to_category",
    "register_error_handlers",
]
