"""
Unified Error Handling System for API and Seeding Components.

This module provides standardized error handling infrastructure:
error categories, Pydantic response models, HTTP status code mapping,
centralized error logging with structured context, and the fatal
seeding error raised by the seed pipeline.

Usage:
    from shared.errors import ErrorCategory, APIErrorResponse, ErrorLogger

    logger = ErrorLogger()
    log_ref = logger.log_error(
        error=exc,
        category=ErrorCategory.DATABASE_ERROR,
        context={"endpoint": "/api/characters"}
    )
"""

import logging
import uuid
from datetime import datetime, UTC
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


class ErrorCategory(str, Enum):
    """Categories of errors for proper handling and logging.

    USER-FACING ERRORS (explained to user):
    - VALIDATION_ERROR: Invalid input from user
    - NOT_FOUND_ERROR: Requested resource not found
    - PERMISSION_ERROR: Operation not allowed for current user
    - CONFLICT_ERROR: Resource already exists
    - RATE_LIMIT_ERROR: Too many requests from one client

    SYSTEM ERRORS (logged internally, generic message to user):
    - DATABASE_ERROR: PostgreSQL/SQLAlchemy errors
    - EXTERNAL_API_ERROR: Mihomo or other external API failures
    - SEED_DATA_ERROR: Unreadable or malformed seed source files
    - CONFIGURATION_ERROR: Missing or invalid configuration
    - UNEXPECTED_ERROR: Unknown/unhandled exceptions
    """
    # User-facing errors
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND_ERROR = "not_found_error"
    PERMISSION_ERROR = "permission_error"
    CONFLICT_ERROR = "conflict_error"
    RATE_LIMIT_ERROR = "rate_limit_error"

    # System errors
    DATABASE_ERROR = "database_error"
    EXTERNAL_API_ERROR = "external_api_error"
    SEED_DATA_ERROR = "seed_data_error"
    CONFIGURATION_ERROR = "configuration_error"
    UNEXPECTED_ERROR = "unexpected_error"


SYSTEM_CATEGORIES = frozenset({
    ErrorCategory.DATABASE_ERROR,
    ErrorCategory.EXTERNAL_API_ERROR,
    ErrorCategory.SEED_DATA_ERROR,
    ErrorCategory.UNEXPECTED_ERROR,
})


class SeedingError(Exception):
    """Fatal error that aborts a seed run.

    Raised for unreadable/unparseable source files and for reference
    seeder write failures. ``stage`` names the pipeline stage that failed
    (``elements``, ``paths``, ``characters``, ``skills`` or ``builds``).
    """

    def __init__(
        self,
        stage: str,
        message: str,
        *,
        category: ErrorCategory = ErrorCategory.SEED_DATA_ERROR,
    ):
        super().__init__(f"[{stage}] {message}")
        self.stage = stage
        self.message = message
        self.category = category


class APIErrorResponse(BaseModel):
    """Standardized error response format for API endpoints.

    This format ensures consistency across all API endpoints and provides
    both user-facing messages and optional context for debugging.
    """
    success: bool = Field(default=False, description="Always False for errors")
    error_category: ErrorCategory = Field(description="Error category for classification")
    error_code: str = Field(description="Machine-readable error code")
    message: str = Field(description="User-facing message")
    guidance: str | None = Field(default=None, description="Optional guidance for resolution")
    log_ref: str | None = Field(default=None, description="Reference ID for log correlation")
    context: dict[str, Any] | None = Field(default=None, description="Additional context for debugging")


class ErrorLogger:
    """Centralized error logging with structured context.

    Provides consistent error logging with full context including
    endpoint path, request method, user info, stack traces, and more.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.ErrorLogger")

    def _generate_log_ref(self) -> str:
        """Generate unique reference ID for error correlation."""
        return f"err_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S')}_{uuid.uuid4().hex[:8]}"

    def log_error(
        self,
        error: Exception,
        category: ErrorCategory,
        *,
        endpoint: str | None = None,
        method: str | None = None,
        user_id: str | None = None,
        context: dict[str, Any] | None = None,
        exc_info: bool = True,
    ) -> str:
        """Log error with full structured context.

        Args:
            error: The exception that occurred
            category: Error category for classification
            endpoint: Optional endpoint path where error occurred
            method: Optional HTTP method (GET, POST, etc.)
            user_id: Optional user identifier
            context: Additional context data
            exc_info: Whether to include stack trace

        Returns:
            log_ref: Unique reference ID for this error instance
        """
        log_ref = self._generate_log_ref()

        extra = {
            "log_ref": log_ref,
            "error_category": category.value,
            "error_type": type(error).__name__,
            "endpoint": endpoint,
            "method": method,
            "user_id": user_id,
            "context": context or {},
        }
        if endpoint:
            extra["request_path"] = endpoint

        if category in SYSTEM_CATEGORIES:
            self.logger.error(
                f"[{log_ref}] {category.value}: {error}",
                extra=extra,
                exc_info=exc_info,
            )
        else:
            self.logger.warning(
                f"[{log_ref}] {category.value}: {error}",
                extra=extra,
                exc_info=exc_info,
            )

        return log_ref

    def _build_guidance(self, category: ErrorCategory) -> str | None:
        """Build user guidance based on error category."""
        guidance_map = {
            ErrorCategory.VALIDATION_ERROR: "Check the submitted data and correct the errors.",
            ErrorCategory.NOT_FOUND_ERROR: "Check that the requested resource exists.",
            ErrorCategory.PERMISSION_ERROR: "Sign in again or check that you have access to this resource.",
            ErrorCategory.CONFLICT_ERROR: "The resource already exists.",
            ErrorCategory.RATE_LIMIT_ERROR: "Wait a minute before trying again.",
            ErrorCategory.DATABASE_ERROR: "A database problem occurred. Please try again shortly.",
            ErrorCategory.EXTERNAL_API_ERROR: "An upstream service failed. Please try again shortly.",
            ErrorCategory.SEED_DATA_ERROR: "Seed data could not be loaded. Check the data files.",
            ErrorCategory.CONFIGURATION_ERROR: "The service is misconfigured. Contact the maintainers.",
            ErrorCategory.UNEXPECTED_ERROR: "An unexpected error occurred. Please try again.",
        }
        return guidance_map.get(category)


# Global error logger instance
_error_logger = ErrorLogger()


def get_error_logger() -> ErrorLogger:
    """Get the global error logger instance."""
    return _error_logger


# HTTP status code to ErrorCategory mapping
STATUS_TO_CATEGORY: dict[int, ErrorCategory] = {
    400: ErrorCategory.VALIDATION_ERROR,
    401: ErrorCategory.PERMISSION_ERROR,
    403: ErrorCategory.PERMISSION_ERROR,
    404: ErrorCategory.NOT_FOUND_ERROR,
    409: ErrorCategory.CONFLICT_ERROR,
    429: ErrorCategory.RATE_LIMIT_ERROR,
    422: ErrorCategory.VALIDATION_ERROR,
    500: ErrorCategory.UNEXPECTED_ERROR,
    502: ErrorCategory.EXTERNAL_API_ERROR,
    503: ErrorCategory.EXTERNAL_API_ERROR,
    504: ErrorCategory.EXTERNAL_API_ERROR,
}


def map_status_to_category(status_code: int) -> ErrorCategory:
    """Map HTTP status code to ErrorCategory.

    Args:
        status_code: HTTP status code

    Returns:
        Corresponding ErrorCategory
    """
    return STATUS_TO_CATEGORY.get(status_code, ErrorCategory.UNEXPECTED_ERROR)
