"""
FastAPI Error Handlers for Unified Error Handling System.

This module provides exception handlers for FastAPI applications to convert
exceptions into standardized APIErrorResponse format with proper HTTP status
codes.

Usage:
    from fastapi import FastAPI
    from shared.fastapi_errors import register_error_handlers

    app = FastAPI()
    register_error_handlers(app)
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.errors import (
    APIErrorResponse,
    ErrorCategory,
    get_error_logger,
    map_status_to_category,
)


logger = logging.getLogger(__name__)


def _summarize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep only the JSON-safe parts of pydantic error dicts."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in errors
    ]


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Convert HTTPException to standardized APIErrorResponse.

    Args:
        request: FastAPI request object
        exc: HTTPException that was raised

    Returns:
        JSONResponse with APIErrorResponse body
    """
    error_logger = get_error_logger()
    category = map_status_to_category(exc.status_code)

    context: dict[str, Any] = {
        "path": str(request.url.path),
        "method": request.method,
        "status_code": exc.status_code,
    }
    if request.url.query:
        context["query_params"] = str(request.url.query)

    log_ref = error_logger.log_error(
        error=exc,
        category=category,
        endpoint=str(request.url.path),
        method=request.method,
        context=context,
        exc_info=False,  # HTTPException is expected, no stack trace needed
    )

    response = APIErrorResponse(
        success=False,
        error_category=category,
        error_code=f"HTTP_{exc.status_code}",
        message=str(exc.detail),
        guidance=error_logger._build_guidance(category),
        log_ref=log_ref,
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=response.model_dump(mode="json"),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError | ValidationError,
) -> JSONResponse:
    """Convert request/pydantic validation errors to standardized APIErrorResponse.

    Args:
        request: FastAPI request object
        exc: RequestValidationError or ValidationError that was raised

    Returns:
        JSONResponse with APIErrorResponse body and 422 status
    """
    error_logger = get_error_logger()
    errors = _summarize_validation_errors(list(exc.errors()))

    log_ref = error_logger.log_error(
        error=exc,
        category=ErrorCategory.VALIDATION_ERROR,
        endpoint=str(request.url.path),
        method=request.method,
        context={"validation_errors": errors},
        exc_info=False,  # Validation errors are expected
    )

    if len(errors) == 1:
        field = ".".join(errors[0]["loc"])
        message = f"Validation error in '{field}': {errors[0]['msg']}"
    else:
        message = f"Validation errors in {len(errors)} fields."

    response = APIErrorResponse(
        success=False,
        error_category=ErrorCategory.VALIDATION_ERROR,
        error_code="VALIDATION_ERROR",
        message=message,
        guidance=error_logger._build_guidance(ErrorCategory.VALIDATION_ERROR),
        log_ref=log_ref,
        context={"validation_errors": errors},
    )

    return JSONResponse(
        status_code=422,
        content=response.model_dump(mode="json"),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert general exceptions to standardized APIErrorResponse.

    Args:
        request: FastAPI request object
        exc: Exception that was raised

    Returns:
        JSONResponse with APIErrorResponse body and 500 status
    """
    error_logger = get_error_logger()

    log_ref = error_logger.log_error(
        error=exc,
        category=ErrorCategory.UNEXPECTED_ERROR,
        endpoint=str(request.url.path),
        method=request.method,
        context={"exception_type": type(exc).__name__},
        exc_info=True,
    )

    response = APIErrorResponse(
        success=False,
        error_category=ErrorCategory.UNEXPECTED_ERROR,
        error_code="INTERNAL_SERVER_ERROR",
        message="Internal server error. Please try again.",
        guidance="If the problem persists, contact the maintainers.",
        log_ref=log_ref,
    )

    return JSONResponse(
        status_code=500,
        content=response.model_dump(mode="json"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register custom error handlers with FastAPI app.

    Registers handlers for:
    - HTTPException (400, 401, 403, 404, etc.)
    - RequestValidationError / ValidationError (Pydantic validation)
    - Exception (all unhandled exceptions)

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Registered unified error handlers for FastAPI")
