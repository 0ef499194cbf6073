"""Error Handlers — global exception handlers mapping every failure to a JSON envelope.

Invariants:
    - ResourceKitError → its own status and to_response() body
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → 500, never leaks internal details
    - Every body carries an "error" key with a human-readable message
    - This is the only place errors are logged

Design Decisions:
    - Three-layer handler: domain (ResourceKitError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the app factory short
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from resourcekit.core.errors import (
    ErrorSeverity, ResourceKitError, StorageError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_resource_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_resource_error_handler(app: FastAPI) -> None:
    """Register resource domain/infrastructure error handler."""

    @app.exception_handler(ResourceKitError)
    async def resource_error_handler(request: Request, exc: ResourceKitError):
        """Handle all resource domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "resource": exc.context.resource,
            "operation": exc.context.operation,
            "record_id": exc.context.record_id,
        }
        if isinstance(exc, StorageError):
            extra["cause"] = exc.cause.value
            logger.error(
                f"StorageError: {exc.message} ({exc.__cause__})", extra=extra,
            )
        else:
            logger.info(f"{type(exc).__name__}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": "Invalid request data",
        "code": "VALIDATION_ERROR",
        "category": "validation",
        "severity": ErrorSeverity.ERROR.value,
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
