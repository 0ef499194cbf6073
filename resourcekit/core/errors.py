"""Error Hierarchy — typed, categorized exceptions for every resource operation failure.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error body is a mapping whose "error" key holds a human-readable message
    - Errors are mapped to a status code exactly once, at the HTTP boundary
    - StorageError never leaks driver text into the response body

Design Decisions:
    - Single hierarchy with ResourceKitError base: FastAPI global handler catches all (ADR: uniform error shape)
    - StorageCause classifies storage failures for logs and clients without changing status:
      every storage failure is still a 500 with the same envelope
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from resourcekit.core.domain_types import StorageCause


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    record_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class ResourceKitError(Exception):
    """Base exception for all resource operation errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        data: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.data = data

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        body = {
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }
        if self.data is not None:
            body["data"] = self.data
        return body


# ─── Request Errors (400-level) ─────────────────────────────────

class DecodeError(ResourceKitError):
    """Request body could not be decoded into the record type."""
    def __init__(
        self,
        message: str,
        details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "DECODE_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.details = details or []

    def to_response(self) -> dict:
        body = super().to_response()
        body["details"] = self.details
        return body


class ResourceNotFoundError(ResourceKitError):
    """No record matches the given identity or example."""
    def __init__(
        self, message: str = "Record not found", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(ResourceKitError):
    """Storage collaborator failed. Opaque and non-retryable for callers."""
    def __init__(
        self,
        message: str,
        cause: StorageCause = StorageCause.UNKNOWN,
        data: Any = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 500, data,
        )
        self.cause = cause

    def to_response(self) -> dict:
        body = super().to_response()
        body["cause"] = self.cause.value
        return body
