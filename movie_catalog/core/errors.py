"""Error Hierarchy — typed, categorized exceptions for every catalog failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
      and an HTTP status; subclasses fix them as class attributes
    - Client errors (400-level) are ERROR or WARNING severity; infrastructure errors
      (500-level) are CRITICAL
    - to_response() produces the REST envelope returned by the global handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CatalogError base: one FastAPI handler catches all of it
    - Raised at the point of failure (services, dependencies), never returned
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RATE_LIMIT = "rate_limit"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Which resource an error is about, plus optional debug data (never serialized)."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CatalogError(Exception):
    """Base exception for all catalog errors."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(
        self, message: str, code: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(CatalogError):
    """Input that passed schema validation but not business checks."""
    code = "BAD_REQUEST"
    category = ErrorCategory.VALIDATION
    http_status = 400


class UnauthorizedError(CatalogError):
    """Missing, invalid, expired or blocked credentials."""
    code = "UNAUTHORIZED"
    category = ErrorCategory.AUTHENTICATION
    http_status = 401

    def __init__(
        self, message: str = "Authentication required", code: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message, code, context)


class ForbiddenError(CatalogError):
    """Authenticated, but the role does not grant access."""
    code = "FORBIDDEN"
    category = ErrorCategory.AUTHORIZATION
    http_status = 403

    def __init__(
        self, message: str = "You do not have permission to access this resource",
        context: ErrorContext | None = None,
    ):
        super().__init__(message, context=context)


class ThrottleExceededError(CatalogError):
    """Per-user request budget for a route exhausted."""
    code = "THROTTLE_EXCEEDED"
    category = ErrorCategory.RATE_LIMIT
    severity = ErrorSeverity.WARNING
    http_status = 403

    def __init__(self, limit: int, unit: str, context: ErrorContext | None = None):
        super().__init__(
            f"Request limit exceeded: at most {limit} requests per {unit}",
            context=context,
        )
        self.limit = limit
        self.unit = unit


class ResourceNotFoundError(CatalogError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: Any,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = str(resource_id)
        super().__init__(f"{resource_type} '{resource_id}' not found", context=ctx)


class ConflictError(CatalogError):
    """Unique constraint or referential rule would be violated."""
    code = "CONFLICT"
    category = ErrorCategory.CONFLICT
    http_status = 409

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, context=context)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(CatalogError):
    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(f"Database {operation} failed: {message}", context=context)
        self.operation = operation
