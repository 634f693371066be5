"""Error Hierarchy — typed, categorized exceptions for all person-service failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors are 400-level and never retried
    - Upstream (classifier) and store errors are 4xx/5xx-level and surfaced verbatim
    - to_response() produces the REST envelope rendered by api/error_handlers.py

Design Decisions:
    - Single hierarchy with PersonServiceError base: one global handler renders all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


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
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    person_id: int | None = None
    field: str | None = None
    service: str | None = None
    upstream_status: int | None = None
    debug_info: dict[str, Any] | None = None


class PersonServiceError(Exception):
    """Base exception for all person-service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "person_id": self.context.person_id,
                    "field": self.context.field,
                    "service": self.context.service,
                    "upstream_status": self.context.upstream_status,
                },
            }
        }


# ─── Validation Errors (400-level) ──────────────────────────────

class InputValidationError(PersonServiceError):
    """Inbound key-value input failed a presence or parse check."""
    def __init__(
        self, message: str, field: str | None = None,
        code: str = "VALIDATION_ERROR", context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field


class MissingFieldError(InputValidationError):
    """A required field is absent or empty."""
    def __init__(self, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{field}' is required", field, "MISSING_FIELD", context,
        )


class NoFilterError(InputValidationError):
    """Every optional field is empty — unbounded scans and empty patches are rejected."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You must specify at least one parameter", None,
            "NO_PARAMETERS", context,
        )


class InvalidIntegerError(InputValidationError):
    """A textual field could not be parsed as an acceptable integer."""
    def __init__(
        self, field: str, value: str, requirement: str = "an integer",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"'{field}' must be {requirement}, got '{value}'", field,
            "INVALID_INTEGER", context,
        )
        self.value = value


# ─── Store Errors ───────────────────────────────────────────────

class ResourceNotFoundError(PersonServiceError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class DatabaseError(PersonServiceError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


# ─── Upstream Errors ────────────────────────────────────────────

class EnrichmentServiceError(PersonServiceError):
    """An external classifier was unreachable, returned non-2xx, or sent an unparseable body."""
    def __init__(
        self,
        service: str,
        message: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.service = service
        ctx.upstream_status = status_code
        super().__init__(
            f"Enrichment service '{service}' failed: {message}",
            "ENRICHMENT_FAILED", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 502,
        )
        self.service = service
        self.status_code = status_code
