"""Error Taxonomy - the closed set of failures the API can report.

Invariants:
    - Exactly five kinds: VALIDATION_ERROR, BAD_REQUEST, NOT_FOUND,
      DATABASE_ERROR, INTERNAL_SERVER_ERROR
    - Every kind has a fixed HTTP status and machine-readable code
    - ValidationError bodies carry `errors: [{field, message}]`; every other
      kind carries `message`
    - error_to_response() is the only path from an error to (status, body)

Design Decisions:
    - Single hierarchy with UserApiError base: one FastAPI handler catches all
    - Category/severity enums feed log records, never the response body
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for log routing."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldError:
    """A single (field name, message) pair reported during validation."""
    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class UserApiError(Exception):
    """Base exception for all User API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standard `{error, message}` body."""
        return {"error": self.code, "message": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(UserApiError):
    """Request shape is invalid. Carries every offending field, not just the first."""
    def __init__(self, field_errors: list[FieldError]):
        fields = ", ".join(sorted({e.field for e in field_errors}))
        super().__init__(
            f"Invalid fields: {fields}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field_errors = list(field_errors)

    def to_response(self) -> dict:
        return {
            "error": self.code,
            "errors": [e.to_dict() for e in self.field_errors],
        }


class BadRequestError(UserApiError):
    """Business rule rejected the request (e.g. blank after trimming)."""
    def __init__(self, message: str):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, 400,
        )


class NotFoundError(UserApiError):
    """Lookup matched no row."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(
            message, "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )

    @classmethod
    def for_user(cls, user_id: int) -> "NotFoundError":
        return cls(f"User with id {user_id} not found")


# ─── Server Errors (500-level) ──────────────────────────────────

class DatabaseError(UserApiError):
    """Persistence failure other than "no rows"."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation


class InternalServerError(UserApiError):
    """Unclassified failure."""
    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(
            message, "INTERNAL_SERVER_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, 500,
        )


def error_to_response(error: Exception) -> tuple[int, dict]:
    """Map any exception to (HTTP status, JSON body).

    Unknown exceptions degrade to InternalServerError with a generic message
    so internals never reach the client.
    """
    if not isinstance(error, UserApiError):
        error = InternalServerError()
    return error.http_status, error.to_response()
