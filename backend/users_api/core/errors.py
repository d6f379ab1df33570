"""Error Hierarchy — typed, categorized exceptions for every Users API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - InvalidInputError → 400, NotFoundError → 404, StorageError → 500
    - to_response() produces the plain-text body sent to the client

Design Decisions:
    - Single hierarchy with UsersApiError base: one FastAPI handler catches all
    - UserNotFoundError subclasses NotFoundError so the adapter's "no rows" outcome
      can surface directly, while handlers may still re-raise with their own message
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    debug_info: dict[str, Any] | None = None


class UsersApiError(Exception):
    """Base exception for all Users API errors."""

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

    def to_response(self) -> str:
        """Plain-text response body, newline-terminated."""
        return f"{self.message}\n"

    def to_log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "user_id": self.context.user_id,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InvalidInputError(UsersApiError):
    """Malformed identifier or body, or a required field missing on create."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class NotFoundError(UsersApiError):
    """No matching row, or a read/update/delete statement failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class UserNotFoundError(NotFoundError):
    """The storage engine returned no row (or affected none) for an id."""
    def __init__(self, user_id: int):
        super().__init__("User not found", ErrorContext(user_id=user_id))
        self.user_id = user_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(UsersApiError):
    """Connection failure, or a create statement failed. Message is echoed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
