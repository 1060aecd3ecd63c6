"""Error Hierarchy: typed, categorized exceptions for every profile failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the data its message needs (email, minimum_age)
    - to_response() produces the REST envelope: timestamp, status, error, message, code
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with UsersApiError base: one FastAPI global handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    ERROR = "error"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Context attached to an error for logging and responses."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    email: str | None = None


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

    def to_response(self) -> dict:
        """Convert to the standard REST error body."""
        return {
            "timestamp": self.context.timestamp.isoformat(),
            "status": self.http_status,
            "error": HTTPStatus(self.http_status).phrase,
            "message": self.message,
            "code": self.code,
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class UserNotFoundError(UsersApiError):
    """No stored record matches the email."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.email = email
        super().__init__(
            f"Could not find user {email}",
            "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.email = email


class InvalidDateRangeError(UsersApiError):
    """Range query lower bound is after its upper bound."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "The 'from' date must be before the 'to' date",
            "INVALID_DATE_RANGE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class MinimumAgeViolationError(UsersApiError):
    """Birth date is less than minimum_age years before today."""
    def __init__(self, minimum_age: int, context: ErrorContext | None = None):
        super().__init__(
            f"User must be at least {minimum_age} years old",
            "MINIMUM_AGE_VIOLATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.minimum_age = minimum_age


class UserAlreadyExistsError(UsersApiError):
    """Write would leave two records with the same email."""
    def __init__(self, email: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.email = email
        super().__init__(
            f"User {email} already exists",
            "USER_ALREADY_EXISTS", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.email = email
