"""Error Hierarchy — typed, categorized exceptions for every board failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are scoped to a single request, never fatal to the process
    - MalformedRequestError and UnauthorizedActionError render identically to the client;
      only the log line tells them apart
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BoardError base: one global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
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
    AUTHORIZATION = "authorization"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user: str | None = None
    post_id: int | None = None
    debug_info: dict[str, Any] | None = None


class BoardError(Exception):
    """Base exception for all board errors."""

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
        """Convert to standardized error envelope (internal message excluded)."""
        return {
            "error": {
                "code": self.public_code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }

    @property
    def public_code(self) -> str:
        """Code shown to clients. Subclasses may collapse distinct codes."""
        return self.code


# ─── Request Errors (400-level) ─────────────────────────────────

class BadRequestError(BoardError):
    """Base for rejections surfaced to the client as a generic 400."""

    @property
    def public_code(self) -> str:
        return "BAD_REQUEST"


class MalformedRequestError(BadRequestError):
    """Unsupported method or unparseable request body."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class UnauthorizedActionError(BadRequestError):
    """One-time token mismatch, or requester not allowed to act on the post."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNAUTHORIZED_ACTION", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 400,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(BoardError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
