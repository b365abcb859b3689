"""Error Hierarchy — typed, categorized exceptions for all todomock failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - All errors are local and synchronous; nothing here is retried
    - to_response() produces the REST error envelope used by the dev HTTP surface
    - Missing records on reads and deletes are NOT errors (callers get None / the id back)

Design Decisions:
    - Single hierarchy with TodoMockError base: one FastAPI handler catches all
    - ErrorContext as dataclass: carries resource/record details without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    record_id: str | None = None
    field_name: str | None = None
    debug_info: dict[str, Any] | None = None


class TodoMockError(Exception):
    """Base exception for all todomock errors."""

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
                    "resource": self.context.resource,
                    "record_id": self.context.record_id,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class InvalidArgumentError(TodoMockError):
    """A required argument is missing or unusable (e.g. empty identifier)."""
    def __init__(
        self, message: str, argument: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_name = argument
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.argument = argument


class ResourceNotFoundError(TodoMockError):
    """A write addressed an identifier that does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource = resource_type
        ctx.record_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class MalformedInputError(TodoMockError):
    """A write payload does not parse as the expected entity shape."""
    def __init__(
        self,
        message: str,
        resource_type: str,
        details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource = resource_type
        ctx.debug_info = {"details": details or []}
        super().__init__(
            message, "MALFORMED_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 422,
        )
        self.resource_type = resource_type
        self.details = details or []

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.details
        return response
