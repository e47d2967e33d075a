"""Error Hierarchy — typed, categorized exceptions for all Starfield failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are caller mistakes; StorageError (500) means not committed
    - to_response() produces the `{"error": message}` envelope the browser client expects
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StarfieldError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

import logging
from dataclasses import dataclass
from enum import Enum


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
    CONFLICT = "conflict"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs, never sent to clients."""
    star_id: str | None = None
    operation: str | None = None


class StarfieldError(Exception):
    """Base exception for all Starfield errors."""

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
        """Convert to the REST error body."""
        return {"error": self.message}

    def log_extra(self) -> dict:
        """Structured fields for logger.log(..., extra=...)."""
        return {
            "error_code": self.code,
            "error_category": self.category.value,
            "star_id": self.context.star_id,
            "operation": self.context.operation,
        }

    def log_level(self) -> int:
        """Logging level for this error, derived from its severity."""
        if self.severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            return logging.ERROR
        return logging.WARNING


# ─── Domain Errors (400-level) ──────────────────────────────────

class StarValidationError(StarfieldError):
    """Star fields failed the validation hook."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class StarNotFoundError(StarfieldError):
    """No live star carries the requested id."""
    def __init__(self, star_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.star_id = star_id
        super().__init__(
            "Star not found", "STAR_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.star_id = star_id


class StarConflictError(StarfieldError):
    """Create supplied an id that is already live."""
    def __init__(self, star_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.star_id = star_id
        super().__init__(
            "Star already exists", "STAR_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.star_id = star_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(StarfieldError):
    """The backing medium could not be written; the operation did not commit."""
    def __init__(
        self,
        message: str,
        operation: str,
        public_message: str = "Failed to save star",
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.public_message = public_message

    def to_response(self) -> dict:
        # IO details stay in the logs
        return {"error": self.public_message}
