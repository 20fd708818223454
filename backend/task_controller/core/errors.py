"""Error Hierarchy — typed, categorized exceptions for all Task Controller failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TaskControllerError base: FastAPI global handler catches all
    - TransactionError keeps both the unit-of-work error and the rollback error
      so neither is lost when rollback itself fails
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
    TRANSACTION = "transaction"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource_type: str | None = None
    resource_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class TaskControllerError(Exception):
    """Base exception for all Task Controller errors."""

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
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailureError(TaskControllerError):
    """A required field is missing or malformed."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(TaskControllerError):
    """No row matches the lookup key."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TaskControllerError):
    """Database operation failed."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
        code: str = "DATABASE_ERROR",
        category: ErrorCategory = ErrorCategory.DATABASE,
        http_status: int = 503,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            code, category, ErrorSeverity.CRITICAL, ctx, http_status,
        )
        self.operation = operation


class ConstraintViolationError(DatabaseError):
    """Integrity constraint violated (duplicate key, missing foreign row)."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Integrity constraint violated", operation, context,
            code="CONSTRAINT_VIOLATION", category=ErrorCategory.CONFLICT,
            http_status=409,
        )


class TransactionError(TaskControllerError):
    """Unit of work failed and the rollback that followed failed too."""
    def __init__(
        self,
        original: BaseException,
        rollback_error: BaseException,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"transaction error: {_describe(original)}, "
            f"rollback error: {_describe(rollback_error)}",
            "TRANSACTION_ERROR", ErrorCategory.TRANSACTION,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.original = original
        self.rollback_error = rollback_error


class TransactionClosedError(TaskControllerError):
    """A transaction handle was used after its scope ended."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Transaction handle used after its scope ended",
            "TRANSACTION_CLOSED", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__
