"""Error Hierarchy — typed exceptions for every portfolio failure mode.

Invariants:
    - Every error has a code (str), a message and an http_status
    - to_response() produces the {success: false, message, ...} envelope
    - 400-level errors are caller mistakes; 500-level errors are logged to the error log

Design Decisions:
    - Single hierarchy with PortfolioError base: one global handler catches all
    - ErrorContext as dataclass: observability data kept off the exception signature
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass
class ErrorContext:
    """Extra context for logs, never rendered to the caller."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    kind: str | None = None
    record_id: str | None = None
    client: str | None = None
    retry_after_seconds: int | None = None
    debug_info: dict[str, Any] | None = None


class PortfolioError(Exception):
    """Base exception for all portfolio errors."""

    def __init__(
        self,
        message: str,
        code: str,
        http_status: int = 500,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {
            "success": False,
            "message": self.message,
            "code": self.code,
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class ValidationFailedError(PortfolioError):
    """Request body violated one or more field constraints."""
    def __init__(self, errors: list[dict], context: ErrorContext | None = None):
        super().__init__("Validation failed", "VALIDATION_ERROR", 400, context)
        self.errors = errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["errors"] = self.errors
        return response


class RecordNotFoundError(PortfolioError):
    """No record with the requested id exists in the kind's array."""
    def __init__(
        self, label: str, record_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.record_id = record_id
        super().__init__(f"{label} not found", "RECORD_NOT_FOUND", 404, ctx)


class RateLimitExceededError(PortfolioError):
    """Client exhausted its quota for the current window."""
    def __init__(
        self, message: str, retry_after_seconds: int,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_seconds = retry_after_seconds
        super().__init__(message, "RATE_LIMITED", 429, ctx)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(PortfolioError):
    """Reading or writing a backing file failed."""
    def __init__(
        self, message: str, operation: str, context: ErrorContext | None = None,
    ):
        super().__init__(message, "STORAGE_ERROR", 500, context)
        self.operation = operation
