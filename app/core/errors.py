"""Error Hierarchy — typed, categorized exceptions for every gateway failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; encoding failures are 500-level but not fatal
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with GatewayError base: FastAPI global handler catches all (ADR: uniform error shape)
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    ENCODING = "encoding"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    instance_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class GatewayError(Exception):
    """Base exception for all instance gateway errors."""

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
                    "instance_id": self.context.instance_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ResourceNotFoundError(GatewayError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_id = resource_id


class InstanceNotFoundError(ResourceNotFoundError):
    """No instance registered under the given id."""
    def __init__(self, instance_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.instance_id = instance_id
        super().__init__("Instance", instance_id, ctx)
        self.instance_id = instance_id


class MalformedPayloadError(GatewayError):
    """Request body is missing a required field or has the wrong shape."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


# ─── Infrastructure Errors (500-level) ──────────────────────────

class HandshakeEncodingError(GatewayError):
    """Scannable handshake artifact could not be generated."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to generate QR code: {message}",
            "ENCODING_ERROR", ErrorCategory.ENCODING,
            ErrorSeverity.ERROR, context, 500,
        )
