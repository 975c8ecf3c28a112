"""Error Hierarchy — typed, categorized exceptions for every portal failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with PortalError base: one FastAPI handler catches all
    - Chain failures split in two: ContractCallError (the node answered, the call
      failed) vs ChainUnavailableError (no node, no artifact)
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    CONFLICT = "conflict"
    DATABASE = "database"
    BLOCKCHAIN = "blockchain"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    contract: str | None = None
    method: str | None = None
    tx_hash: str | None = None
    debug_info: dict[str, Any] | None = None


class PortalError(Exception):
    """Base exception for all portal errors."""

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
                    "user_id": self.context.user_id,
                    "contract": self.context.contract,
                    "method": self.context.method,
                    "tx_hash": self.context.tx_hash,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class BusinessRuleError(PortalError):
    """A precondition of the requested action does not hold."""
    def __init__(self, message: str, code: str, context: ErrorContext | None = None):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class InvalidWalletError(PortalError):
    """Wallet address is not a valid Ethereum address."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"'{address}' is not a valid wallet address",
            "INVALID_WALLET", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.address = address


class InvalidCredentialsError(PortalError):
    """Login email/password pair did not match."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials",
            "INVALID_CREDENTIALS", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class IdentityRequiredError(PortalError):
    """Account has no identity token, so it may not act on chain."""
    def __init__(self, owner: str, owner_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"{owner} {owner_id} has no identity token",
            "IDENTITY_REQUIRED", ErrorCategory.PERMISSION,
            ErrorSeverity.ERROR, context, 403,
        )


class NotCourseFacultyError(PortalError):
    """Faculty member does not teach the course being graded."""
    def __init__(self, faculty_id: int, course_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Faculty {faculty_id} does not teach course {course_id}",
            "NOT_COURSE_FACULTY", ErrorCategory.PERMISSION,
            ErrorSeverity.ERROR, context, 403,
        )


class ResourceNotFoundError(PortalError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str | int, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class DuplicateRecordError(PortalError):
    """The action was already recorded (same user, same target)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DUPLICATE_RECORD", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class BookingConflictError(PortalError):
    """Requested room slot overlaps an existing booking."""
    def __init__(self, room_id: int, context: ErrorContext | None = None):
        super().__init__(
            f"Room {room_id} is already booked for an overlapping slot",
            "BOOKING_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class CapacityExceededError(PortalError):
    """Event has no seats left."""
    def __init__(self, event_id: int, capacity: int, context: ErrorContext | None = None):
        super().__init__(
            f"Event {event_id} is full ({capacity}/{capacity})",
            "CAPACITY_EXCEEDED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(PortalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class ContractCallError(PortalError):
    """The node rejected or reverted a contract transaction."""
    def __init__(
        self, message: str, contract: str, method: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.contract = contract
        ctx.method = method
        super().__init__(
            f"{contract}.{method} failed: {message}",
            "CONTRACT_CALL_FAILED", ErrorCategory.BLOCKCHAIN,
            ErrorSeverity.CRITICAL, ctx, 502,
        )


class ChainUnavailableError(PortalError):
    """No usable blockchain node or contract artifact."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CHAIN_UNAVAILABLE", ErrorCategory.BLOCKCHAIN,
            ErrorSeverity.CRITICAL, context, 503,
        )
