"""Error Hierarchy — typed, categorized exceptions for every Users API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400/404) are recoverable; storage errors (500) are critical
    - to_response() always produces the uniform envelope {success, message[, error]}

Design Decisions:
    - Single hierarchy with UsersApiError base: one FastAPI handler catches all
      (ADR: uniform error shape)
    - Not-found is a repository sentinel (None); UserNotFoundError is raised only
      by handlers once the sentinel has been observed
"""

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
    STORAGE = "storage"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class UsersApiError(Exception):
    """Base exception for all Users API errors."""

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
        """Convert to the standard response envelope."""
        return {"success": False, "message": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class UserValidationError(UsersApiError):
    """A user field failed validation."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class UserNotFoundError(UsersApiError):
    """No user row matches the requested id."""
    def __init__(self, user_id: str):
        super().__init__(
            "User not found", "RESOURCE_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, 404,
        )
        self.user_id = user_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

STORAGE_OPERATION_MESSAGES: dict[str, str] = {
    "list": "Error retrieving users",
    "get": "Error retrieving user",
    "create": "Error creating user",
    "update": "Error updating user",
    "delete": "Error deleting user",
    "ping": "Error reaching the database",
}


class StorageError(UsersApiError):
    """The managed database rejected or failed an operation.

    detail is the upstream message and is passed through to the client.
    """
    def __init__(self, detail: str, operation: str, upstream_code: str | None = None):
        super().__init__(
            STORAGE_OPERATION_MESSAGES.get(operation, "Database operation failed"),
            "STORAGE_ERROR", ErrorCategory.STORAGE, ErrorSeverity.CRITICAL, 500,
        )
        self.detail = detail
        self.operation = operation
        self.upstream_code = upstream_code

    def to_response(self) -> dict:
        return {**super().to_response(), "error": self.detail}


class ConfigurationError(UsersApiError):
    """The database client could not be built from the configured settings."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, 500,
        )
