"""
Application error taxonomy.

Every error raised across the service boundary is an AppError subclass carrying
the HTTP status it maps to. The error handler turns them into
``{"error": <class name>, "message": ..., "details": ...}`` responses.
"""

from typing import Any, Literal


class AppError(Exception):
    """Base class for errors that are safe to show to the caller."""

    status_code: int = 500
    default_message: str = "Application error"

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.name, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(AppError):
    status_code = 400
    default_message = "Validation failed"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Resource conflict"


ExternalFailureReason = Literal["rate_limited", "auth_misconfigured", "failure"]


class ExternalServiceError(AppError):
    """Raised when a downstream provider (AI, OAuth) fails."""

    status_code = 502
    default_message = "External service failure"

    def __init__(
        self,
        message: str | None = None,
        details: Any = None,
        reason: ExternalFailureReason = "failure",
    ):
        super().__init__(message, details)
        self.reason = reason

    @property
    def retryable(self) -> bool:
        return self.reason == "rate_limited"

    def to_dict(self) -> dict[str, Any]:
        body = super().to_dict()
        body["reason"] = self.reason
        return body


class ConfigurationError(Exception):
    """Raised when a required secret or setting is missing. Never shown to callers."""
