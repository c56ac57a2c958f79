"""
Base exception classes for application-wide error handling.

Every domain error carries a human-readable message, a machine-readable
error code and an HTTP status, so views can turn any of them into a
response without inspecting the message text.

Exception Hierarchy:
    BaseApplicationError (base, 500)
    ├── ValidationError - Input or business rule violations (400)
    ├── NotFoundError - Resource not found (404)
    └── ExternalServiceError - Third-party service failures (500)

Usage:
    from core.exceptions import ValidationError

    raise ValidationError("Too many pictures", error_code="TOO_MANY_PICTURES")

    try:
        ...
    except BaseApplicationError as e:
        return Response(e.to_dict(), status=e.http_status)

Note:
    These exceptions are for domain/business logic errors.
    DRF handles API-layer exceptions (serialization, authentication, etc.).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import status

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for client-side handling
        details: Additional error context (field errors, metadata, etc.)
        http_status: Status code used when the error reaches a view
    """

    default_error_code: str = "APPLICATION_ERROR"
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = str(error_code or self.default_error_code)
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API response.

        Example:
            {
                "error": "File not found",
                "error_code": "FILE_NOT_FOUND",
                "details": {"key": "pics/1/..."}
            }
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input validation fails.

    Use for invalid field values, business rule violations and limits
    that the caller can fix by changing the request.
    """

    default_error_code: str = "VALIDATION_ERROR"
    http_status: int = status.HTTP_400_BAD_REQUEST


class NotFoundError(BaseApplicationError):
    """Raised when a requested resource is not found."""

    default_error_code: str = "NOT_FOUND"
    http_status: int = status.HTTP_404_NOT_FOUND


class ExternalServiceError(BaseApplicationError):
    """
    Raised when an external service call fails.

    Use for object storage failures, external processes (FFmpeg) and
    network timeouts. Log the original error for debugging but don't
    expose internal details to clients.
    """

    default_error_code: str = "EXTERNAL_SERVICE_ERROR"
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
