"""
Base exception classes for the HRMIS portal client.

Each module defines its own exceptions that inherit from these bases.
Every exception carries a user-facing message, so views can show
`error.message` without knowing the concrete type.
"""

from typing import Optional, Any


class PortalError(Exception):
    """
    Base exception for all portal errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for display or logging."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(PortalError):
    """Input validation failed."""

    pass


class AuthenticationError(PortalError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class ExternalServiceError(PortalError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
