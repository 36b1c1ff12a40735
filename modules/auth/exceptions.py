"""
Authentication module exceptions.

Every auth failure resolves to "remain on / return to login"; the message
is what the login form shows.
"""

from typing import Optional

from shared.exceptions import AuthenticationError, ExternalServiceError, ValidationError


class InvalidCredentialsError(AuthenticationError):
    """Raised when the email/password pair is rejected."""

    def __init__(self, message: str = "Invalid login credentials"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class EmailUnverifiedError(AuthenticationError):
    """Raised when signing in before the confirmation link was followed."""

    def __init__(self, message: str = "Please verify your email before logging in."):
        super().__init__(message, code="EMAIL_UNVERIFIED")


class NoSessionError(AuthenticationError):
    """Raised when an operation needs a signed-in user and there is none."""

    def __init__(self, message: str = "You must be signed in to continue"):
        super().__init__(message, code="NO_SESSION")


class PasswordMismatchError(ValidationError):
    """Raised when the password confirmation does not match."""

    def __init__(self, message: str = "Passwords do not match"):
        super().__init__(message, code="PASSWORD_MISMATCH")


class WeakPasswordError(ValidationError):
    """Raised when a new password does not satisfy the password policy."""

    def __init__(self, min_length: int):
        super().__init__(
            f"Password must be at least {min_length} characters",
            code="WEAK_PASSWORD",
            details={"min_length": min_length},
        )


class AuthProviderError(ExternalServiceError):
    """Raised when the auth provider fails or cannot be reached."""

    def __init__(self, message: str = "An unexpected error occurred", status: Optional[int] = None):
        super().__init__(
            message,
            service="auth",
            code="AUTH_PROVIDER_ERROR",
            details={"status": status} if status is not None else None,
        )
