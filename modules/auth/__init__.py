"""
Authentication module.

Wraps the remote auth provider and implements the login, registration and
password flows.

Public API:
- IAuthProvider: Interface for the remote auth provider
- SupabaseAuthProvider: Supabase implementation (modules.auth.provider)
- AuthService: Form-level auth flows (modules.auth.service)
- Auth exceptions: InvalidCredentialsError, EmailUnverifiedError, etc.
"""

from .interfaces import IAuthProvider, SessionSubscription, SessionChangeHandler
from .models import (
    AuthChangeEvent,
    SessionChange,
    Credentials,
    Registration,
    SignUpResult,
    LoginResult,
    PasswordResetRequest,
)
from .exceptions import (
    InvalidCredentialsError,
    EmailUnverifiedError,
    NoSessionError,
    PasswordMismatchError,
    WeakPasswordError,
    AuthProviderError,
)

__all__ = [
    # Interface
    "IAuthProvider",
    "SessionSubscription",
    "SessionChangeHandler",
    # Models
    "AuthChangeEvent",
    "SessionChange",
    "Credentials",
    "Registration",
    "SignUpResult",
    "LoginResult",
    "PasswordResetRequest",
    # Exceptions
    "InvalidCredentialsError",
    "EmailUnverifiedError",
    "NoSessionError",
    "PasswordMismatchError",
    "WeakPasswordError",
    "AuthProviderError",
]
