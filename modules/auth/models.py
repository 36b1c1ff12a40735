"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from shared.models import Session


class AuthChangeEvent(str, Enum):
    """Session-change events emitted by the auth provider."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"
    MFA_CHALLENGE_VERIFIED = "MFA_CHALLENGE_VERIFIED"


class SessionChange(BaseModel):
    """A single session-change notification."""

    event: AuthChangeEvent
    session: Optional[Session] = None

    model_config = {"frozen": True}


class Credentials(BaseModel):
    """Login form input."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class Registration(BaseModel):
    """Registration form input."""

    email: EmailStr
    password: str = Field(..., min_length=1)
    confirm_password: str = Field(..., min_length=1)
    full_name: Optional[str] = Field(None, description="Stored in the user's metadata")


class SignUpResult(BaseModel):
    """Outcome of a registration request."""

    user_id: Optional[str] = Field(None, description="ID of the new user, if returned")
    confirmation_required: bool = Field(
        default=True,
        description="True when the user must follow an emailed link before signing in",
    )
    message: str = Field(..., description="User-facing message for the login screen")


class LoginResult(BaseModel):
    """Outcome of a successful sign-in."""

    session: Session
    next_location: str = Field(..., description="Where to send the viewer next")


class PasswordResetRequest(BaseModel):
    """Forgot-password form input."""

    email: EmailStr
