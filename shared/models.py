"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class Session(BaseModel):
    """
    Locally cached view of the auth provider's session.

    The provider owns the session; this copy is read-only and is replaced
    whenever the provider reports a session change.
    """

    user_id: str = Field(..., description="User ID (UUID from Supabase)")
    email: Optional[str] = Field(None, description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    full_name: Optional[str] = Field(None, description="Name given at registration (user metadata)")
    created_at: Optional[datetime] = Field(None, description="Account creation time")

    access_token: str = Field(default="", repr=False, description="Bearer token for the session")
    expires_at: Optional[datetime] = Field(None, description="When the access token expires")

    model_config = {
        "frozen": True,  # Borrowed view, never mutated locally
        "extra": "ignore",
    }

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Whether the access token has passed its expiry time."""
        if self.expires_at is None:
            return False
        return (now or datetime.now(timezone.utc)) >= self.expires_at
