"""
Session guard data models.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from shared.models import Session


class AccessStatus(str, Enum):
    """Guard decision for a guarded view."""

    PENDING = "pending"  # Initial check not resolved yet
    ALLOWED = "allowed"  # Session present
    DENIED = "denied"    # No session, or the check failed


class AccessDecision(BaseModel):
    """
    The guard's current answer for a guarded view.

    When denied, `redirect_to` is the login location and `next_location`
    is where the viewer was headed, so login can send them back there.
    """

    status: AccessStatus
    session: Optional[Session] = None
    redirect_to: Optional[str] = None
    next_location: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def allowed(self) -> bool:
        return self.status == AccessStatus.ALLOWED


class Redirect(BaseModel):
    """Returned by a guarded view instead of its content."""

    to: str = Field(..., description="Location to go to (the login page)")
    next_location: Optional[str] = Field(None, description="Location to return to afterwards")
    reason: Optional[str] = Field(None, description="User-facing reason, if any")

    model_config = {"frozen": True}
