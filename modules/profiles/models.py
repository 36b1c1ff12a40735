"""
Profiles module data models.

The profile record lives in the remote `profiles` table, one row per user.
Field names here are the portal's; the repository maps them to columns
(`user_id` -> `id`, `avatar_ref` -> `avatar_url`).
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


ALLOWED_AVATAR_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "webp"})


class ProfileRecord(BaseModel):
    """
    A user's profile as last acknowledged by the record store.

    `age` is stored, not live: it is the age as of the last birthday edit.
    """

    user_id: str = Field(..., description="User ID, same as the session's")
    full_name: Optional[str] = Field(None, description="Display name")
    birthday: Optional[date] = Field(None, description="Date of birth")
    age: Optional[int] = Field(None, ge=0, description="Age derived from birthday at last edit")
    avatar_ref: Optional[str] = Field(None, description="Storage key of the avatar image")
    updated_at: datetime = Field(..., description="Last write time")
    created_at: Optional[datetime] = Field(None, description="Creation time, set once by the store")

    model_config = {"frozen": True}

    @property
    def initials(self) -> str:
        """First letter of each name part, or '?' when there is no name."""
        if not self.full_name:
            return "?"
        return "".join(part[0] for part in self.full_name.split()) or "?"


class ProfilePatch(BaseModel):
    """
    Edit to a profile's own fields.

    Only fields passed explicitly are written; passing None clears a field.
    """

    full_name: Optional[str] = None
    birthday: Optional[date] = None

    @field_validator("full_name", mode="before")
    @classmethod
    def blank_name_is_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    def changes(self) -> dict[str, Any]:
        """The explicitly set fields."""
        return self.model_dump(exclude_unset=True)


class AvatarFile(BaseModel):
    """An image picked for upload. Bytes are held only during the upload."""

    filename: str = Field(..., min_length=1)
    content: bytes = Field(..., repr=False)

    @property
    def extension(self) -> str:
        """Text after the last dot, lower-cased ('' when there is none)."""
        if "." not in self.filename:
            return ""
        return self.filename.rsplit(".", 1)[-1].lower()


class ProfileStatus(str, Enum):
    """What a profile view is currently doing."""

    IDLE = "idle"
    SAVING = "saving"        # Field update in flight
    UPLOADING = "uploading"  # Avatar upload in flight
