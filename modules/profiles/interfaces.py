"""
Profiles module interfaces.

IRecordStore is the capability consumed from the remote record store
(profile rows plus avatar objects). IProfileSynchronizer is what views
and other modules depend on.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import ProfilePatch, ProfileRecord


@runtime_checkable
class IRecordStore(Protocol):
    """
    Remote storage for profile records and avatar blobs.

    Implementations raise RecordLoadError on read failures, RecordWriteError
    on write failures, AvatarUploadError on upload failures and
    AvatarResolveError when a URL cannot be produced.
    """

    async def get_record(self, user_id: str) -> Optional[ProfileRecord]:
        """Fetch the user's record, or None if there is none yet."""
        ...

    async def upsert_record(self, record: ProfileRecord) -> ProfileRecord:
        """Create or replace the record keyed by its user ID."""
        ...

    async def update_record(self, user_id: str, changes: dict[str, Any]) -> ProfileRecord:
        """
        Partially update the user's record.

        Args:
            user_id: Record key
            changes: ProfileRecord field names mapped to new values

        Returns:
            The record as acknowledged by the store
        """
        ...

    async def upload_blob(self, key: str, content: bytes, content_type: str) -> None:
        """Store avatar bytes under `key`."""
        ...

    async def resolve_public_url(self, key: str) -> str:
        """Turn a storage key into a fetchable URL."""
        ...


@runtime_checkable
class IProfileSynchronizer(Protocol):
    """Keeps local profile state in step with the record store."""

    async def load(self, user_id: str, full_name: Optional[str] = None) -> ProfileRecord:
        """
        Load the user's profile, creating it on first login.

        A profile created here starts with `full_name` (the name given at
        registration), or with no name when there is none.

        Raises:
            RecordLoadError: If the profile cannot be read or created
        """
        ...

    async def resolve_avatar_url(self, avatar_ref: Optional[str]) -> Optional[str]:
        """Display URL for an avatar, or None (show initials instead)."""
        ...

    async def update_avatar(
        self,
        user_id: str,
        file_bytes: bytes,
        file_extension: str,
    ) -> ProfileRecord:
        """
        Upload a new avatar and point the profile at it.

        Raises:
            InvalidAvatarError: If the file is empty or not an image type
            AvatarUploadError: If the upload fails (record unchanged)
            RecordWriteError: If the record write fails after the upload
        """
        ...

    async def update_fields(self, user_id: str, patch: ProfilePatch) -> ProfileRecord:
        """
        Write name/birthday edits, recomputing age from the birthday.

        Raises:
            InvalidPatchError: If the patch is invalid
            RecordWriteError: If the write is rejected
        """
        ...
