"""
Profile synchronizer.

Owns the rules for how the local profile follows the remote record:
bootstrap on first login, derived age, unique avatar keys, and "the
acknowledged write is the new state".
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Optional

from .age import calculate_age
from .exceptions import (
    InvalidAvatarError,
    InvalidPatchError,
    RecordError,
    RecordLoadError,
    RecordWriteError,
)
from .interfaces import IProfileSynchronizer, IRecordStore
from .models import ALLOWED_AVATAR_EXTENSIONS, ProfilePatch, ProfileRecord

logger = logging.getLogger(__name__)


def _local_now() -> datetime:
    return datetime.now().astimezone()


def avatar_key(user_id: str, extension: str) -> str:
    """A storage key no other upload can produce: user, random part, extension."""
    return f"{user_id}-{uuid.uuid4().hex}.{extension}"


class ProfileSynchronizer(IProfileSynchronizer):
    """
    Profile synchronizer over an IRecordStore.

    Args:
        store: Remote record store
        clock: Returns the current time; ages are computed from its date
    """

    def __init__(
        self,
        store: IRecordStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._store = store
        self._clock = clock or _local_now

    async def load(self, user_id: str, full_name: Optional[str] = None) -> ProfileRecord:
        """
        Fetch the profile; on first login create a minimal one.

        The new record carries only the user ID, `full_name` (from the
        registration metadata, may be None) and the timestamp.
        """
        record = await self._store.get_record(user_id)
        if record is not None:
            return record

        logger.info(f"No profile for user {user_id}, creating one")
        try:
            return await self._store.upsert_record(
                ProfileRecord(user_id=user_id, full_name=full_name, updated_at=self._clock())
            )
        except RecordWriteError as e:
            raise RecordLoadError(user_id, e.details.get("reason", e.message)) from e

    async def resolve_avatar_url(self, avatar_ref: Optional[str]) -> Optional[str]:
        """Display URL for `avatar_ref`; None on failure so initials are shown."""
        if not avatar_ref:
            return None
        try:
            return await self._store.resolve_public_url(avatar_ref)
        except RecordError as e:
            logger.warning(f"Could not resolve avatar URL for {avatar_ref}: {e.message}")
            return None

    async def update_avatar(
        self,
        user_id: str,
        file_bytes: bytes,
        file_extension: str,
    ) -> ProfileRecord:
        """
        Upload the image, then point the record at it.

        The record is written only after the upload succeeded, so a failed
        upload leaves it untouched. If the write fails after a successful
        upload the new object is left behind in storage.
        """
        extension = file_extension.lower().lstrip(".")
        if not file_bytes:
            raise InvalidAvatarError("You must select an image to upload.")
        if extension not in ALLOWED_AVATAR_EXTENSIONS:
            raise InvalidAvatarError(
                f"Unsupported image type '.{extension}'. "
                f"Use one of: {', '.join(sorted(ALLOWED_AVATAR_EXTENSIONS))}"
            )

        key = avatar_key(user_id, extension)
        content_type = "image/jpeg" if extension in ("jpg", "jpeg") else f"image/{extension}"

        await self._store.upload_blob(key, file_bytes, content_type)

        try:
            record = await self._store.update_record(
                user_id,
                {"avatar_ref": key, "updated_at": self._clock()},
            )
        except RecordWriteError:
            logger.warning(f"Profile write failed after upload; orphaned avatar object {key}")
            raise

        logger.info(f"Avatar updated for user {user_id}: {key}")
        return record

    async def update_fields(self, user_id: str, patch: ProfilePatch) -> ProfileRecord:
        """
        Write name and/or birthday.

        Setting a birthday recomputes the stored age as of today; clearing
        it clears the age. `updated_at` is refreshed on every call.
        """
        now = self._clock()
        changes: dict[str, Any] = {}
        fields = patch.changes()

        if "full_name" in fields:
            changes["full_name"] = fields["full_name"]

        if "birthday" in fields:
            birthday = fields["birthday"]
            if birthday is not None and birthday > now.date():
                raise InvalidPatchError("Birthday cannot be in the future")
            changes["birthday"] = birthday
            changes["age"] = calculate_age(birthday, now.date()) if birthday else None

        changes["updated_at"] = now

        record = await self._store.update_record(user_id, changes)
        logger.info(f"Profile updated for user {user_id}: {sorted(changes)}")
        return record
