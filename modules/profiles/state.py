"""
View-facing profile state.

Holds the last acknowledged profile plus the in-flight status, and exposes
save callbacks that never raise: failures come back as a message while the
profile keeps its last-known-good value.
"""

import logging
from typing import Optional

from shared.exceptions import PortalError
from shared.models import Session

from .exceptions import OperationInProgressError
from .interfaces import IProfileSynchronizer
from .models import AvatarFile, ProfilePatch, ProfileRecord, ProfileStatus

logger = logging.getLogger(__name__)


class ProfileState:
    """
    Profile state for one guarded view.

    Status moves Idle -> Saving -> Idle for field edits and
    Idle -> Uploading -> Idle for avatar changes. One of each may be in
    flight at a time; a second one is refused with a message.
    """

    def __init__(
        self,
        synchronizer: IProfileSynchronizer,
        session: Session,
        profile: ProfileRecord,
        avatar_url: Optional[str] = None,
    ):
        self._synchronizer = synchronizer
        self._session = session
        self._profile = profile
        self._avatar_url = avatar_url
        self._saving = False
        self._uploading = False
        self._error: Optional[str] = None
        self._message: Optional[str] = None

    @classmethod
    async def load(cls, synchronizer: IProfileSynchronizer, session: Session) -> "ProfileState":
        """
        Load (or bootstrap) the session user's profile.

        Raises:
            RecordLoadError: The caller should send the viewer back to login
        """
        profile = await synchronizer.load(session.user_id, session.full_name)
        avatar_url = await synchronizer.resolve_avatar_url(profile.avatar_ref)
        return cls(synchronizer, session, profile, avatar_url)

    # -------------------------------------------------------------------------
    # Read-only view
    # -------------------------------------------------------------------------

    @property
    def profile(self) -> ProfileRecord:
        return self._profile

    @property
    def session(self) -> Session:
        return self._session

    @property
    def avatar_url(self) -> Optional[str]:
        return self._avatar_url

    @property
    def initials(self) -> str:
        return self._profile.initials

    @property
    def display_name(self) -> str:
        return self._profile.full_name or self._session.email or self._session.user_id

    @property
    def status(self) -> ProfileStatus:
        """
        Single-value summary of in-flight work.

        An upload takes precedence: with an upload and a field save both in
        flight this reports UPLOADING. Use `is_saving` and `is_uploading` to
        see each one.
        """
        if self._uploading:
            return ProfileStatus.UPLOADING
        if self._saving:
            return ProfileStatus.SAVING
        return ProfileStatus.IDLE

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def is_uploading(self) -> bool:
        return self._uploading

    @property
    def error(self) -> Optional[str]:
        """Message from the last failed save, cleared by the next success."""
        return self._error

    @property
    def message(self) -> Optional[str]:
        """Message from the last successful save."""
        return self._message

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def _fail(self, error: PortalError) -> bool:
        self._error = error.message
        self._message = None
        return False

    def _succeed(self, message: str) -> bool:
        self._error = None
        self._message = message
        return True

    async def save_fields(self, patch: ProfilePatch) -> bool:
        """Save name/birthday edits. Returns False and sets `error` on failure."""
        if self._saving:
            return self._fail(OperationInProgressError("saving"))

        self._saving = True
        try:
            self._profile = await self._synchronizer.update_fields(self._session.user_id, patch)
        except PortalError as e:
            logger.error(f"Error updating profile: {e.message}")
            return self._fail(e)
        finally:
            self._saving = False

        return self._succeed("Profile updated successfully!")

    async def save_avatar(self, file: AvatarFile) -> bool:
        """Upload a new avatar. Returns False and sets `error` on failure."""
        if self._uploading:
            return self._fail(OperationInProgressError("an avatar upload"))

        self._uploading = True
        try:
            profile = await self._synchronizer.update_avatar(
                self._session.user_id, file.content, file.extension
            )
            self._profile = profile
            self._avatar_url = await self._synchronizer.resolve_avatar_url(profile.avatar_ref)
        except PortalError as e:
            logger.error(f"Error uploading avatar: {e.message}")
            return self._fail(e)
        finally:
            self._uploading = False

        return self._succeed("Avatar updated successfully!")
