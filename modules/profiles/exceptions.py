"""
Profiles module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError, PortalError, ValidationError


class RecordError(ExternalServiceError):
    """Base exception for record store failures."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message, service="records", code=code, details=details)


class RecordLoadError(RecordError):
    """
    Raised when a profile cannot be read (or bootstrapped).

    Fatal to the current view: an unreadable profile makes the session
    unusable, so the viewer is sent back to login.
    """

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            "Could not load your profile",
            code="RECORD_LOAD_FAILED",
            details={"user_id": user_id, "reason": reason},
        )


class RecordWriteError(RecordError):
    """Raised when a profile write is rejected. Recoverable; retry is allowed."""

    def __init__(self, user_id: str, reason: str):
        super().__init__(
            "Error updating profile",
            code="RECORD_WRITE_FAILED",
            details={"user_id": user_id, "reason": reason},
        )


class AvatarResolveError(RecordError):
    """Raised when a storage key cannot be turned into a display URL."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            f"Could not resolve avatar {key}",
            code="AVATAR_RESOLVE_FAILED",
            details={"key": key, "reason": reason},
        )


class AvatarUploadError(ExternalServiceError):
    """Raised when the avatar upload fails. The previous avatar is kept."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            "Error uploading avatar!",
            service="storage",
            code="AVATAR_UPLOAD_FAILED",
            details={"key": key, "reason": reason},
        )


class InvalidPatchError(ValidationError):
    """Raised when a profile edit fails validation."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_PROFILE_PATCH")


class InvalidAvatarError(ValidationError):
    """Raised when the picked file cannot be used as an avatar."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_AVATAR")


class OperationInProgressError(PortalError):
    """Raised when a save or upload is started while the same kind is in flight."""

    def __init__(self, operation: str):
        super().__init__(
            f"Please wait, {operation} is still in progress",
            code="OPERATION_IN_PROGRESS",
            details={"operation": operation},
        )
