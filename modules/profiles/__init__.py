"""
Profiles module.

Keeps the signed-in user's profile record in step with the remote store.

Public API:
- IRecordStore: Interface for the remote record/object store
- IProfileSynchronizer: Interface for profile load/update operations
- ProfileSynchronizer: Implementation (modules.profiles.service)
- ProfileRepository: Supabase record store (modules.profiles.repository)
- ProfileState: View-facing state with save callbacks (modules.profiles.state)
- Profile exceptions: RecordLoadError, RecordWriteError, AvatarUploadError, etc.
"""

from .interfaces import IRecordStore, IProfileSynchronizer
from .models import ProfileRecord, ProfilePatch, AvatarFile, ProfileStatus
from .exceptions import (
    RecordError,
    RecordLoadError,
    RecordWriteError,
    AvatarResolveError,
    AvatarUploadError,
    InvalidPatchError,
    InvalidAvatarError,
    OperationInProgressError,
)

__all__ = [
    # Interfaces
    "IRecordStore",
    "IProfileSynchronizer",
    # Models
    "ProfileRecord",
    "ProfilePatch",
    "AvatarFile",
    "ProfileStatus",
    # Exceptions
    "RecordError",
    "RecordLoadError",
    "RecordWriteError",
    "AvatarResolveError",
    "AvatarUploadError",
    "InvalidPatchError",
    "InvalidAvatarError",
    "OperationInProgressError",
]
