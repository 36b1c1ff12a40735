"""
Supabase-backed record store.

Profile rows live in the `profiles` table; avatar images live in the
`avatars` storage bucket. Rows and objects are accessed with the signed-in
user's session, so Row Level Security applies.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional

import httpx
from supabase import AsyncClient, PostgrestAPIError, StorageException

from shared.config import get_settings
from shared.repository import BaseRepository

from .exceptions import (
    AvatarResolveError,
    AvatarUploadError,
    RecordLoadError,
    RecordWriteError,
)
from .interfaces import IRecordStore
from .models import ProfileRecord

logger = logging.getLogger(__name__)

# Portal field name -> table column
_COLUMNS = {
    "user_id": "id",
    "avatar_ref": "avatar_url",
}


class ProfileRepository(BaseRepository[ProfileRecord], IRecordStore):
    """
    Record store for profiles and avatars.

    Note: This repository does NOT decide when to bootstrap or what to
    write. The synchronizer owns those rules.
    """

    def __init__(
        self,
        db: AsyncClient,
        table: Optional[str] = None,
        bucket: Optional[str] = None,
    ) -> None:
        super().__init__(db)
        settings = get_settings()
        self._table = table or settings.profiles_table
        self._bucket = bucket or settings.avatars_bucket

    # -------------------------------------------------------------------------
    # Profile rows
    # -------------------------------------------------------------------------

    async def get_record(self, user_id: str) -> Optional[ProfileRecord]:
        try:
            result = await self._db.table(self._table).select("*").eq("id", user_id).execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise RecordLoadError(user_id, str(e)) from e

        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    async def upsert_record(self, record: ProfileRecord) -> ProfileRecord:
        row = self._to_row(record.model_dump(exclude_none=True))
        try:
            result = await self._db.table(self._table).upsert(row).execute()
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise RecordWriteError(record.user_id, str(e)) from e

        if not result.data:
            raise RecordWriteError(record.user_id, "upsert returned no row")
        return self._map_to_record(result.data[0])

    async def update_record(self, user_id: str, changes: dict[str, Any]) -> ProfileRecord:
        row = self._to_row(changes)
        try:
            result = await (
                self._db.table(self._table).update(row).eq("id", user_id).execute()
            )
        except (PostgrestAPIError, httpx.HTTPError) as e:
            raise RecordWriteError(user_id, str(e)) from e

        if not result.data:
            # No row matched (missing, or hidden by RLS)
            raise RecordWriteError(user_id, "profile not found")
        return self._map_to_record(result.data[0])

    # -------------------------------------------------------------------------
    # Avatar objects
    # -------------------------------------------------------------------------

    async def upload_blob(self, key: str, content: bytes, content_type: str) -> None:
        try:
            await self._db.storage.from_(self._bucket).upload(
                key,
                content,
                {"content-type": content_type},
            )
        except (StorageException, httpx.HTTPError) as e:
            raise AvatarUploadError(key, str(e)) from e
        logger.debug(f"Uploaded {len(content)} bytes to {self._bucket}/{key}")

    async def resolve_public_url(self, key: str) -> str:
        try:
            return await self._db.storage.from_(self._bucket).get_public_url(key)
        except (StorageException, httpx.HTTPError) as e:
            raise AvatarResolveError(key, str(e)) from e

    # -------------------------------------------------------------------------
    # Private mapping methods
    # -------------------------------------------------------------------------

    def _to_row(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Map portal field names and values to table columns."""
        row: dict[str, Any] = {}
        for name, value in fields.items():
            if isinstance(value, (date, datetime)):
                value = value.isoformat()
            row[_COLUMNS.get(name, name)] = value
        return row

    def _map_to_record(self, data: dict[str, Any]) -> ProfileRecord:
        """Map table row to ProfileRecord model."""
        return ProfileRecord(
            user_id=str(data["id"]),
            full_name=data.get("full_name"),
            birthday=data.get("birthday"),
            age=data.get("age"),
            avatar_ref=data.get("avatar_url"),
            updated_at=data["updated_at"],
            created_at=data.get("created_at"),
        )
