"""
Supabase client factory.

The portal talks to Supabase as an ordinary signed-in user: the anon key plus
the user's own session, so every table and bucket access goes through Row
Level Security. The session is persisted to a local file so a signed-in user
stays signed in across CLI invocations.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from .config import get_settings

logger = logging.getLogger(__name__)

# Module-level client cache
_client: Optional[AsyncClient] = None


class FileSessionStorage:
    """
    Session storage backed by a JSON file.

    Implements the async get_item/set_item/remove_item storage contract the
    Supabase auth client uses to persist and restore sessions.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            return json.loads(self._path.read_text())
        except ValueError:
            logger.warning(f"Ignoring unreadable session file: {self._path}")
            return {}

    def _write(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(items))
        self._path.chmod(0o600)

    def _set(self, key: str, value: str) -> None:
        items = self._read()
        items[key] = value
        self._write(items)

    def _remove(self, key: str) -> None:
        items = self._read()
        if items.pop(key, None) is not None:
            self._write(items)

    # File access runs in a worker thread
    async def get_item(self, key: str) -> Optional[str]:
        items = await asyncio.to_thread(self._read)
        return items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    async def remove_item(self, key: str) -> None:
        await asyncio.to_thread(self._remove, key)


async def get_supabase_client() -> AsyncClient:
    """
    Get the shared Supabase client.

    Configured the same way as the web client: auto refresh, persisted
    session, PKCE flow.

    Returns:
        Async Supabase client configured with the anon key
    """
    global _client

    if _client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        options = AsyncClientOptions(
            auto_refresh_token=True,
            persist_session=True,
            flow_type="pkce",
            storage=FileSessionStorage(settings.session_file),
        )
        _client = await acreate_client(
            settings.supabase_url,
            settings.supabase_anon_key,
            options=options,
        )
        logger.debug(f"Created Supabase client for {settings.supabase_url}")

    return _client


def reset_client_cache() -> None:
    """
    Reset the cached client.

    Useful for testing or when configuration changes.
    """
    global _client
    _client = None
