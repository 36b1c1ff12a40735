"""
Base repository class for remote data access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for data operations.
"""

from typing import TypeVar, Generic

from supabase import AsyncClient


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for remote data operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ProfileRepository(BaseRepository[ProfileRecord]):
            async def get_record(self, user_id: str) -> Optional[ProfileRecord]:
                result = await self._db.table("profiles").select("*").eq("id", user_id).execute()
                if not result.data:
                    return None
                return self._map_to_record(result.data[0])
    """

    def __init__(self, db: AsyncClient) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Async Supabase client instance for remote operations.
        """
        self._db = db
