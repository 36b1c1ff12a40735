"""Tests for shared/repository.py."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from shared.repository import BaseRepository


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    @pytest.mark.asyncio
    async def test_subclass_can_access_db(self):
        """Subclass should be able to await queries on _db."""
        mock_db = MagicMock()
        mock_db.table.return_value.select.return_value.execute = AsyncMock(
            return_value=MagicMock(data=[{"id": "123", "name": "test"}])
        )

        class TestRepository(BaseRepository[dict]):
            async def get_all(self) -> list[dict]:
                result = await self._db.table("test").select("*").execute()
                return result.data

        repo = TestRepository(mock_db)
        result = await repo.get_all()

        assert result == [{"id": "123", "name": "test"}]
        mock_db.table.assert_called_once_with("test")
