"""
Unit tests for rooms.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from division_sms.modules.rooms import service
from division_sms.modules.rooms.schemas import RoomCreate, RoomUpdate
from division_sms.modules.shared.errors import DuplicateRecordError, NotFoundError

SERVICE = "division_sms.modules.rooms.service"
SCHOOL_ID = "11111111-1111-1111-1111-111111111111"


class FakeDriverError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


class TestRooms:
    @pytest.mark.asyncio
    async def test_duplicate_name(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.create = AsyncMock(
                side_effect=IntegrityError("INSERT", {}, FakeDriverError("23505"))
            )

            with pytest.raises(DuplicateRecordError) as exc_info:
                await service.create_room(mock_db, SCHOOL_ID, RoomCreate(name="Room 101"))

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == service.DUPLICATE_NAME

    @pytest.mark.asyncio
    async def test_rename_to_taken_name(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(
                return_value=SimpleNamespace(id="room-1", school_id=SCHOOL_ID)
            )
            repo.update = AsyncMock(
                side_effect=IntegrityError("UPDATE", {}, FakeDriverError("23505"))
            )

            with pytest.raises(DuplicateRecordError):
                await service.update_room(mock_db, SCHOOL_ID, "room-1", RoomUpdate(name="Lab"))

        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_soft_deletes(self, mock_db):
        room = SimpleNamespace(id="room-1", school_id=SCHOOL_ID)
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=room)
            repo.soft_delete = AsyncMock()

            await service.delete_room(mock_db, SCHOOL_ID, "room-1")

        repo.soft_delete.assert_awaited_once_with(mock_db, room)
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_room_of_other_school(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(return_value=None)

            with pytest.raises(NotFoundError) as exc_info:
                await service.get_room(mock_db, SCHOOL_ID, "room-9")

        assert exc_info.value.error_code == "ROOM_NOT_FOUND"
