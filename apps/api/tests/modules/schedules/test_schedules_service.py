"""
Unit tests for the schedule service layer.
"""

from datetime import time
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from division_sms.modules.schedules import service
from division_sms.modules.schedules.schemas import ScheduleCreate, ScheduleUpdate
from division_sms.modules.shared.errors import (
    DuplicateRecordError,
    NotFoundError,
    ValidationFailedError,
)

SERVICE = "division_sms.modules.schedules.service"
SCHOOL_ID = "11111111-1111-1111-1111-111111111111"
OTHER_SCHOOL_ID = "22222222-2222-2222-2222-222222222222"


class FakeDriverError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


def in_school(school_id=SCHOOL_ID):
    return AsyncMock(side_effect=lambda db, id: SimpleNamespace(id=id, school_id=school_id))


def make_schedule(**overrides):
    fields = {
        "id": "sched-1",
        "school_id": SCHOOL_ID,
        "subject_id": "subj-1",
        "section_id": "sec-1",
        "teacher_id": "teacher-1",
        "room_id": "room-1",
        "days_of_week": [1, 3],
        "start_time": time(8, 0),
        "end_time": time(9, 0),
        "school_year": "2024-2025",
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_create(**overrides) -> ScheduleCreate:
    data = {
        "subject_id": "subj-2",
        "section_id": "sec-2",
        "teacher_id": "teacher-2",
        "room_id": "room-2",
        "days_of_week": [1],
        "start_time": "08:30",
        "end_time": "09:30",
        "school_year": "2024-2025",
    }
    data.update(overrides)
    return ScheduleCreate(**data)


@pytest.fixture
def repos():
    with (
        patch(f"{SERVICE}.repository") as repo,
        patch(f"{SERVICE}.sections_repository") as sections_repo,
        patch(f"{SERVICE}.subjects_repository") as subjects_repo,
        patch(f"{SERVICE}.rooms_repository") as rooms_repo,
        patch(f"{SERVICE}.UserRepository") as users_repo,
    ):
        repo.list_for_school_year = AsyncMock(return_value=[make_schedule()])
        repo.create = AsyncMock(
            side_effect=lambda db, **fields: SimpleNamespace(id="sched-new", **fields)
        )
        sections_repo.get_by_id = in_school()
        subjects_repo.get_by_id = in_school()
        rooms_repo.get_by_id = in_school()
        users_repo.get_by_id = in_school()
        yield SimpleNamespace(
            repo=repo,
            sections=sections_repo,
            subjects=subjects_repo,
            rooms=rooms_repo,
            users=users_repo,
        )


class TestCreateSchedule:
    @pytest.mark.asyncio
    async def test_no_conflict_saves(self, mock_db, repos):
        schedule = await service.create_schedule(mock_db, SCHOOL_ID, make_create())

        assert schedule.id == "sched-new"
        assert schedule.school_id == SCHOOL_ID
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_room_conflict_refused_with_details(self, mock_db, repos):
        with pytest.raises(service.ScheduleConflictError) as exc_info:
            await service.create_schedule(mock_db, SCHOOL_ID, make_create(room_id="room-1"))

        error = exc_info.value
        assert error.status_code == 409
        assert error.error_code == "SCHEDULE_CONFLICT"
        assert error.message == "Room is already scheduled at this time on Mon, Wed"
        assert error.extra["conflicts"] == [
            {
                "type": "room",
                "message": "Room is already scheduled at this time on Mon, Wed",
                "conflicting_schedule_id": "sched-1",
            }
        ]
        repos.repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_several_conflicts_summarised(self, mock_db, repos):
        with pytest.raises(service.ScheduleConflictError) as exc_info:
            await service.create_schedule(
                mock_db, SCHOOL_ID, make_create(room_id="room-1", teacher_id="teacher-1")
            )
        assert exc_info.value.message == "2 schedule conflicts found"

    @pytest.mark.asyncio
    async def test_section_of_other_school(self, mock_db, repos):
        repos.sections.get_by_id = in_school(OTHER_SCHOOL_ID)

        with pytest.raises(NotFoundError):
            await service.create_schedule(mock_db, SCHOOL_ID, make_create())

    @pytest.mark.asyncio
    async def test_teacher_of_other_school(self, mock_db, repos):
        repos.users.get_by_id = in_school(OTHER_SCHOOL_ID)

        with pytest.raises(NotFoundError) as exc_info:
            await service.create_schedule(mock_db, SCHOOL_ID, make_create())

        assert exc_info.value.error_code == "TEACHER_NOT_FOUND"
        repos.repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_subject(self, mock_db, repos):
        repos.subjects.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError) as exc_info:
            await service.create_schedule(mock_db, SCHOOL_ID, make_create())

        assert exc_info.value.error_code == "SUBJECT_NOT_FOUND"


class TestUpdateAndDuplicate:
    @pytest.mark.asyncio
    async def test_update_does_not_clash_with_itself(self, mock_db, repos):
        existing = make_schedule()
        repos.repo.get_by_id = AsyncMock(return_value=existing)
        repos.repo.update = AsyncMock(return_value=existing)

        await service.update_schedule(
            mock_db, SCHOOL_ID, "sched-1", ScheduleUpdate(end_time="09:30")
        )

        repos.repo.update.assert_awaited_once()
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_rejects_inverted_times(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(return_value=make_schedule())

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.update_schedule(
                mock_db, SCHOOL_ID, "sched-1", ScheduleUpdate(start_time="10:00")
            )
        assert exc_info.value.error_code == "INVALID_TIME_RANGE"

    @pytest.mark.asyncio
    async def test_duplicate_into_same_year_refused(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(return_value=make_schedule())

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.duplicate_schedule(mock_db, SCHOOL_ID, "sched-1", "2024-2025")
        assert exc_info.value.error_code == "SAME_SCHOOL_YEAR"

    @pytest.mark.asyncio
    async def test_duplicate_into_next_year(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(return_value=make_schedule())

        copy = await service.duplicate_schedule(mock_db, SCHOOL_ID, "sched-1", "2025-2026")

        assert copy.school_year == "2025-2026"
        assert copy.room_id == "room-1"

    @pytest.mark.asyncio
    async def test_update_to_room_of_other_school(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(return_value=make_schedule())
        repos.repo.update = AsyncMock()
        repos.rooms.get_by_id = in_school(OTHER_SCHOOL_ID)

        with pytest.raises(NotFoundError) as exc_info:
            await service.update_schedule(
                mock_db, SCHOOL_ID, "sched-1", ScheduleUpdate(room_id="room-9")
            )

        assert exc_info.value.error_code == "ROOM_NOT_FOUND"
        repos.repo.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_only_checks_changed_references(self, mock_db, repos):
        existing = make_schedule()
        repos.repo.get_by_id = AsyncMock(return_value=existing)
        repos.repo.update = AsyncMock(return_value=existing)

        await service.update_schedule(
            mock_db, SCHOOL_ID, "sched-1", ScheduleUpdate(teacher_id="teacher-9")
        )

        repos.users.get_by_id.assert_awaited_once_with(mock_db, "teacher-9")
        repos.rooms.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_collision_rolls_back(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(return_value=make_schedule())
        repos.repo.create.side_effect = IntegrityError("INSERT", {}, FakeDriverError("23505"))

        with pytest.raises(DuplicateRecordError):
            await service.duplicate_schedule(mock_db, SCHOOL_ID, "sched-1", "2025-2026")

        mock_db.rollback.assert_awaited_once()
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_with_teacher_moved_away(self, mock_db, repos):
        repos.repo.get_by_id = AsyncMock(return_value=make_schedule())
        repos.users.get_by_id = in_school(OTHER_SCHOOL_ID)

        with pytest.raises(NotFoundError):
            await service.duplicate_schedule(mock_db, SCHOOL_ID, "sched-1", "2025-2026")

        repos.repo.create.assert_not_called()


def test_group_by_day_sorts_days_and_times():
    early = make_schedule(id="a", days_of_week=[3, 1], start_time=time(7, 0))
    late = make_schedule(id="b", days_of_week=[1], start_time=time(10, 0))

    grouped = service.group_by_day([late, early])

    assert [(day, [s.id for s in items]) for day, items in grouped] == [
        (1, ["a", "b"]),
        (3, ["a"]),
    ]
