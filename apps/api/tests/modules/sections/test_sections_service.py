"""
Unit tests for section rosters and duplication.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from division_sms.modules.sections import service
from division_sms.modules.sections.schemas import SectionDuplicateRequest
from division_sms.modules.shared.errors import (
    DuplicateRecordError,
    NotFoundError,
    RecordInUseError,
)

SERVICE = "division_sms.modules.sections.service"
SCHOOL_ID = "11111111-1111-1111-1111-111111111111"


class FakeDriverError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


def _updated(db, row, **fields):
    return SimpleNamespace(**{**vars(row), **fields})


@pytest.fixture
def section():
    return SimpleNamespace(
        id="sec-1",
        school_id=SCHOOL_ID,
        name="Rizal",
        grade_level=7,
        school_year="2024-2025",
        section_type=None,
        section_adviser_id="teacher-1",
        max_students=2,
    )


@pytest.fixture
def repos(section):
    with (
        patch(f"{SERVICE}.repository") as repo,
        patch(f"{SERVICE}.students_repository") as students_repo,
        patch(f"{SERVICE}.schedules_repository") as schedules_repo,
    ):
        repo.get_by_id = AsyncMock(return_value=section)
        repo.get_roster_entry = AsyncMock(return_value=None)
        repo.count_students = AsyncMock(return_value=1)
        repo.add_student = AsyncMock(return_value=SimpleNamespace(id="entry-1"))
        repo.update_roster_entry = AsyncMock(side_effect=_updated)
        repo.create = AsyncMock(
            side_effect=lambda db, **fields: SimpleNamespace(id="sec-copy", **fields)
        )
        students_repo.get_by_id = AsyncMock(
            return_value=SimpleNamespace(
                id="stu-1", school_id=SCHOOL_ID, current_section_id=None
            )
        )
        schedules_repo.list_for_section = AsyncMock(return_value=[])
        schedules_repo.create_many = AsyncMock()
        students_repo.update = AsyncMock(side_effect=_updated)
        students_repo.clear_section = AsyncMock()
        yield SimpleNamespace(repo=repo, students=students_repo, schedules=schedules_repo)


class TestRoster:
    @pytest.mark.asyncio
    async def test_add_student(self, mock_db, repos):
        entry, student = await service.add_student_to_section(
            mock_db, SCHOOL_ID, "sec-1", "stu-1"
        )

        assert entry.id == "entry-1"
        assert student.id == "stu-1"
        repos.repo.add_student.assert_awaited_once_with(mock_db, "sec-1", "stu-1", "2024-2025")

    @pytest.mark.asyncio
    async def test_full_section_refuses_student(self, mock_db, repos):
        repos.repo.count_students.return_value = 2

        with pytest.raises(service.SectionFullError) as exc_info:
            await service.add_student_to_section(mock_db, SCHOOL_ID, "sec-1", "stu-1")
        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == "SECTION_FULL"

    @pytest.mark.asyncio
    async def test_unlimited_section(self, mock_db, repos, section):
        section.max_students = None
        repos.repo.count_students.return_value = 500

        await service.add_student_to_section(mock_db, SCHOOL_ID, "sec-1", "stu-1")
        repos.repo.count_students.assert_not_called()

    @pytest.mark.asyncio
    async def test_student_already_in_section(self, mock_db, repos):
        repos.repo.get_roster_entry.return_value = SimpleNamespace(
            id="entry-0", transferred_at=None
        )

        with pytest.raises(DuplicateRecordError):
            await service.add_student_to_section(mock_db, SCHOOL_ID, "sec-1", "stu-1")

    @pytest.mark.asyncio
    async def test_student_of_other_school(self, mock_db, repos):
        repos.students.get_by_id.return_value = SimpleNamespace(
            id="stu-1", school_id="22222222-2222-2222-2222-222222222222"
        )

        with pytest.raises(NotFoundError):
            await service.add_student_to_section(mock_db, SCHOOL_ID, "sec-1", "stu-1")


    @pytest.mark.asyncio
    async def test_add_makes_section_current(self, mock_db, repos):
        _, student = await service.add_student_to_section(mock_db, SCHOOL_ID, "sec-1", "stu-1")

        assert student.current_section_id == "sec-1"
        repos.students.update.assert_awaited_once()
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_transferred_student_rejoins_on_old_row(self, mock_db, repos):
        """A student who left the section gets the same roster row back."""
        repos.repo.get_roster_entry.return_value = SimpleNamespace(
            id="entry-0", transferred_at="2024-10-01T00:00:00Z", enrolled_at=None
        )

        entry, _ = await service.add_student_to_section(mock_db, SCHOOL_ID, "sec-1", "stu-1")

        assert entry.id == "entry-0"
        assert entry.transferred_at is None
        assert entry.enrolled_at is not None
        repos.repo.add_student.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_marks_transferred(self, mock_db, repos):
        entry = SimpleNamespace(id="entry-1", transferred_at=None)
        repos.repo.get_roster_entry.return_value = entry
        repos.students.get_by_id.return_value = SimpleNamespace(
            id="stu-1", school_id=SCHOOL_ID, current_section_id="sec-1"
        )

        await service.remove_student_from_section(mock_db, SCHOOL_ID, "sec-1", "stu-1")

        fields = repos.repo.update_roster_entry.await_args.kwargs
        assert fields["transferred_at"] is not None
        assert repos.students.update.await_args.kwargs == {"current_section_id": None}
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_remove_keeps_other_current_section(self, mock_db, repos):
        repos.repo.get_roster_entry.return_value = SimpleNamespace(id="entry-1")
        repos.students.get_by_id.return_value = SimpleNamespace(
            id="stu-1", school_id=SCHOOL_ID, current_section_id="sec-2"
        )

        await service.remove_student_from_section(mock_db, SCHOOL_ID, "sec-1", "stu-1")

        repos.students.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_remove_student_not_in_section(self, mock_db, repos):
        with pytest.raises(NotFoundError):
            await service.remove_student_from_section(mock_db, SCHOOL_ID, "sec-1", "stu-1")


class TestDeleteSection:
    @pytest.mark.asyncio
    async def test_refused_while_referenced(self, mock_db, repos):
        repos.repo.count_dependants = AsyncMock(return_value=3)
        repos.repo.soft_delete = AsyncMock()

        with pytest.raises(RecordInUseError):
            await service.delete_section(mock_db, SCHOOL_ID, "sec-1")

        repos.repo.soft_delete.assert_not_called()
        mock_db.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_clears_current_section(self, mock_db, repos, section):
        repos.repo.count_dependants = AsyncMock(return_value=0)
        repos.repo.soft_delete = AsyncMock()

        await service.delete_section(mock_db, SCHOOL_ID, "sec-1")

        repos.repo.soft_delete.assert_awaited_once_with(mock_db, section)
        repos.students.clear_section.assert_awaited_once_with(mock_db, "sec-1")
        mock_db.commit.assert_awaited_once()


class TestDuplicateSection:
    @pytest.mark.asyncio
    async def test_copies_section_and_schedules(self, mock_db, repos):
        repos.schedules.list_for_section.return_value = [
            SimpleNamespace(
                subject_id="subj-1",
                teacher_id="teacher-1",
                room_id="room-1",
                days_of_week=[1, 3],
                start_time="08:00",
                end_time="09:00",
            )
        ]

        section, copied = await service.duplicate_section(
            mock_db,
            SCHOOL_ID,
            "sec-1",
            SectionDuplicateRequest(name=" Rizal B ", school_year="2025-2026"),
        )

        assert copied == 1
        assert section.name == "Rizal B"
        assert section.grade_level == 7
        assert section.max_students == 2

        rows = repos.schedules.create_many.await_args.args[1]
        assert rows[0]["section_id"] == "sec-copy"
        assert rows[0]["school_year"] == "2025-2026"
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_schedule_copy_rolls_back(self, mock_db, repos):
        repos.schedules.create_many.side_effect = IntegrityError(
            "INSERT", {}, FakeDriverError("23505")
        )

        with pytest.raises(DuplicateRecordError):
            await service.duplicate_section(
                mock_db,
                SCHOOL_ID,
                "sec-1",
                SectionDuplicateRequest(name="Rizal", school_year="2025-2026"),
            )

        mock_db.rollback.assert_awaited_once()
        mock_db.commit.assert_not_called()
