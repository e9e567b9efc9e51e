"""
Unit tests for the subject catalogue.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from division_sms.modules.shared.errors import DuplicateRecordError, NotFoundError
from division_sms.modules.subjects import service
from division_sms.modules.subjects.schemas import SubjectCreate, SubjectUpdate

SERVICE = "division_sms.modules.subjects.service"
SCHOOL_ID = "11111111-1111-1111-1111-111111111111"


class FakeDriverError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


class TestSubjects:
    @pytest.mark.asyncio
    async def test_create(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.create = AsyncMock(
                side_effect=lambda db, **fields: SimpleNamespace(id="subj-1", **fields)
            )

            subject = await service.create_subject(
                mock_db, SCHOOL_ID, SubjectCreate(code="MATH7", name="Mathematics", grade_level=7)
            )

        assert subject.school_id == SCHOOL_ID
        assert subject.code == "MATH7"

    @pytest.mark.asyncio
    async def test_duplicate_code(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.create = AsyncMock(
                side_effect=IntegrityError("INSERT", {}, FakeDriverError("23505"))
            )

            with pytest.raises(DuplicateRecordError) as exc_info:
                await service.create_subject(
                    mock_db,
                    SCHOOL_ID,
                    SubjectCreate(code="MATH7", name="Mathematics", grade_level=7),
                )

        assert exc_info.value.error_code == "DUPLICATE_RECORD"
        assert exc_info.value.message == service.DUPLICATE_CODE
        mock_db.rollback.assert_awaited_once()

    def test_grade_level_range(self):
        with pytest.raises(ValueError):
            SubjectCreate(code="X", name="X", grade_level=13)

    @pytest.mark.asyncio
    async def test_update_other_school(self, mock_db):
        with patch(f"{SERVICE}.repository") as repo:
            repo.get_by_id = AsyncMock(
                return_value=SimpleNamespace(
                    id="subj-1", school_id="22222222-2222-2222-2222-222222222222"
                )
            )
            repo.update = AsyncMock()

            with pytest.raises(NotFoundError):
                await service.update_subject(
                    mock_db, SCHOOL_ID, "subj-1", SubjectUpdate(name="Math")
                )

        repo.update.assert_not_called()
