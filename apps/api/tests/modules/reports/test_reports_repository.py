"""
Unit tests for the dashboard queries.
"""

from unittest.mock import MagicMock

import pytest

from division_sms.modules.reports import repository
from division_sms.modules.users.models import StaffRole

SCHOOL_ID = "11111111-1111-1111-1111-111111111111"


def result(scalar=None, rows=None):
    res = MagicMock()
    res.scalar.return_value = scalar
    res.all.return_value = rows or []
    return res


class TestCounts:
    @pytest.mark.asyncio
    async def test_empty_count_is_zero(self, mock_db):
        mock_db.execute.return_value = result(scalar=None)

        assert await repository.count_students(mock_db) == 0

    @pytest.mark.asyncio
    async def test_school_scope_adds_filter(self, mock_db):
        mock_db.execute.return_value = result(scalar=5)

        assert await repository.count_students(mock_db, SCHOOL_ID) == 5

        query = mock_db.execute.await_args.args[0]
        assert "students.school_id" in str(query)

    @pytest.mark.asyncio
    async def test_division_scope_has_no_school_filter(self, mock_db):
        mock_db.execute.return_value = result(scalar=5)

        await repository.count_active_sections(mock_db, "2024-2025")

        query = mock_db.execute.await_args.args[0]
        assert "sections.school_id" not in str(query)
        assert "sections.school_year" in str(query)

    @pytest.mark.asyncio
    async def test_staff_roles_reported_by_value(self, mock_db):
        mock_db.execute.return_value = result(
            rows=[(StaffRole.REGISTRAR, 2), (StaffRole.TEACHER, 14)]
        )

        assert await repository.staff_by_role(mock_db) == [("registrar", 2), ("teacher", 14)]
