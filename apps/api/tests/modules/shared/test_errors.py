"""
Tests for service errors and constraint violation mapping.
"""

import json
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from division_sms.modules.shared.errors import (
    DuplicateRecordError,
    NotFoundError,
    RecordInUseError,
    raise_for_integrity_error,
    service_error_handler,
)


class FakeDriverError(Exception):
    def __init__(self, sqlstate: str):
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


def integrity_error(sqlstate: str) -> IntegrityError:
    return IntegrityError("INSERT INTO ...", {}, FakeDriverError(sqlstate))


class TestRaiseForIntegrityError:
    """Constraint violations map to service errors by SQLSTATE."""

    def test_unique_violation(self):
        with pytest.raises(DuplicateRecordError) as exc_info:
            raise_for_integrity_error(integrity_error("23505"), duplicate_message="Taken.")

        assert exc_info.value.message == "Taken."
        assert exc_info.value.status_code == 409

    def test_foreign_key_violation(self):
        with pytest.raises(RecordInUseError) as exc_info:
            raise_for_integrity_error(integrity_error("23503"))

        assert exc_info.value.error_code == "RECORD_IN_USE"

    def test_unknown_violation_propagates(self):
        error = integrity_error("23514")

        with pytest.raises(IntegrityError) as exc_info:
            raise_for_integrity_error(error)

        assert exc_info.value is error


class TestServiceErrorHandler:
    @pytest.mark.asyncio
    async def test_renders_detail(self):
        request = SimpleNamespace(method="GET", url=SimpleNamespace(path="/api/v1/students/x"))

        response = await service_error_handler(request, NotFoundError("Student", "x"))

        assert response.status_code == 404
        assert json.loads(response.body) == {
            "detail": {"error": "STUDENT_NOT_FOUND", "message": "Student x not found"}
        }
