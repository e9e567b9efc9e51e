"""
Shared fixtures: a mocked database session and authenticated users.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from division_sms.core.auth import CurrentUser
from division_sms.modules.users.models import StaffRole

SCHOOL_ID = "11111111-1111-1111-1111-111111111111"
OTHER_SCHOOL_ID = "22222222-2222-2222-2222-222222222222"


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.flush = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def division_admin():
    return CurrentUser(
        id="00000000-0000-0000-0000-0000000000d1",
        email="division.admin@deped.gov.ph",
        role=StaffRole.DIVISION_ADMIN,
    )


@pytest.fixture
def registrar():
    return CurrentUser(
        id="00000000-0000-0000-0000-0000000000a2",
        email="registrar@school.deped.gov.ph",
        role=StaffRole.REGISTRAR,
        school_id=SCHOOL_ID,
    )


@pytest.fixture
def teacher():
    return CurrentUser(
        id="00000000-0000-0000-0000-0000000000b3",
        email="teacher@school.deped.gov.ph",
        role=StaffRole.TEACHER,
        school_id=SCHOOL_ID,
    )
