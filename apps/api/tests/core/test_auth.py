"""
Tests for token claims, role checks and school scoping.
"""

import pytest
from fastapi import HTTPException

from division_sms.core.auth import (
    RECORDS_ROLES,
    CurrentUser,
    require_roles,
    resolve_school_id,
    user_from_claims,
)
from division_sms.modules.users.models import StaffRole

SCHOOL_ID = "11111111-1111-1111-1111-111111111111"
OTHER_SCHOOL_ID = "22222222-2222-2222-2222-222222222222"


class TestUserFromClaims:
    """Tests for building the current user from token claims."""

    def test_valid_claims(self):
        user = user_from_claims(
            {
                "sub": "u-1",
                "email": "registrar@school.deped.gov.ph",
                "role": "registrar",
                "school_id": SCHOOL_ID,
                "type": "access",
            }
        )

        assert user.id == "u-1"
        assert user.role == StaffRole.REGISTRAR
        assert user.school_id == SCHOOL_ID
        assert not user.is_division_level

    def test_refresh_token_rejected(self):
        with pytest.raises(HTTPException) as exc_info:
            user_from_claims({"sub": "u-1", "role": "teacher", "type": "refresh"})

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["error"] == "INVALID_TOKEN_TYPE"

    def test_unknown_role(self):
        with pytest.raises(HTTPException) as exc_info:
            user_from_claims({"sub": "u-1", "role": "janitor"})

        assert exc_info.value.detail["error"] == "INVALID_TOKEN_CLAIMS"

    def test_missing_subject(self):
        with pytest.raises(HTTPException) as exc_info:
            user_from_claims({"role": "teacher"})

        assert exc_info.value.status_code == 401


class TestRequireRoles:
    """Tests for the role-gated dependency."""

    @pytest.mark.asyncio
    async def test_allowed_role(self, registrar):
        dependency = require_roles(*RECORDS_ROLES)

        assert await dependency(user=registrar) is registrar

    @pytest.mark.asyncio
    async def test_denied_role(self, teacher):
        dependency = require_roles(*RECORDS_ROLES)

        with pytest.raises(HTTPException) as exc_info:
            await dependency(user=teacher)

        assert exc_info.value.status_code == 403


class TestResolveSchoolId:
    """Tests for deciding which school a request operates on."""

    def test_school_staff_default_to_own_school(self, registrar):
        assert resolve_school_id(registrar) == SCHOOL_ID
        assert resolve_school_id(registrar, SCHOOL_ID) == SCHOOL_ID

    def test_school_staff_cannot_reach_other_school(self, registrar):
        with pytest.raises(HTTPException) as exc_info:
            resolve_school_id(registrar, OTHER_SCHOOL_ID)

        assert exc_info.value.status_code == 403

    def test_division_user_picks_school(self, division_admin):
        assert resolve_school_id(division_admin, OTHER_SCHOOL_ID) == OTHER_SCHOOL_ID

    def test_division_user_must_name_school(self, division_admin):
        with pytest.raises(HTTPException) as exc_info:
            resolve_school_id(division_admin)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail["error"] == "SCHOOL_REQUIRED"

    def test_unassigned_school_staff(self):
        user = CurrentUser(id="u-5", email="t@deped.gov.ph", role=StaffRole.TEACHER)

        with pytest.raises(HTTPException) as exc_info:
            resolve_school_id(user)

        assert exc_info.value.detail["error"] == "NO_SCHOOL_ASSIGNED"
