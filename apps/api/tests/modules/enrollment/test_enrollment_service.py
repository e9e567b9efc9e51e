"""
Unit tests for the enrollment service layer.

These tests cover:
- GPA thresholds (cache first, defaults when never saved)
- Previous-grade GPA
- Direct enrollment by records staff vs. requests filed by teachers
- Placement validation
- Approval, rejection and deletion
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from division_sms.modules.enrollment import service
from division_sms.modules.enrollment.gpa import DEFAULT_THRESHOLDS, GpaThresholds
from division_sms.modules.enrollment.models import EnrollmentRequestStatus
from division_sms.modules.enrollment.schemas import EnrollmentCreate
from division_sms.modules.sections.models import SectionType
from division_sms.modules.shared.errors import (
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)
from division_sms.modules.students.models import EnrollmentStatus

SERVICE = "division_sms.modules.enrollment.service"

SCHOOL_ID = "11111111-1111-1111-1111-111111111111"
OTHER_SCHOOL_ID = "22222222-2222-2222-2222-222222222222"


@pytest.fixture
def student():
    return SimpleNamespace(id="stu-1", school_id=SCHOOL_ID, enrollment_id=None)


@pytest.fixture
def section():
    return SimpleNamespace(
        id="sec-1",
        school_id=SCHOOL_ID,
        grade_level=7,
        school_year="2024-2025",
        is_active=True,
        section_type=SectionType.HETEROGENEOUS,
    )


@pytest.fixture
def repos(student, section):
    """Patch the enrollment, student and section repositories and the cache."""
    with (
        patch(f"{SERVICE}.repository") as repo,
        patch(f"{SERVICE}.students_repository") as students_repo,
        patch(f"{SERVICE}.sections_repository") as sections_repo,
        patch(f"{SERVICE}.cache_get_json", new=AsyncMock(return_value=None)) as cache_get,
        patch(f"{SERVICE}.cache_set_json", new=AsyncMock()) as cache_set,
        patch(f"{SERVICE}.cache_delete", new=AsyncMock()) as cache_delete,
    ):
        repo.get_thresholds_row = AsyncMock(return_value=None)
        repo.get_previous_grade_average = AsyncMock(return_value=85.456)
        repo.create = AsyncMock(
            side_effect=lambda db, **fields: SimpleNamespace(id="enr-1", **fields)
        )
        repo.update = AsyncMock(
            side_effect=lambda db, enrollment, **fields: _apply(enrollment, fields)
        )
        repo.delete_enrollment = AsyncMock()
        students_repo.get_by_id = AsyncMock(return_value=student)
        students_repo.update = AsyncMock()
        sections_repo.get_by_id = AsyncMock(return_value=section)
        sections_repo.list_active_for_grade = AsyncMock(return_value=[section])
        yield SimpleNamespace(
            repo=repo,
            students=students_repo,
            sections=sections_repo,
            cache_get=cache_get,
            cache_set=cache_set,
            cache_delete=cache_delete,
        )


def _apply(obj, fields):
    for key, value in fields.items():
        setattr(obj, key, value)
    return obj


def make_create(**overrides) -> EnrollmentCreate:
    data = {
        "student_id": "stu-1",
        "section_id": "sec-1",
        "grade_level": 7,
        "school_year": "2024-2025",
    }
    data.update(overrides)
    return EnrollmentCreate(**data)


class TestThresholds:
    @pytest.mark.asyncio
    async def test_defaults_when_never_saved(self, mock_db, repos):
        thresholds = await service.get_thresholds(mock_db, SCHOOL_ID)

        assert thresholds == DEFAULT_THRESHOLDS
        repos.cache_set.assert_awaited_once()
        assert repos.cache_set.await_args.args[0] == f"gpa_thresholds:{SCHOOL_ID}"

    @pytest.mark.asyncio
    async def test_cached_thresholds_skip_database(self, mock_db, repos):
        repos.cache_get.return_value = {
            "fast_learner_min_gpa": 88.0,
            "crack_section_max_gpa": 70.0,
            "heterogeneous_enabled": True,
            "homogeneous_random_enabled": False,
        }

        thresholds = await service.get_thresholds(mock_db, SCHOOL_ID)

        assert thresholds == GpaThresholds(88.0, 70.0, True, False)
        repos.repo.get_thresholds_row.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_invalidates_cache(self, mock_db, repos):
        repos.repo.upsert_thresholds = AsyncMock(
            return_value=SimpleNamespace(
                homogeneous_fast_learner_min=92,
                homogeneous_crack_section_max=70,
                heterogeneous_enabled=True,
                homogeneous_random_enabled=True,
            )
        )

        saved = await service.save_thresholds(
            mock_db, SCHOOL_ID, GpaThresholds(92.0, 70.0, True, True)
        )

        assert saved.fast_learner_min_gpa == 92.0
        mock_db.commit.assert_awaited_once()
        repos.cache_delete.assert_awaited_once_with(f"gpa_thresholds:{SCHOOL_ID}")


class TestPreviousGpa:
    @pytest.mark.asyncio
    async def test_kindergarten_has_no_previous_gpa(self, mock_db, repos):
        assert await service.get_previous_gpa(mock_db, "stu-1", 0) is None
        repos.repo.get_previous_grade_average.assert_not_called()

    @pytest.mark.asyncio
    async def test_uses_previous_grade_level_and_rounds(self, mock_db, repos):
        gpa = await service.get_previous_gpa(mock_db, "stu-1", 7)

        assert gpa == 85.46
        repos.repo.get_previous_grade_average.assert_awaited_once_with(mock_db, "stu-1", 6)

    @pytest.mark.asyncio
    async def test_no_grades_no_gpa(self, mock_db, repos):
        repos.repo.get_previous_grade_average.return_value = None
        assert await service.get_previous_gpa(mock_db, "stu-1", 3) is None

    @pytest.mark.asyncio
    async def test_eligible_sections_filtered_by_gpa(self, mock_db, repos, section):
        fast = SimpleNamespace(**{**vars(section), "id": "sec-2"})
        fast.section_type = SectionType.HOMOGENEOUS_FAST_LEARNER
        repos.sections.list_active_for_grade.return_value = [section, fast]

        gpa, suggested, _, eligible = await service.get_eligible_sections(
            mock_db, SCHOOL_ID, "stu-1", 7, "2024-2025"
        )

        assert gpa == 85.46
        assert suggested == "Heterogeneous"
        assert [s.id for s in eligible] == ["sec-1"]


class TestCreateEnrollment:
    @pytest.mark.asyncio
    async def test_records_staff_enroll_directly(self, mock_db, repos, registrar):
        enrollment = await service.create_enrollment(mock_db, SCHOOL_ID, make_create(), registrar)

        assert enrollment.status == EnrollmentRequestStatus.APPROVED
        assert enrollment.approved_by == registrar.id
        assert enrollment.enrolled_by == registrar.id

        placement = repos.students.update.await_args.kwargs
        assert placement["current_section_id"] == "sec-1"
        assert placement["grade_level"] == 7
        assert placement["enrollment_id"] == "enr-1"
        assert placement["enrollment_status"] == EnrollmentStatus.ENROLLED
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_teacher_files_pending_request(self, mock_db, repos, teacher):
        enrollment = await service.create_enrollment(mock_db, SCHOOL_ID, make_create(), teacher)

        assert enrollment.status == EnrollmentRequestStatus.PENDING
        assert enrollment.approved_by is None
        repos.students.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_student_from_other_school(self, mock_db, repos, registrar, student):
        student.school_id = OTHER_SCHOOL_ID

        with pytest.raises(NotFoundError):
            await service.create_enrollment(mock_db, SCHOOL_ID, make_create(), registrar)
        repos.repo.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_section_grade_level_mismatch(self, mock_db, repos, registrar):
        with pytest.raises(ValidationFailedError) as exc_info:
            await service.create_enrollment(
                mock_db, SCHOOL_ID, make_create(grade_level=8), registrar
            )
        assert exc_info.value.error_code == "SECTION_MISMATCH"

    @pytest.mark.asyncio
    async def test_inactive_section(self, mock_db, repos, registrar, section):
        section.is_active = False

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.create_enrollment(mock_db, SCHOOL_ID, make_create(), registrar)
        assert exc_info.value.error_code == "SECTION_INACTIVE"

    @pytest.mark.asyncio
    async def test_gpa_below_fast_learner_minimum(self, mock_db, repos, registrar, section):
        section.section_type = SectionType.HOMOGENEOUS_FAST_LEARNER

        with pytest.raises(ValidationFailedError) as exc_info:
            await service.create_enrollment(mock_db, SCHOOL_ID, make_create(), registrar)
        assert exc_info.value.error_code == "SECTION_NOT_ELIGIBLE"
        repos.repo.create.assert_not_called()


class TestDecisions:
    def make_enrollment(self, status):
        return SimpleNamespace(
            id="enr-1",
            school_id=SCHOOL_ID,
            student_id="stu-1",
            section_id="sec-1",
            grade_level=7,
            school_year="2024-2025",
            status=status,
            approved_by=None,
            remarks=None,
        )

    @pytest.mark.asyncio
    async def test_approve_pending_places_student(self, mock_db, repos, registrar):
        repos.repo.get_by_id = AsyncMock(
            return_value=self.make_enrollment(EnrollmentRequestStatus.PENDING)
        )

        enrollment = await service.approve_enrollment(
            mock_db, SCHOOL_ID, "enr-1", registrar, remarks="Documents complete"
        )

        assert enrollment.status == EnrollmentRequestStatus.APPROVED
        assert enrollment.approved_by == registrar.id
        assert enrollment.remarks == "Documents complete"
        repos.students.update.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reject_pending_leaves_student_alone(self, mock_db, repos, registrar):
        repos.repo.get_by_id = AsyncMock(
            return_value=self.make_enrollment(EnrollmentRequestStatus.PENDING)
        )

        enrollment = await service.reject_enrollment(mock_db, SCHOOL_ID, "enr-1", registrar)

        assert enrollment.status == EnrollmentRequestStatus.REJECTED
        repos.students.update.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status", [EnrollmentRequestStatus.APPROVED, EnrollmentRequestStatus.REJECTED]
    )
    async def test_decided_enrollment_cannot_be_approved(
        self, mock_db, repos, registrar, status
    ):
        repos.repo.get_by_id = AsyncMock(return_value=self.make_enrollment(status))

        with pytest.raises(InvalidStateError) as exc_info:
            await service.approve_enrollment(mock_db, SCHOOL_ID, "enr-1", registrar)
        assert exc_info.value.error_code == "INVALID_STATUS_TRANSITION"

    @pytest.mark.asyncio
    async def test_enrollment_of_other_school_not_found(self, mock_db, repos, registrar):
        enrollment = self.make_enrollment(EnrollmentRequestStatus.PENDING)
        enrollment.school_id = OTHER_SCHOOL_ID
        repos.repo.get_by_id = AsyncMock(return_value=enrollment)

        with pytest.raises(NotFoundError):
            await service.reject_enrollment(mock_db, SCHOOL_ID, "enr-1", registrar)

    @pytest.mark.asyncio
    async def test_delete_clears_matching_placement(self, mock_db, repos, student):
        student.enrollment_id = "enr-1"
        repos.repo.get_by_id = AsyncMock(
            return_value=self.make_enrollment(EnrollmentRequestStatus.APPROVED)
        )

        await service.delete_enrollment(mock_db, SCHOOL_ID, "enr-1")

        repos.students.update.assert_awaited_once_with(
            mock_db, student, current_section_id=None, enrollment_id=None, enrolled_at=None
        )
        repos.repo.delete_enrollment.assert_awaited_once()
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_keeps_placement_of_newer_enrollment(self, mock_db, repos, student):
        student.enrollment_id = "enr-2"
        repos.repo.get_by_id = AsyncMock(
            return_value=self.make_enrollment(EnrollmentRequestStatus.APPROVED)
        )

        await service.delete_enrollment(mock_db, SCHOOL_ID, "enr-1")

        repos.students.update.assert_not_called()
