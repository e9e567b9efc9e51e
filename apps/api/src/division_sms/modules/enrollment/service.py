"""
Enrollment Service Layer

Handles enrollment business logic:
1. GPA thresholds per school (cached in Redis, database is the source of truth)
2. Previous-grade GPA and the sections a student is eligible for
3. Enrollment records and the student placement they drive

Records staff enroll directly (status ``approved``). Teachers file
enrollment requests (status ``pending``) that records staff approve or
reject; only an approved enrollment moves the student into the section.
"""

import logging
from datetime import UTC, date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import RECORDS_ROLES, CurrentUser
from division_sms.core.redis import cache_delete, cache_get_json, cache_set_json
from division_sms.modules.enrollment import repository
from division_sms.modules.enrollment.gpa import (
    GpaThresholds,
    filter_eligible_sections,
    get_suggested_section_type,
    section_type_matches_gpa,
    thresholds_from_cache,
    thresholds_from_row,
    thresholds_to_cache,
    thresholds_to_row,
)
from division_sms.modules.enrollment.models import Enrollment, EnrollmentRequestStatus
from division_sms.modules.enrollment.schemas import EnrollmentCreate, EnrollmentUpdate
from division_sms.modules.sections import repository as sections_repository
from division_sms.modules.sections.models import Section
from division_sms.modules.shared.errors import (
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
    raise_for_integrity_error,
)
from division_sms.modules.shared.grade_levels import GRADE_LEVEL_MIN
from division_sms.modules.students import repository as students_repository
from division_sms.modules.students.models import EnrollmentStatus, Student

logger = logging.getLogger(__name__)

THRESHOLDS_CACHE_TTL = 60 * 60
DUPLICATE_ENROLLMENT = "This student is already enrolled for this school year."

# Allowed status transitions for enrollment requests
ALLOWED_TRANSITIONS: dict[EnrollmentRequestStatus, set[EnrollmentRequestStatus]] = {
    EnrollmentRequestStatus.PENDING: {
        EnrollmentRequestStatus.APPROVED,
        EnrollmentRequestStatus.REJECTED,
    },
    EnrollmentRequestStatus.APPROVED: set(),
    EnrollmentRequestStatus.REJECTED: set(),
}


def thresholds_cache_key(school_id: str) -> str:
    return f"gpa_thresholds:{school_id}"


def validate_status_transition(
    current: EnrollmentRequestStatus, new: EnrollmentRequestStatus
) -> None:
    """
    Raises:
        InvalidStateError: If the transition is not allowed
    """
    if new not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidStateError(
            f"Cannot change an enrollment from '{current.value}' to '{new.value}'.",
            "INVALID_STATUS_TRANSITION",
        )


# ============================================
# GPA thresholds
# ============================================


async def get_thresholds(db: AsyncSession, school_id: str) -> GpaThresholds:
    """Thresholds of a school; defaults when the school never saved any."""
    key = thresholds_cache_key(school_id)
    cached = await cache_get_json(key)
    if cached:
        return thresholds_from_cache(cached)

    thresholds = thresholds_from_row(await repository.get_thresholds_row(db, school_id))
    await cache_set_json(key, thresholds_to_cache(thresholds), THRESHOLDS_CACHE_TTL)
    return thresholds


async def save_thresholds(
    db: AsyncSession, school_id: str, thresholds: GpaThresholds
) -> GpaThresholds:
    row = await repository.upsert_thresholds(db, school_id, thresholds_to_row(thresholds))
    await db.commit()
    await cache_delete(thresholds_cache_key(school_id))

    logger.info(f"Saved GPA thresholds for school {school_id}")
    return thresholds_from_row(row)


# ============================================
# Eligibility
# ============================================


async def _get_student(db: AsyncSession, school_id: str, student_id: str) -> Student:
    student = await students_repository.get_by_id(db, student_id)
    if not student or student.school_id != school_id:
        raise NotFoundError("Student", student_id)
    return student


async def _get_section(db: AsyncSession, school_id: str, section_id: str) -> Section:
    section = await sections_repository.get_by_id(db, section_id)
    if not section or section.school_id != school_id:
        raise NotFoundError("Section", section_id)
    return section


async def get_previous_gpa(db: AsyncSession, student_id: str, grade_level: int) -> float | None:
    """
    Average of the student's grades in the grade level before ``grade_level``.

    Kindergarten has no previous grade level, so its GPA is always None.
    """
    if grade_level <= GRADE_LEVEL_MIN:
        return None
    average = await repository.get_previous_grade_average(db, student_id, grade_level - 1)
    return round(average, 2) if average is not None else None


async def get_student_previous_gpa(
    db: AsyncSession, school_id: str, student_id: str, grade_level: int
) -> tuple[float | None, str | None]:
    """Returns (gpa, suggested section type label)."""
    await _get_student(db, school_id, student_id)
    gpa = await get_previous_gpa(db, student_id, grade_level)
    thresholds = await get_thresholds(db, school_id)
    return gpa, get_suggested_section_type(gpa, thresholds)


async def get_eligible_sections(
    db: AsyncSession,
    school_id: str,
    student_id: str,
    grade_level: int,
    school_year: str,
) -> tuple[float | None, str | None, GpaThresholds, list[Section]]:
    """
    Sections of ``grade_level`` and ``school_year`` open to the student.

    Returns:
        Tuple of (gpa, suggested section type, thresholds, eligible sections)
    """
    await _get_student(db, school_id, student_id)
    gpa = await get_previous_gpa(db, student_id, grade_level)
    thresholds = await get_thresholds(db, school_id)
    sections = await sections_repository.list_active_for_grade(
        db, school_id, grade_level, school_year
    )
    eligible = filter_eligible_sections(sections, gpa, thresholds)
    return gpa, get_suggested_section_type(gpa, thresholds), thresholds, eligible


async def _validate_placement(
    db: AsyncSession,
    school_id: str,
    student_id: str,
    section_id: str,
    grade_level: int,
    school_year: str,
) -> Section:
    """
    Raises:
        NotFoundError: Section is not in this school
        ValidationFailedError: Section does not match the grade level or
            school year, or the student's GPA does not qualify for it
    """
    section = await _get_section(db, school_id, section_id)
    if section.grade_level != grade_level or section.school_year != school_year:
        raise ValidationFailedError(
            "The section does not match the selected grade level and school year.",
            "SECTION_MISMATCH",
        )
    if not section.is_active:
        raise ValidationFailedError("The section is not active.", "SECTION_INACTIVE")

    gpa = await get_previous_gpa(db, student_id, grade_level)
    thresholds = await get_thresholds(db, school_id)
    if not section_type_matches_gpa(section.section_type, gpa, thresholds):
        raise ValidationFailedError(
            "The student's GPA does not qualify for this section.", "SECTION_NOT_ELIGIBLE"
        )
    return section


async def _place_student(db: AsyncSession, student: Student, enrollment: Enrollment) -> None:
    await students_repository.update(
        db,
        student,
        grade_level=enrollment.grade_level,
        current_section_id=enrollment.section_id,
        enrollment_id=enrollment.id,
        enrolled_at=datetime.now(UTC),
        enrollment_status=EnrollmentStatus.ENROLLED,
    )


# ============================================
# Enrollments
# ============================================


async def get_enrollment(db: AsyncSession, school_id: str, id: str) -> Enrollment:
    enrollment = await repository.get_by_id(db, id)
    if not enrollment or enrollment.school_id != school_id:
        raise NotFoundError("Enrollment", id)
    return enrollment


async def list_enrollments(
    db: AsyncSession,
    school_id: str,
    **filters,
) -> tuple[list[Enrollment], int]:
    return await repository.list_enrollments(db, school_id=school_id, **filters)


async def create_enrollment(
    db: AsyncSession,
    school_id: str,
    data: EnrollmentCreate,
    user: CurrentUser,
) -> Enrollment:
    """
    Enroll a student, or file an enrollment request when the caller is a teacher.

    Raises:
        NotFoundError: Student or section is not in this school
        ValidationFailedError: Section mismatch or GPA not eligible
        DuplicateRecordError: Student already has an enrollment that year
    """
    student = await _get_student(db, school_id, data.student_id)
    await _validate_placement(
        db, school_id, student.id, data.section_id, data.grade_level, data.school_year
    )

    direct = user.role in RECORDS_ROLES
    try:
        enrollment = await repository.create(
            db,
            school_id=school_id,
            student_id=student.id,
            section_id=data.section_id,
            grade_level=data.grade_level,
            school_year=data.school_year,
            remarks=data.remarks,
            enrollment_date=date.today(),
            status=(
                EnrollmentRequestStatus.APPROVED if direct else EnrollmentRequestStatus.PENDING
            ),
            enrolled_by=user.id,
            approved_by=user.id if direct else None,
        )
        if direct:
            await _place_student(db, student, enrollment)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_ENROLLMENT)

    logger.info(
        f"Enrollment {enrollment.id} ({enrollment.status.value}) for student {student.id} "
        f"in section {enrollment.section_id}"
    )
    return enrollment


async def update_enrollment(
    db: AsyncSession,
    school_id: str,
    id: str,
    data: EnrollmentUpdate,
) -> Enrollment:
    """Move an enrollment to another section, grade level or school year."""
    enrollment = await get_enrollment(db, school_id, id)
    changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    placement_keys = {"section_id", "grade_level", "school_year"}
    if placement_keys & changes.keys():
        await _validate_placement(
            db,
            school_id,
            enrollment.student_id,
            changes.get("section_id", enrollment.section_id),
            changes.get("grade_level", enrollment.grade_level),
            changes.get("school_year", enrollment.school_year),
        )

    try:
        enrollment = await repository.update(db, enrollment, **changes)
        if enrollment.status == EnrollmentRequestStatus.APPROVED:
            student = await students_repository.get_by_id(db, enrollment.student_id)
            if student:
                await _place_student(db, student, enrollment)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_ENROLLMENT)

    return enrollment


async def approve_enrollment(
    db: AsyncSession,
    school_id: str,
    id: str,
    user: CurrentUser,
    remarks: str | None = None,
) -> Enrollment:
    enrollment = await get_enrollment(db, school_id, id)
    validate_status_transition(enrollment.status, EnrollmentRequestStatus.APPROVED)

    student = await _get_student(db, school_id, enrollment.student_id)
    changes = {"status": EnrollmentRequestStatus.APPROVED, "approved_by": user.id}
    if remarks is not None:
        changes["remarks"] = remarks

    enrollment = await repository.update(db, enrollment, **changes)
    await _place_student(db, student, enrollment)
    await db.commit()

    logger.info(f"Enrollment {id} approved by {user.id}")
    return enrollment


async def reject_enrollment(
    db: AsyncSession,
    school_id: str,
    id: str,
    user: CurrentUser,
    remarks: str | None = None,
) -> Enrollment:
    enrollment = await get_enrollment(db, school_id, id)
    validate_status_transition(enrollment.status, EnrollmentRequestStatus.REJECTED)

    changes = {"status": EnrollmentRequestStatus.REJECTED}
    if remarks is not None:
        changes["remarks"] = remarks

    enrollment = await repository.update(db, enrollment, **changes)
    await db.commit()

    logger.info(f"Enrollment {id} rejected by {user.id}")
    return enrollment


async def delete_enrollment(db: AsyncSession, school_id: str, id: str) -> None:
    """Delete an enrollment; the student loses the placement it gave them."""
    enrollment = await get_enrollment(db, school_id, id)

    student = await students_repository.get_by_id(db, enrollment.student_id)
    if student and student.enrollment_id == enrollment.id:
        await students_repository.update(
            db, student, current_section_id=None, enrollment_id=None, enrolled_at=None
        )

    await repository.delete_enrollment(db, enrollment)
    await db.commit()
    logger.info(f"Deleted enrollment {id}")
