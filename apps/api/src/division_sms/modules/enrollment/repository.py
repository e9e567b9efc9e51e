"""
Enrollment Repository

Enrollments, GPA thresholds and the previous-grade GPA query.
"""

import logging
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.enrollment.models import (
    Enrollment,
    EnrollmentRequestStatus,
    GpaThreshold,
)
from division_sms.modules.grades.models import Grade
from division_sms.modules.sections.models import Section
from division_sms.modules.shared.pagination import paginate
from division_sms.modules.students.models import Student

logger = logging.getLogger(__name__)


# ============================================
# Enrollments
# ============================================


async def create(db: AsyncSession, **fields: Any) -> Enrollment:
    enrollment = Enrollment(**fields)
    db.add(enrollment)
    await db.flush()
    await db.refresh(enrollment)
    return enrollment


async def get_by_id(db: AsyncSession, id: str) -> Enrollment | None:
    result = await db.execute(select(Enrollment).where(Enrollment.id == str(id)))
    return result.scalar_one_or_none()


async def get_for_student_year(
    db: AsyncSession, student_id: str, school_year: str
) -> Enrollment | None:
    result = await db.execute(
        select(Enrollment).where(
            Enrollment.student_id == student_id,
            Enrollment.school_year == school_year,
        )
    )
    return result.scalar_one_or_none()


async def list_enrollments(
    db: AsyncSession,
    *,
    school_id: str,
    school_year: str | None = None,
    grade_level: int | None = None,
    section_id: str | None = None,
    status: EnrollmentRequestStatus | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Enrollment], int]:
    """
    List a school's enrollments with filters and pagination.

    ``search`` matches the student's LRN or name.
    """
    query = select(Enrollment).where(Enrollment.school_id == school_id)

    if school_year:
        query = query.where(Enrollment.school_year == school_year)
    if grade_level is not None:
        query = query.where(Enrollment.grade_level == grade_level)
    if section_id:
        query = query.where(Enrollment.section_id == section_id)
    if status:
        query = query.where(Enrollment.status == status)
    if search:
        pattern = f"%{search}%"
        query = query.join(Student, Student.id == Enrollment.student_id).where(
            or_(
                Student.lrn.ilike(pattern),
                Student.first_name.ilike(pattern),
                Student.last_name.ilike(pattern),
            )
        )

    query = query.order_by(Enrollment.enrollment_date.desc(), Enrollment.created_at.desc())
    return await paginate(db, query, skip, limit)


async def list_approved_student_ids(
    db: AsyncSession, section_id: str, school_year: str
) -> list[str]:
    result = await db.execute(
        select(Enrollment.student_id).where(
            Enrollment.section_id == section_id,
            Enrollment.school_year == school_year,
            Enrollment.status == EnrollmentRequestStatus.APPROVED,
        )
    )
    return list(result.scalars().all())


async def update(db: AsyncSession, enrollment: Enrollment, **fields: Any) -> Enrollment:
    for key, value in fields.items():
        setattr(enrollment, key, value)

    await db.flush()
    await db.refresh(enrollment)
    return enrollment


async def delete_enrollment(db: AsyncSession, enrollment: Enrollment) -> None:
    await db.delete(enrollment)
    await db.flush()


# ============================================
# GPA
# ============================================


async def get_previous_grade_average(
    db: AsyncSession, student_id: str, previous_grade_level: int
) -> float | None:
    """Average of every grade the student got in sections of ``previous_grade_level``."""
    result = await db.execute(
        select(func.avg(Grade.grade))
        .join(Section, Section.id == Grade.section_id)
        .where(Grade.student_id == student_id, Section.grade_level == previous_grade_level)
    )
    average = result.scalar()
    return float(average) if average is not None else None


async def get_thresholds_row(db: AsyncSession, school_id: str) -> GpaThreshold | None:
    result = await db.execute(select(GpaThreshold).where(GpaThreshold.school_id == school_id))
    return result.scalar_one_or_none()


async def upsert_thresholds(
    db: AsyncSession, school_id: str, values: dict[str, Any]
) -> GpaThreshold:
    row = await get_thresholds_row(db, school_id)
    if row is None:
        row = GpaThreshold(school_id=school_id, **values)
        db.add(row)
    else:
        for key, value in values.items():
            setattr(row, key, value)

    await db.flush()
    await db.refresh(row)
    return row
