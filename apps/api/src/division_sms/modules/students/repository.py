"""
Student Repository

Database operations for learner records. Soft-deleted students are never returned.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.shared.pagination import paginate
from division_sms.modules.students.models import EnrollmentStatus, Gender, Student

logger = logging.getLogger(__name__)


async def create(db: AsyncSession, **fields: Any) -> Student:
    student = Student(**fields)
    db.add(student)
    await db.flush()
    await db.refresh(student)

    logger.info(f"Created student: {student.id} (LRN {student.lrn})")
    return student


async def get_by_id(db: AsyncSession, id: str) -> Student | None:
    result = await db.execute(
        select(Student).where(Student.id == str(id), Student.deleted_at.is_(None))
    )
    return result.scalar_one_or_none()


async def get_by_lrn(db: AsyncSession, lrn: str) -> Student | None:
    result = await db.execute(
        select(Student).where(Student.lrn == lrn, Student.deleted_at.is_(None))
    )
    return result.scalar_one_or_none()


async def get_many(db: AsyncSession, ids: list[str]) -> list[Student]:
    if not ids:
        return []
    result = await db.execute(
        select(Student).where(Student.id.in_(ids), Student.deleted_at.is_(None))
    )
    return list(result.scalars().all())


async def list_students(
    db: AsyncSession,
    *,
    school_id: str,
    search: str | None = None,
    grade_level: int | None = None,
    section_id: str | None = None,
    gender: Gender | None = None,
    enrollment_status: EnrollmentStatus | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Student], int]:
    """
    List a school's students with filters and pagination.

    Args:
        db: Database session
        school_id: School to list
        search: Case-insensitive match on LRN, first name or last name
        grade_level: Current grade level filter
        section_id: Current section filter
        gender: Gender filter
        enrollment_status: Enrollment status filter
        skip: Records to skip
        limit: Maximum records to return

    Returns:
        Tuple of (students ordered by last name, total count)
    """
    query = select(Student).where(Student.school_id == school_id, Student.deleted_at.is_(None))

    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Student.lrn.ilike(pattern),
                Student.first_name.ilike(pattern),
                Student.last_name.ilike(pattern),
            )
        )
    if grade_level is not None:
        query = query.where(Student.grade_level == grade_level)
    if section_id:
        query = query.where(Student.current_section_id == section_id)
    if gender:
        query = query.where(Student.gender == gender)
    if enrollment_status:
        query = query.where(Student.enrollment_status == enrollment_status)

    query = query.order_by(Student.last_name, Student.first_name)
    return await paginate(db, query, skip, limit)


async def update(db: AsyncSession, student: Student, **fields: Any) -> Student:
    for key, value in fields.items():
        setattr(student, key, value)

    await db.flush()
    await db.refresh(student)
    return student


async def soft_delete(db: AsyncSession, student: Student) -> None:
    student.deleted_at = datetime.now(UTC)
    await db.flush()


async def clear_section(db: AsyncSession, section_id: str) -> None:
    """Unset current_section_id for every student placed in a section."""
    result = await db.execute(select(Student).where(Student.current_section_id == section_id))
    for student in result.scalars().all():
        student.current_section_id = None
    await db.flush()
