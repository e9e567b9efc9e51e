"""
Report Queries

Aggregate counts for the dashboards. Every function takes an optional
``school_id``; without it the count spans the whole division.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.enrollment.models import Enrollment, EnrollmentRequestStatus
from division_sms.modules.schools.models import School
from division_sms.modules.sections.models import Section
from division_sms.modules.students.models import Student
from division_sms.modules.users.models import User


def _scoped(query: Select, column, school_id: str | None) -> Select:
    return query.where(column == school_id) if school_id else query


async def count_active_schools(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(School).where(School.is_active.is_(True))
    )
    return result.scalar() or 0


async def count_students(db: AsyncSession, school_id: str | None = None) -> int:
    query = select(func.count()).select_from(Student).where(Student.deleted_at.is_(None))
    result = await db.execute(_scoped(query, Student.school_id, school_id))
    return result.scalar() or 0


async def count_active_sections(
    db: AsyncSession, school_year: str, school_id: str | None = None
) -> int:
    query = (
        select(func.count())
        .select_from(Section)
        .where(
            Section.deleted_at.is_(None),
            Section.is_active.is_(True),
            Section.school_year == school_year,
        )
    )
    result = await db.execute(_scoped(query, Section.school_id, school_id))
    return result.scalar() or 0


async def staff_by_role(db: AsyncSession, school_id: str | None = None) -> list[tuple[str, int]]:
    query = (
        select(User.role, func.count())
        .where(User.deleted_at.is_(None))
        .group_by(User.role)
        .order_by(User.role)
    )
    result = await db.execute(_scoped(query, User.school_id, school_id))
    return [(role.value, count) for role, count in result.all()]


async def staff_by_school(db: AsyncSession) -> list[tuple[str, str, int]]:
    result = await db.execute(
        select(School.id, School.name, func.count(User.id))
        .join(User, User.school_id == School.id)
        .where(User.deleted_at.is_(None))
        .group_by(School.id, School.name)
        .order_by(School.name)
    )
    return [(id, name, count) for id, name, count in result.all()]


async def students_by_school(db: AsyncSession) -> list[tuple[str, str, int]]:
    result = await db.execute(
        select(School.id, School.name, func.count(Student.id))
        .join(Student, Student.school_id == School.id)
        .where(Student.deleted_at.is_(None))
        .group_by(School.id, School.name)
        .order_by(School.name)
    )
    return [(id, name, count) for id, name, count in result.all()]


async def enrollments_by_grade_level(
    db: AsyncSession, school_year: str, school_id: str | None = None
) -> list[tuple[int, int]]:
    query = (
        select(Enrollment.grade_level, func.count())
        .where(
            Enrollment.school_year == school_year,
            Enrollment.status == EnrollmentRequestStatus.APPROVED,
        )
        .group_by(Enrollment.grade_level)
        .order_by(Enrollment.grade_level)
    )
    result = await db.execute(_scoped(query, Enrollment.school_id, school_id))
    return [(grade_level, count) for grade_level, count in result.all()]
