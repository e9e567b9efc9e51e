"""
Grade Repository
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.grades.models import Grade


async def list_for_period(
    db: AsyncSession,
    *,
    section_id: str,
    subject_id: str,
    grading_period: int,
    school_year: str,
) -> list[Grade]:
    result = await db.execute(
        select(Grade).where(
            Grade.section_id == section_id,
            Grade.subject_id == subject_id,
            Grade.grading_period == grading_period,
            Grade.school_year == school_year,
        )
    )
    return list(result.scalars().all())


async def list_for_section(
    db: AsyncSession,
    section_id: str,
    *,
    school_year: str | None = None,
    subject_id: str | None = None,
    grading_period: int | None = None,
    student_id: str | None = None,
) -> list[Grade]:
    query = select(Grade).where(Grade.section_id == section_id)
    if school_year:
        query = query.where(Grade.school_year == school_year)
    if subject_id:
        query = query.where(Grade.subject_id == subject_id)
    if grading_period is not None:
        query = query.where(Grade.grading_period == grading_period)
    if student_id:
        query = query.where(Grade.student_id == student_id)

    query = query.order_by(Grade.student_id, Grade.subject_id, Grade.grading_period)
    result = await db.execute(query)
    return list(result.scalars().all())


async def create(db: AsyncSession, **fields: Any) -> Grade:
    grade = Grade(**fields)
    db.add(grade)
    await db.flush()
    await db.refresh(grade)
    return grade


async def update(db: AsyncSession, grade: Grade, **fields: Any) -> Grade:
    for key, value in fields.items():
        setattr(grade, key, value)
    await db.flush()
    await db.refresh(grade)
    return grade
