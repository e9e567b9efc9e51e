"""
Schedule Repository

Database operations for subject schedules.
"""

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.schedules.models import SubjectSchedule
from division_sms.modules.shared.pagination import paginate

logger = logging.getLogger(__name__)


async def create(db: AsyncSession, **fields: Any) -> SubjectSchedule:
    schedule = SubjectSchedule(**fields)
    db.add(schedule)
    await db.flush()
    await db.refresh(schedule)
    return schedule


async def create_many(db: AsyncSession, rows: list[dict[str, Any]]) -> list[SubjectSchedule]:
    schedules = [SubjectSchedule(**row) for row in rows]
    db.add_all(schedules)
    await db.flush()
    return schedules


async def get_by_id(db: AsyncSession, id: str) -> SubjectSchedule | None:
    result = await db.execute(select(SubjectSchedule).where(SubjectSchedule.id == str(id)))
    return result.scalar_one_or_none()


async def list_schedules(
    db: AsyncSession,
    *,
    school_id: str,
    school_year: str | None = None,
    section_id: str | None = None,
    teacher_id: str | None = None,
    room_id: str | None = None,
    subject_id: str | None = None,
    day: int | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[SubjectSchedule], int]:
    query = select(SubjectSchedule).where(SubjectSchedule.school_id == school_id)

    if school_year:
        query = query.where(SubjectSchedule.school_year == school_year)
    if section_id:
        query = query.where(SubjectSchedule.section_id == section_id)
    if teacher_id:
        query = query.where(SubjectSchedule.teacher_id == teacher_id)
    if room_id:
        query = query.where(SubjectSchedule.room_id == room_id)
    if subject_id:
        query = query.where(SubjectSchedule.subject_id == subject_id)
    if day is not None:
        query = query.where(SubjectSchedule.days_of_week.contains([day]))

    query = query.order_by(SubjectSchedule.start_time, SubjectSchedule.id)
    return await paginate(db, query, skip, limit)


async def list_for_school_year(
    db: AsyncSession,
    school_id: str,
    school_year: str,
    *,
    teacher_id: str | None = None,
    section_id: str | None = None,
) -> list[SubjectSchedule]:
    """All schedules of a school year, the input of conflict detection and the calendar."""
    query = select(SubjectSchedule).where(
        SubjectSchedule.school_id == school_id,
        SubjectSchedule.school_year == school_year,
    )
    if teacher_id:
        query = query.where(SubjectSchedule.teacher_id == teacher_id)
    if section_id:
        query = query.where(SubjectSchedule.section_id == section_id)

    result = await db.execute(query.order_by(SubjectSchedule.start_time))
    return list(result.scalars().all())


async def list_for_section(
    db: AsyncSession, section_id: str, school_year: str
) -> list[SubjectSchedule]:
    result = await db.execute(
        select(SubjectSchedule).where(
            SubjectSchedule.section_id == section_id,
            SubjectSchedule.school_year == school_year,
        )
    )
    return list(result.scalars().all())


async def update(db: AsyncSession, schedule: SubjectSchedule, **fields: Any) -> SubjectSchedule:
    for key, value in fields.items():
        setattr(schedule, key, value)

    await db.flush()
    await db.refresh(schedule)
    return schedule


async def delete_schedule(db: AsyncSession, schedule: SubjectSchedule) -> None:
    await db.delete(schedule)
    await db.flush()


async def delete_for_section(db: AsyncSession, section_id: str) -> int:
    result = await db.execute(
        delete(SubjectSchedule).where(SubjectSchedule.section_id == section_id)
    )
    return result.rowcount or 0
