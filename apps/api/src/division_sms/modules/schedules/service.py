"""
Schedule Service Layer

Every write runs the candidate schedule through ``check_schedule_conflicts``
against the school's schedules of the same school year and refuses to save
when anything clashes. The check is advisory under concurrency: two
overlapping inserts racing each other can both pass.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import time

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.rooms import repository as rooms_repository
from division_sms.modules.schedules import repository
from division_sms.modules.schedules.conflicts import (
    ScheduleConflict,
    ScheduleSlot,
    check_schedule_conflicts,
    get_day_name,
    time_to_minutes,
)
from division_sms.modules.schedules.models import SubjectSchedule
from division_sms.modules.schedules.schemas import (
    ConflictItem,
    ScheduleCreate,
    ScheduleUpdate,
)
from division_sms.modules.sections import repository as sections_repository
from division_sms.modules.shared.errors import (
    NotFoundError,
    ServiceError,
    ValidationFailedError,
    raise_for_integrity_error,
)
from division_sms.modules.subjects import repository as subjects_repository
from division_sms.modules.users.repository import UserRepository

logger = logging.getLogger(__name__)


class ScheduleConflictError(ServiceError):
    """Raised when a schedule clashes with existing ones; carries every conflict."""

    def __init__(self, conflicts: list[ScheduleConflict]):
        self.conflicts = conflicts
        if len(conflicts) == 1:
            message = conflicts[0].message
        else:
            message = f"{len(conflicts)} schedule conflicts found"
        super().__init__(
            message=message,
            error_code="SCHEDULE_CONFLICT",
            status_code=409,
            extra={
                "conflicts": [
                    ConflictItem.from_conflict(c).model_dump(mode="json") for c in conflicts
                ]
            },
        )


def to_slot(schedule: SubjectSchedule) -> ScheduleSlot:
    return ScheduleSlot(
        id=schedule.id,
        room_id=schedule.room_id,
        teacher_id=schedule.teacher_id,
        section_id=schedule.section_id,
        days_of_week=tuple(schedule.days_of_week),
        start_time=schedule.start_time,
        end_time=schedule.end_time,
        school_year=schedule.school_year,
    )


def _slot_from_fields(fields: dict, id: str | None = None) -> ScheduleSlot:
    return ScheduleSlot(
        id=id,
        room_id=fields["room_id"],
        teacher_id=fields["teacher_id"],
        section_id=fields["section_id"],
        days_of_week=tuple(fields["days_of_week"]),
        start_time=fields["start_time"],
        end_time=fields["end_time"],
        school_year=fields["school_year"],
    )


async def find_conflicts(
    db: AsyncSession,
    school_id: str,
    candidate: ScheduleSlot,
    exclude_id: str | None = None,
) -> list[ScheduleConflict]:
    existing = await repository.list_for_school_year(db, school_id, candidate.school_year)
    return check_schedule_conflicts(candidate, [to_slot(s) for s in existing], exclude_id)


async def _ensure_references_in_school(db: AsyncSession, school_id: str, fields: dict) -> None:
    """Every section, subject, teacher and room named in ``fields`` belongs to the school."""
    lookups = (
        ("section_id", "Section", sections_repository.get_by_id),
        ("subject_id", "Subject", subjects_repository.get_by_id),
        ("teacher_id", "Teacher", UserRepository.get_by_id),
        ("room_id", "Room", rooms_repository.get_by_id),
    )
    for key, entity, get_by_id in lookups:
        if fields.get(key) is None:
            continue
        row = await get_by_id(db, fields[key])
        if not row or row.school_id != school_id:
            raise NotFoundError(entity, fields[key])



async def get_schedule(db: AsyncSession, school_id: str, id: str) -> SubjectSchedule:
    schedule = await repository.get_by_id(db, id)
    if not schedule or schedule.school_id != school_id:
        raise NotFoundError("Schedule", id)
    return schedule


async def list_schedules(
    db: AsyncSession,
    school_id: str,
    **filters,
) -> tuple[list[SubjectSchedule], int]:
    return await repository.list_schedules(db, school_id=school_id, **filters)


async def check_conflicts(
    db: AsyncSession,
    school_id: str,
    data: ScheduleCreate,
    exclude_id: str | None = None,
) -> list[ScheduleConflict]:
    """Conflict preview used by the schedule form; nothing is saved."""
    return await find_conflicts(db, school_id, _slot_from_fields(data.model_dump()), exclude_id)


async def create_schedule(
    db: AsyncSession,
    school_id: str,
    data: ScheduleCreate,
) -> SubjectSchedule:
    """
    Create a schedule.

    Raises:
        NotFoundError: Section, subject, teacher or room is not in this school
        ScheduleConflictError: Room, teacher or section is already busy
    """
    fields = data.model_dump()
    await _ensure_references_in_school(db, school_id, fields)

    conflicts = await find_conflicts(db, school_id, _slot_from_fields(fields))
    if conflicts:
        logger.info(f"Rejected schedule for section {data.section_id}: {len(conflicts)} conflicts")
        raise ScheduleConflictError(conflicts)

    try:
        schedule = await repository.create(db, **fields, school_id=school_id)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e)

    logger.info(f"Created schedule {schedule.id} for section {schedule.section_id}")
    return schedule


async def update_schedule(
    db: AsyncSession,
    school_id: str,
    id: str,
    data: ScheduleUpdate,
) -> SubjectSchedule:
    schedule = await get_schedule(db, school_id, id)
    changes = data.model_dump(exclude_unset=True)

    merged = {
        "room_id": schedule.room_id,
        "teacher_id": schedule.teacher_id,
        "section_id": schedule.section_id,
        "subject_id": schedule.subject_id,
        "days_of_week": schedule.days_of_week,
        "start_time": schedule.start_time,
        "end_time": schedule.end_time,
        "school_year": schedule.school_year,
        **{k: v for k, v in changes.items() if v is not None},
    }
    if time_to_minutes(merged["end_time"]) <= time_to_minutes(merged["start_time"]):
        raise ValidationFailedError("end_time must be after start_time", "INVALID_TIME_RANGE")
    await _ensure_references_in_school(db, school_id, changes)

    conflicts = await find_conflicts(db, school_id, _slot_from_fields(merged), exclude_id=id)
    if conflicts:
        raise ScheduleConflictError(conflicts)

    try:
        schedule = await repository.update(
            db, schedule, **{k: v for k, v in changes.items() if v is not None}
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e)

    return schedule


async def duplicate_schedule(
    db: AsyncSession,
    school_id: str,
    id: str,
    school_year: str,
) -> SubjectSchedule:
    """Copy a schedule into another school year, subject to the same conflict check."""
    source = await get_schedule(db, school_id, id)
    if school_year == source.school_year:
        raise ValidationFailedError(
            "Choose a different school year to duplicate into.", "SAME_SCHOOL_YEAR"
        )

    fields = {
        "subject_id": source.subject_id,
        "section_id": source.section_id,
        "teacher_id": source.teacher_id,
        "room_id": source.room_id,
        "days_of_week": list(source.days_of_week),
        "start_time": source.start_time,
        "end_time": source.end_time,
        "school_year": school_year,
    }
    # the teacher may have moved school since the source was created
    await _ensure_references_in_school(db, school_id, fields)

    conflicts = await find_conflicts(db, school_id, _slot_from_fields(fields))
    if conflicts:
        raise ScheduleConflictError(conflicts)

    try:
        schedule = await repository.create(db, **fields, school_id=school_id)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e)

    logger.info(f"Duplicated schedule {id} into {school_year} as {schedule.id}")
    return schedule


def group_by_day(schedules: Iterable[SubjectSchedule]) -> list[tuple[int, list[SubjectSchedule]]]:
    """
    Calendar rows: one entry per day that has schedules, Sunday first,
    each day's schedules sorted by start time.
    """
    by_day: dict[int, list[SubjectSchedule]] = defaultdict(list)
    for schedule in schedules:
        for day in schedule.days_of_week:
            by_day[day].append(schedule)

    def start(schedule: SubjectSchedule) -> time:
        return schedule.start_time

    return [(day, sorted(by_day[day], key=start)) for day in sorted(by_day)]


async def get_calendar(
    db: AsyncSession,
    school_id: str,
    school_year: str,
    *,
    teacher_id: str | None = None,
    section_id: str | None = None,
) -> list[tuple[int, str, list[SubjectSchedule]]]:
    schedules = await repository.list_for_school_year(
        db, school_id, school_year, teacher_id=teacher_id, section_id=section_id
    )
    return [(day, get_day_name(day), items) for day, items in group_by_day(schedules)]


async def delete_schedule(db: AsyncSession, school_id: str, id: str) -> None:
    schedule = await get_schedule(db, school_id, id)
    await repository.delete_schedule(db, schedule)
    await db.commit()
    logger.info(f"Deleted schedule {id}")
