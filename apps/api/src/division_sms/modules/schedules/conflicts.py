"""
Schedule Conflict Detection

Pure functions, no I/O. A candidate schedule conflicts with an existing one
of the same school year when they share a day of week and their time ranges
overlap, and they use the same room, teacher or section.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import time
from enum import Enum

DAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class ConflictType(str, Enum):
    ROOM = "room"
    TEACHER = "teacher"
    SECTION = "section"


@dataclass(frozen=True)
class ScheduleSlot:
    """
    The parts of a schedule that matter for conflict detection.

    Times are "HH:mm" / "HH:mm:ss" strings or ``datetime.time`` values.
    Days are 0=Sunday through 6=Saturday.
    """

    room_id: str
    teacher_id: str
    section_id: str
    days_of_week: Sequence[int]
    start_time: str | time
    end_time: str | time
    school_year: str
    id: str | None = None


@dataclass(frozen=True)
class ScheduleConflict:
    type: ConflictType
    message: str
    conflicting_schedule: ScheduleSlot = field(compare=False)


def time_to_minutes(value: str | time) -> int:
    """Minutes since midnight for "HH:mm", "HH:mm:ss" or a time value."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def normalize_time(value: str | time) -> str:
    """Render a time as "HH:mm" (drops seconds)."""
    if isinstance(value, time):
        return value.strftime("%H:%M")
    return value[:5]


def is_time_overlapping(
    start1: str | time,
    end1: str | time,
    start2: str | time,
    end2: str | time,
) -> bool:
    """Ranges overlap iff start1 < end2 and end1 > start2. Touching ranges do not."""
    return time_to_minutes(start1) < time_to_minutes(end2) and time_to_minutes(
        end1
    ) > time_to_minutes(start2)


def has_common_days(days1: Iterable[int], days2: Iterable[int]) -> bool:
    return not set(days1).isdisjoint(days2)


def format_days(days: Iterable[int]) -> str:
    """Sorted day abbreviations, e.g. "Mon, Wed, Fri"."""
    return ", ".join(DAY_ABBREVIATIONS[day] for day in sorted(days))


def format_time_range(start_time: str | time, end_time: str | time) -> str:
    """e.g. "08:30 - 10:15"."""
    return f"{normalize_time(start_time)} - {normalize_time(end_time)}"


def get_day_name(day: int) -> str:
    if 0 <= day < len(DAY_NAMES):
        return DAY_NAMES[day]
    return "Unknown"


def _conflict(conflict_type: ConflictType, label: str, existing: ScheduleSlot) -> ScheduleConflict:
    return ScheduleConflict(
        type=conflict_type,
        message=(
            f"{label} is already scheduled at this time on {format_days(existing.days_of_week)}"
        ),
        conflicting_schedule=existing,
    )


def check_schedule_conflicts(
    candidate: ScheduleSlot,
    existing: Iterable[ScheduleSlot],
    exclude_id: str | None = None,
) -> list[ScheduleConflict]:
    """
    Find every conflict between ``candidate`` and ``existing`` schedules.

    Args:
        candidate: The schedule being created or updated
        existing: Schedules already stored (any school year)
        exclude_id: Id of the schedule being updated, so it does not clash with itself

    Returns:
        One conflict per matching dimension per clashing schedule, ordered
        room, teacher, section within each clashing schedule.
    """
    conflicts: list[ScheduleConflict] = []

    for other in existing:
        if exclude_id is not None and other.id == exclude_id:
            continue
        if other.school_year != candidate.school_year:
            continue
        if not has_common_days(candidate.days_of_week, other.days_of_week):
            continue
        if not is_time_overlapping(
            candidate.start_time, candidate.end_time, other.start_time, other.end_time
        ):
            continue

        if other.room_id == candidate.room_id:
            conflicts.append(_conflict(ConflictType.ROOM, "Room", other))
        if other.teacher_id == candidate.teacher_id:
            conflicts.append(_conflict(ConflictType.TEACHER, "Teacher", other))
        if other.section_id == candidate.section_id:
            conflicts.append(_conflict(ConflictType.SECTION, "Section", other))

    return conflicts
