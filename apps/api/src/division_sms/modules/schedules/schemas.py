"""
Schedule Schemas

Times are accepted as "HH:mm" or "HH:mm:ss"; days as 0=Sunday through 6=Saturday.
"""

from datetime import datetime, time

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from division_sms.modules.schedules.conflicts import (
    ConflictType,
    ScheduleConflict,
    format_days,
    format_time_range,
)
from division_sms.modules.shared.school_year import validate_school_year


def _validate_days(days: list[int]) -> list[int]:
    if not days:
        raise ValueError("At least one day of the week is required")
    if any(day < 0 or day > 6 for day in days):
        raise ValueError("days_of_week values must be between 0 (Sunday) and 6 (Saturday)")
    return sorted(set(days))


class ScheduleCreate(BaseModel):
    """Request body for POST /schedules."""

    subject_id: str
    section_id: str
    teacher_id: str
    room_id: str
    days_of_week: list[int] = Field(..., min_length=1, max_length=7)
    start_time: time
    end_time: time
    school_year: str

    @field_validator("days_of_week")
    @classmethod
    def validate_days(cls, value: list[int]) -> list[int]:
        return _validate_days(value)

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        return validate_school_year(value)

    @model_validator(mode="after")
    def validate_time_range(self) -> "ScheduleCreate":
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ScheduleUpdate(BaseModel):
    """Request body for PATCH /schedules/{id}. Only provided fields change."""

    subject_id: str | None = None
    section_id: str | None = None
    teacher_id: str | None = None
    room_id: str | None = None
    days_of_week: list[int] | None = Field(None, min_length=1, max_length=7)
    start_time: time | None = None
    end_time: time | None = None
    school_year: str | None = None

    @field_validator("days_of_week")
    @classmethod
    def validate_days(cls, value: list[int] | None) -> list[int] | None:
        return _validate_days(value) if value is not None else None

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str | None) -> str | None:
        return validate_school_year(value) if value is not None else None


class ConflictCheckRequest(ScheduleCreate):
    """Preview conflicts of a schedule without saving it."""

    exclude_id: str | None = Field(None, description="Schedule being edited")


class DuplicateScheduleRequest(BaseModel):
    school_year: str

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        return validate_school_year(value)


class ScheduleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str | None
    subject_id: str
    section_id: str
    teacher_id: str
    room_id: str
    days_of_week: list[int]
    start_time: time
    end_time: time
    school_year: str
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def days_label(self) -> str:
        return format_days(self.days_of_week)

    @computed_field
    @property
    def time_range(self) -> str:
        return format_time_range(self.start_time, self.end_time)


class ConflictItem(BaseModel):
    type: ConflictType
    message: str
    conflicting_schedule_id: str | None

    @classmethod
    def from_conflict(cls, conflict: ScheduleConflict) -> "ConflictItem":
        return cls(
            type=conflict.type,
            message=conflict.message,
            conflicting_schedule_id=conflict.conflicting_schedule.id,
        )


class ConflictCheckResponse(BaseModel):
    has_conflicts: bool
    conflicts: list[ConflictItem]


class CalendarDay(BaseModel):
    day: int
    day_name: str
    schedules: list[ScheduleResponse]
