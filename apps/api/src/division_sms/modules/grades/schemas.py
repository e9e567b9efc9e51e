"""
Grade Schemas
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from division_sms.modules.shared.school_year import validate_school_year

GRADING_PERIOD_MIN = 1
GRADING_PERIOD_MAX = 4


class GradeEntry(BaseModel):
    student_id: str
    grade: Decimal = Field(..., ge=0, le=100, max_digits=5, decimal_places=2)


class GradesBulkUpsert(BaseModel):
    """Grades of one subject and grading period for students of a section."""

    school_id: str | None = None
    section_id: str
    subject_id: str
    grading_period: int = Field(..., ge=GRADING_PERIOD_MIN, le=GRADING_PERIOD_MAX)
    school_year: str
    grades: list[GradeEntry] = Field(..., min_length=1)

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        return validate_school_year(value.strip())

    @model_validator(mode="after")
    def validate_unique_students(self) -> "GradesBulkUpsert":
        student_ids = [g.student_id for g in self.grades]
        if len(set(student_ids)) != len(student_ids):
            raise ValueError("Each student may appear only once")
        return self


class GradeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    subject_id: str
    section_id: str
    grading_period: int
    school_year: str
    grade: Decimal
    remarks: str | None
    teacher_id: str | None
    updated_at: datetime


class BulkUpsertResponse(BaseModel):
    created: int
    updated: int
    grades: list[GradeResponse]


class GeneralAverageResponse(BaseModel):
    student_id: str
    subjects_graded: int
    general_average: Decimal | None
    remarks: str | None
