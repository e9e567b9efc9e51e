"""
Enrollment Schemas
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from division_sms.modules.enrollment.gpa import GpaThresholds
from division_sms.modules.enrollment.models import EnrollmentRequestStatus
from division_sms.modules.sections.schemas import SectionResponse
from division_sms.modules.shared.grade_levels import (
    GRADE_LEVEL_MAX,
    GRADE_LEVEL_MIN,
    get_grade_level_label,
)
from division_sms.modules.shared.school_year import validate_school_year


class GpaThresholdsPayload(BaseModel):
    """GPA thresholds as stored per school."""

    fast_learner_min_gpa: float = Field(90.0, ge=0, le=100)
    crack_section_max_gpa: float = Field(75.0, ge=0, le=100)
    heterogeneous_enabled: bool = True
    homogeneous_random_enabled: bool = True

    @model_validator(mode="after")
    def validate_bounds(self) -> "GpaThresholdsPayload":
        if self.crack_section_max_gpa > self.fast_learner_min_gpa:
            raise ValueError("crack_section_max_gpa cannot be above fast_learner_min_gpa")
        return self

    def to_thresholds(self) -> GpaThresholds:
        return GpaThresholds(**self.model_dump())

    @classmethod
    def from_thresholds(cls, thresholds: GpaThresholds) -> "GpaThresholdsPayload":
        return cls(
            fast_learner_min_gpa=thresholds.fast_learner_min_gpa,
            crack_section_max_gpa=thresholds.crack_section_max_gpa,
            heterogeneous_enabled=thresholds.heterogeneous_enabled,
            homogeneous_random_enabled=thresholds.homogeneous_random_enabled,
        )


class EnrollmentCreate(BaseModel):
    """Request body for POST /enrollments."""

    school_id: str | None = None
    student_id: str
    section_id: str
    grade_level: int = Field(..., ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX)
    school_year: str
    remarks: str | None = None

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        return validate_school_year(value.strip())


class EnrollmentUpdate(BaseModel):
    section_id: str | None = None
    grade_level: int | None = Field(None, ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX)
    school_year: str | None = None
    remarks: str | None = None

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str | None) -> str | None:
        return validate_school_year(value.strip()) if value is not None else None


class EnrollmentDecision(BaseModel):
    remarks: str | None = Field(None, max_length=1000)


class EnrollmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str | None
    student_id: str
    section_id: str
    school_year: str
    grade_level: int
    enrollment_date: date
    status: EnrollmentRequestStatus
    enrolled_by: str | None
    approved_by: str | None
    remarks: str | None
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def grade_level_label(self) -> str:
        return get_grade_level_label(self.grade_level)


class PreviousGpaResponse(BaseModel):
    student_id: str
    grade_level: int
    previous_grade_level: int
    gpa: float | None
    suggested_section_type: str | None


class EligibleSectionsResponse(BaseModel):
    gpa: float | None
    suggested_section_type: str | None
    thresholds: GpaThresholdsPayload
    sections: list[SectionResponse]
