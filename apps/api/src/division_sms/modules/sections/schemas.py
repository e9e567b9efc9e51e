"""
Section Schemas
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from division_sms.modules.sections.models import SectionType
from division_sms.modules.shared.grade_levels import (
    GRADE_LEVEL_MAX,
    GRADE_LEVEL_MIN,
    get_grade_level_label,
)
from division_sms.modules.shared.school_year import validate_school_year
from division_sms.modules.students.schemas import StudentSummary


class SectionCreate(BaseModel):
    """Request body for POST /sections."""

    name: str = Field(..., min_length=1, max_length=100)
    grade_level: int = Field(..., ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX)
    school_year: str
    section_type: SectionType | None = None
    section_adviser_id: str | None = None
    max_students: int | None = Field(None, ge=1)
    school_id: str | None = Field(None, description="Division users only")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name cannot be blank")
        return value

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        return validate_school_year(value)


class SectionUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    grade_level: int | None = Field(None, ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX)
    school_year: str | None = None
    section_type: SectionType | None = None
    section_adviser_id: str | None = None
    max_students: int | None = Field(None, ge=1)
    is_active: bool | None = None

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str | None) -> str | None:
        return validate_school_year(value) if value is not None else None


class SectionDuplicateRequest(BaseModel):
    """New name and school year for a copy of a section and its schedules."""

    name: str = Field(..., min_length=1, max_length=100)
    school_year: str

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        return validate_school_year(value)


class SectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str | None
    name: str
    grade_level: int
    school_year: str
    section_type: SectionType | None
    section_adviser_id: str | None
    max_students: int | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @computed_field
    @property
    def grade_level_label(self) -> str:
        return get_grade_level_label(self.grade_level)


class SectionDuplicateResponse(BaseModel):
    section: SectionResponse
    schedules_copied: int


class RosterAddRequest(BaseModel):
    student_id: str


class RosterEntryResponse(BaseModel):
    id: str
    section_id: str
    school_year: str
    enrolled_at: datetime
    transferred_at: datetime | None
    student: StudentSummary


class SectionSubjectAddRequest(BaseModel):
    subject_id: str


class SectionSubjectResponse(BaseModel):
    id: str
    section_id: str
    subject_id: str
    school_year: str
    code: str
    name: str
