"""
Student Schemas

Pydantic schemas for learner records.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from division_sms.modules.students.models import EnrollmentStatus, Gender

LRN_PATTERN = r"^\d{12}$"


class StudentBase(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    middle_name: str | None = Field(None, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    suffix: str | None = Field(None, max_length=20)
    date_of_birth: date
    gender: Gender
    mother_tongue: str | None = Field(None, max_length=100)
    ip_ethnic_group: str | None = Field(None, max_length=100)
    religion: str | None = Field(None, max_length=100)

    purok: str | None = Field(None, max_length=100)
    barangay: str | None = Field(None, max_length=100)
    municipality_city: str | None = Field(None, max_length=100)
    province: str | None = Field(None, max_length=100)
    contact_number: str | None = Field(None, max_length=30)
    email: EmailStr | None = None

    father_last_name: str | None = Field(None, max_length=100)
    father_first_name: str | None = Field(None, max_length=100)
    father_middle_name: str | None = Field(None, max_length=100)
    mother_last_name: str | None = Field(None, max_length=100)
    mother_first_name: str | None = Field(None, max_length=100)
    mother_middle_name: str | None = Field(None, max_length=100)
    guardian_last_name: str | None = Field(None, max_length=100)
    guardian_first_name: str | None = Field(None, max_length=100)
    guardian_middle_name: str | None = Field(None, max_length=100)
    parent_guardian_name: str | None = Field(None, max_length=200)
    parent_guardian_contact: str | None = Field(None, max_length=30)
    parent_guardian_relationship: str | None = Field(None, max_length=50)
    previous_school: str | None = None


def _not_in_future(value: date | None) -> date | None:
    if value is not None and value > date.today():
        raise ValueError("date_of_birth cannot be in the future")
    return value


class StudentCreate(StudentBase):
    """Request body for POST /students."""

    lrn: str = Field(..., pattern=LRN_PATTERN, description="12-digit Learner Reference Number")
    school_id: str | None = Field(None, description="Division users only")

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, value: date | None) -> date | None:
        return _not_in_future(value)


class StudentUpdate(BaseModel):
    """Request body for PATCH /students/{id}. Only provided fields change."""

    lrn: str | None = Field(None, pattern=LRN_PATTERN)
    first_name: str | None = Field(None, min_length=1, max_length=100)
    middle_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    suffix: str | None = Field(None, max_length=20)
    date_of_birth: date | None = None
    gender: Gender | None = None
    mother_tongue: str | None = Field(None, max_length=100)
    ip_ethnic_group: str | None = Field(None, max_length=100)
    religion: str | None = Field(None, max_length=100)
    purok: str | None = Field(None, max_length=100)
    barangay: str | None = Field(None, max_length=100)
    municipality_city: str | None = Field(None, max_length=100)
    province: str | None = Field(None, max_length=100)
    contact_number: str | None = Field(None, max_length=30)
    email: EmailStr | None = None
    father_last_name: str | None = Field(None, max_length=100)
    father_first_name: str | None = Field(None, max_length=100)
    father_middle_name: str | None = Field(None, max_length=100)
    mother_last_name: str | None = Field(None, max_length=100)
    mother_first_name: str | None = Field(None, max_length=100)
    mother_middle_name: str | None = Field(None, max_length=100)
    guardian_last_name: str | None = Field(None, max_length=100)
    guardian_first_name: str | None = Field(None, max_length=100)
    guardian_middle_name: str | None = Field(None, max_length=100)
    parent_guardian_name: str | None = Field(None, max_length=200)
    parent_guardian_contact: str | None = Field(None, max_length=30)
    parent_guardian_relationship: str | None = Field(None, max_length=50)
    previous_school: str | None = None
    enrollment_status: EnrollmentStatus | None = None

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, value: date | None) -> date | None:
        return _not_in_future(value)


class StudentResponse(StudentBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str | None
    lrn: str
    full_name: str
    enrollment_status: EnrollmentStatus
    grade_level: int | None
    current_section_id: str | None
    enrollment_id: str | None
    enrolled_at: datetime | None
    encoded_by: str | None
    created_at: datetime
    updated_at: datetime


class StudentSummary(BaseModel):
    """Compact learner row for pickers and rosters."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    lrn: str
    full_name: str
    gender: Gender
    grade_level: int | None
    current_section_id: str | None
