"""
Book Schemas
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from division_sms.modules.books.models import BookReturnCode
from division_sms.modules.shared.grade_levels import GRADE_LEVEL_MAX, GRADE_LEVEL_MIN
from division_sms.modules.shared.school_year import validate_school_year

RETURN_CODE_LABELS: dict[BookReturnCode, str] = {
    BookReturnCode.FORCE_MAJEURE: "Force Majeure",
    BookReturnCode.TRANSFERRED_DROPPED_OUT: "Transferred/Dropped Out",
    BookReturnCode.NEGLIGENCE: "Negligence",
}


class BookCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    subject_area: str = Field(..., min_length=1, max_length=100)
    grade_level: int = Field(..., ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX)
    isbn: str | None = Field(None, max_length=20)
    school_id: str | None = Field(None, description="Division users only")


class BookUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    subject_area: str | None = Field(None, min_length=1, max_length=100)
    grade_level: int | None = Field(None, ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX)
    isbn: str | None = Field(None, max_length=20)
    is_active: bool | None = None


class BookResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str | None
    title: str
    subject_area: str
    grade_level: int
    isbn: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class IssueBooksRequest(BaseModel):
    """Issue every listed book to every listed student of a section."""

    school_id: str | None = None
    section_id: str
    school_year: str
    book_ids: list[str] = Field(..., min_length=1)
    student_ids: list[str] = Field(..., min_length=1)
    date_issued: date = Field(default_factory=date.today)
    remarks: str | None = Field(None, max_length=1000)

    @field_validator("school_year")
    @classmethod
    def validate_year(cls, value: str) -> str:
        return validate_school_year(value.strip())

    @field_validator("book_ids", "student_ids")
    @classmethod
    def dedupe(cls, value: list[str]) -> list[str]:
        return list(dict.fromkeys(value))


class ReturnBookRequest(BaseModel):
    date_returned: date = Field(default_factory=date.today)
    condition_on_return: str | None = Field(None, max_length=100)
    return_code: BookReturnCode | None = None
    remarks: str | None = Field(None, max_length=1000)


class IssuanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    book_id: str
    section_id: str
    school_id: str | None
    school_year: str
    date_issued: date
    date_returned: date | None
    condition_on_return: str | None
    return_code: BookReturnCode | None
    remarks: str | None
    issued_by: str | None
    is_returned: bool

    @computed_field
    @property
    def return_code_label(self) -> str | None:
        return RETURN_CODE_LABELS[self.return_code] if self.return_code else None
