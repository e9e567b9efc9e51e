"""Subject schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from division_sms.modules.shared.grade_levels import GRADE_LEVEL_MAX, GRADE_LEVEL_MIN


class SubjectCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    grade_level: int = Field(..., ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX)
    subject_teacher_id: str | None = None
    school_id: str | None = Field(None, description="Division users only")


class SubjectUpdate(BaseModel):
    code: str | None = Field(None, min_length=1, max_length=50)
    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    grade_level: int | None = Field(None, ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX)
    subject_teacher_id: str | None = None
    is_active: bool | None = None


class SubjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str | None
    code: str
    name: str
    description: str | None
    grade_level: int
    subject_teacher_id: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
