"""
User Schemas

Pydantic schemas for staff account management.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from division_sms.modules.users.models import StaffRole


class StaffCreate(BaseModel):
    """Request body for POST /users."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    role: StaffRole
    school_id: str | None = Field(
        None, description="Required for school-level roles; ignored for division roles"
    )
    phone: str | None = Field(None, max_length=20)
    position: str | None = Field(None, max_length=100)
    employee_id: str | None = Field(None, max_length=50)


class StaffUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    phone: str | None = Field(None, max_length=20)
    position: str | None = Field(None, max_length=100)
    employee_id: str | None = Field(None, max_length=50)
    role: StaffRole | None = None
    is_active: bool | None = None


class StaffResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str | None
    name: str
    email: str
    phone: str | None
    position: str | None
    employee_id: str | None
    role: StaffRole
    is_active: bool
    must_change_password: bool
    created_at: datetime
    updated_at: datetime


class StaffCreatedResponse(StaffResponse):
    """Returned once after creation; tells the caller whether the welcome email went out."""

    welcome_email_sent: bool
