"""
School Schemas

Pydantic schemas for school management.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SchoolBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    school_type: str | None = Field(None, max_length=50)
    address: str | None = None
    district: str | None = Field(None, max_length=100)
    region: str | None = Field(None, max_length=100)
    municipality_city: str | None = Field(None, max_length=100)
    email: EmailStr | None = None
    telephone_number: str | None = Field(None, max_length=30)
    mobile_number: str | None = Field(None, max_length=30)
    facebook_url: str | None = Field(None, max_length=500)


class SchoolCreate(SchoolBase):
    """Request body for POST /schools."""

    school_id: str = Field(..., pattern=r"^\d{6}$", description="6-digit DepEd School ID")


class SchoolUpdate(BaseModel):
    """Request body for PATCH /schools/{id}. Only provided fields change."""

    school_id: str | None = Field(None, pattern=r"^\d{6}$")
    name: str | None = Field(None, min_length=1, max_length=200)
    school_type: str | None = Field(None, max_length=50)
    address: str | None = None
    district: str | None = Field(None, max_length=100)
    region: str | None = Field(None, max_length=100)
    municipality_city: str | None = Field(None, max_length=100)
    email: EmailStr | None = None
    telephone_number: str | None = Field(None, max_length=30)
    mobile_number: str | None = Field(None, max_length=30)
    facebook_url: str | None = Field(None, max_length=500)
    is_active: bool | None = None


class SchoolResponse(SchoolBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
