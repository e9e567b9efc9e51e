"""Room schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RoomCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    building: str | None = Field(None, max_length=100)
    capacity: int | None = Field(None, ge=1)
    room_type: str | None = Field(None, max_length=50)
    description: str | None = None
    school_id: str | None = Field(None, description="Division users only")


class RoomUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    building: str | None = Field(None, max_length=100)
    capacity: int | None = Field(None, ge=1)
    room_type: str | None = Field(None, max_length=50)
    description: str | None = None
    is_active: bool | None = None


class RoomResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    school_id: str | None
    name: str
    building: str | None
    capacity: int | None
    room_type: str | None
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime
