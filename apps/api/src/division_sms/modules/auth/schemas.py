"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from division_sms.modules.users.models import StaffRole


class LoginRequest(BaseModel):
    """Login request schema."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Token response schema."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    """User response schema for login and /me."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    role: StaffRole
    school_id: str | None
    position: str | None
    is_active: bool
    must_change_password: bool


class LoginResponse(TokenResponse):
    """Login response schema."""

    user: UserResponse


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)

    @model_validator(mode="after")
    def validate_new_password(self) -> "ChangePasswordRequest":
        if self.new_password == self.current_password:
            raise ValueError("new_password must differ from current_password")
        if not any(c.isdigit() for c in self.new_password) or not any(
            c.isalpha() for c in self.new_password
        ):
            raise ValueError("new_password must contain both letters and digits")
        return self
