"""
School Models

Division schools. Every school-scoped record references this table via school_id.
"""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel


class School(BaseModel):
    """A school of the division, identified by its 6-digit DepEd School ID."""

    __tablename__ = "schools"

    school_id: Mapped[str] = mapped_column(String(6), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    school_type: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Location
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    district: Mapped[str | None] = mapped_column(String(100), nullable=True)
    region: Mapped[str | None] = mapped_column(String(100), nullable=True)
    municipality_city: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Contact
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    telephone_number: Mapped[str | None] = mapped_column(String(30), nullable=True)
    mobile_number: Mapped[str | None] = mapped_column(String(30), nullable=True)
    facebook_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<School(id={self.id}, school_id={self.school_id}, name={self.name})>"
