"""
Learner Health Models (DepEd SF8)
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Date, ForeignKey, Numeric, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel, pg_enum


class NutritionalStatus(str, Enum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class HeightForAge(str, Enum):
    SEVERELY_STUNTED = "severely_stunted"
    STUNTED = "stunted"
    NORMAL = "normal"
    TALL = "tall"


class LearnerHealth(BaseModel):
    """Height/weight measurement of a learner in a section for a school year."""

    __tablename__ = "learner_health"

    student_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    section_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    school_year: Mapped[str] = mapped_column(String(9), nullable=False)
    height_cm: Mapped[Decimal | None] = mapped_column(Numeric(5, 1), nullable=True)
    weight_kg: Mapped[Decimal | None] = mapped_column(Numeric(5, 1), nullable=True)
    nutritional_status: Mapped[NutritionalStatus | None] = mapped_column(
        pg_enum(NutritionalStatus, "nutritional_status"), nullable=True
    )
    height_for_age: Mapped[HeightForAge | None] = mapped_column(
        pg_enum(HeightForAge, "height_for_age"), nullable=True
    )
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    measured_at: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "student_id", "section_id", "school_year", name="uq_learner_health_student_section_year"
        ),
    )
