"""
Enrollment Models

Enrollment records per student and school year, and the per-school GPA
thresholds used to decide which section types a student qualifies for.
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import (
    Boolean,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel, pg_enum


class EnrollmentRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Enrollment(BaseModel):
    """One student's enrollment in a section for a school year."""

    __tablename__ = "enrollments"

    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    student_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    section_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("sections.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    school_year: Mapped[str] = mapped_column(String(9), nullable=False)
    grade_level: Mapped[int] = mapped_column(Integer, nullable=False)
    enrollment_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[EnrollmentRequestStatus] = mapped_column(
        pg_enum(EnrollmentRequestStatus, "enrollment_request_status"),
        nullable=False,
        default=EnrollmentRequestStatus.APPROVED,
    )
    enrolled_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    approved_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("student_id", "school_year", name="uq_enrollments_student_year"),
    )


class GpaThreshold(BaseModel):
    """Per-school GPA cutoffs for section type eligibility."""

    __tablename__ = "gpa_thresholds"

    school_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    homogeneous_fast_learner_min: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal("90")
    )
    homogeneous_crack_section_max: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, default=Decimal("75")
    )
    heterogeneous_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    homogeneous_random_enabled: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
