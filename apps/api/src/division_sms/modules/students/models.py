"""
Student Models

Learners of a school, identified division-wide by their 12-digit LRN.
"""

from datetime import date, datetime
from enum import Enum

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel, SoftDeleteMixin, pg_enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class EnrollmentStatus(str, Enum):
    """Where the learner stands with their current school."""

    ENROLLED = "enrolled"
    TRANSFERRED = "transferred"
    GRADUATED = "graduated"
    DROPPED = "dropped"


class Student(SoftDeleteMixin, BaseModel):
    """A learner record (DepEd SF1 fields)."""

    __tablename__ = "students"

    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    lrn: Mapped[str] = mapped_column(String(12), unique=True, index=True, nullable=False)

    # Name
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    suffix: Mapped[str | None] = mapped_column(String(20), nullable=True)

    # Personal
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    gender: Mapped[Gender] = mapped_column(pg_enum(Gender, "gender"), nullable=False)
    mother_tongue: Mapped[str | None] = mapped_column(String(100), nullable=True)
    ip_ethnic_group: Mapped[str | None] = mapped_column(String(100), nullable=True)
    religion: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Address
    purok: Mapped[str | None] = mapped_column(String(100), nullable=True)
    barangay: Mapped[str | None] = mapped_column(String(100), nullable=True)
    municipality_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    province: Mapped[str | None] = mapped_column(String(100), nullable=True)
    contact_number: Mapped[str | None] = mapped_column(String(30), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Parents / guardian
    father_last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    father_first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    father_middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    mother_last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    mother_first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    mother_middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    guardian_last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    guardian_first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    guardian_middle_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    parent_guardian_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    parent_guardian_contact: Mapped[str | None] = mapped_column(String(30), nullable=True)
    parent_guardian_relationship: Mapped[str | None] = mapped_column(String(50), nullable=True)
    previous_school: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Current placement (kept in sync by the enrollment service)
    enrollment_status: Mapped[EnrollmentStatus] = mapped_column(
        pg_enum(EnrollmentStatus, "student_enrollment_status"),
        nullable=False,
        default=EnrollmentStatus.ENROLLED,
    )
    grade_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    current_section_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("sections.id", ondelete="SET NULL"),
        nullable=True,
    )
    # No FK: enrollments reference students, so this side stays a plain pointer
    enrollment_id: Mapped[str | None] = mapped_column(UUID(as_uuid=False), nullable=True)
    enrolled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    encoded_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (Index("ix_students_school_name", "school_id", "last_name", "first_name"),)

    @property
    def full_name(self) -> str:
        """Last, First Middle Suffix."""
        parts = [self.first_name, self.middle_name or "", self.suffix or ""]
        given = " ".join(p for p in parts if p)
        return f"{self.last_name}, {given}"

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, lrn={self.lrn})>"
