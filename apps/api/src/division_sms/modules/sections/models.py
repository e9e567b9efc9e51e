"""
Section Models

A section is a class of one grade level in one school year, with its roster
(section_students) and its subjects (section_subjects).
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel, SoftDeleteMixin, pg_enum


class SectionType(str, Enum):
    """How learners are grouped into a section."""

    HETEROGENEOUS = "heterogeneous"
    HOMOGENEOUS_FAST_LEARNER = "homogeneous_fast_learner"
    HOMOGENEOUS_CRACK_SECTION = "homogeneous_crack_section"
    HOMOGENEOUS_RANDOM = "homogeneous_random"


class Section(SoftDeleteMixin, BaseModel):
    __tablename__ = "sections"

    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    grade_level: Mapped[int] = mapped_column(Integer, nullable=False)
    school_year: Mapped[str] = mapped_column(String(9), nullable=False, index=True)
    section_type: Mapped[SectionType | None] = mapped_column(
        pg_enum(SectionType, "section_type"), nullable=True
    )
    section_adviser_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    max_students: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    __table_args__ = (
        UniqueConstraint("school_id", "name", "school_year", name="uq_sections_school_name_year"),
        CheckConstraint("grade_level BETWEEN 0 AND 12", name="ck_sections_grade_level"),
        CheckConstraint(
            "max_students IS NULL OR max_students > 0", name="ck_sections_max_students"
        ),
    )

    def __repr__(self) -> str:
        return f"<Section(id={self.id}, name={self.name}, school_year={self.school_year})>"


class SectionStudent(BaseModel):
    """Roster entry: a student placed in a section."""

    __tablename__ = "section_students"

    section_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    student_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    school_year: Mapped[str] = mapped_column(String(9), nullable=False)
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    transferred_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        UniqueConstraint("section_id", "student_id", name="uq_section_students_section_student"),
    )


class SectionSubject(BaseModel):
    """A subject taught in a section."""

    __tablename__ = "section_subjects"

    section_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subject_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
    )
    school_year: Mapped[str] = mapped_column(String(9), nullable=False)

    __table_args__ = (
        UniqueConstraint("section_id", "subject_id", name="uq_section_subjects_section_subject"),
    )
