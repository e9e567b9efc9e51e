"""
Grade Models
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel


class Grade(BaseModel):
    """A student's grade in one subject for one grading period (quarter)."""

    __tablename__ = "grades"

    student_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    subject_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("subjects.id", ondelete="CASCADE"),
        nullable=False,
    )
    section_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    grading_period: Mapped[int] = mapped_column(Integer, nullable=False)
    school_year: Mapped[str] = mapped_column(String(9), nullable=False)
    grade: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    remarks: Mapped[str | None] = mapped_column(String(50), nullable=True)
    teacher_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "student_id",
            "subject_id",
            "section_id",
            "grading_period",
            "school_year",
            name="uq_grades_student_subject_section_period_year",
        ),
        CheckConstraint("grading_period BETWEEN 1 AND 4", name="ck_grades_grading_period"),
        CheckConstraint("grade BETWEEN 0 AND 100", name="ck_grades_grade_range"),
    )
