"""
Book Models (DepEd SF3 - Books Issued and Returned)
"""

from datetime import date
from enum import Enum

from sqlalchemy import Boolean, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel, SoftDeleteMixin, pg_enum


class BookReturnCode(str, Enum):
    """Why a book came back (or did not) in a given condition."""

    FORCE_MAJEURE = "FM"
    TRANSFERRED_DROPPED_OUT = "TDO"
    NEGLIGENCE = "NEG"


class Book(SoftDeleteMixin, BaseModel):
    __tablename__ = "books"

    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subject_area: Mapped[str] = mapped_column(String(100), nullable=False)
    grade_level: Mapped[int] = mapped_column(Integer, nullable=False)
    isbn: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class BookIssuance(BaseModel):
    """A book lent to a student for a school year."""

    __tablename__ = "book_issuances"

    student_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
    )
    book_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("books.id", ondelete="RESTRICT"),
        nullable=False,
    )
    section_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=True,
    )
    school_year: Mapped[str] = mapped_column(String(9), nullable=False)
    date_issued: Mapped[date] = mapped_column(Date, nullable=False)
    date_returned: Mapped[date | None] = mapped_column(Date, nullable=True)
    condition_on_return: Mapped[str | None] = mapped_column(String(100), nullable=True)
    return_code: Mapped[BookReturnCode | None] = mapped_column(
        pg_enum(BookReturnCode, "book_return_code"), nullable=True
    )
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    issued_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "student_id", "book_id", "school_year", name="uq_book_issuances_student_book_year"
        ),
    )

    @property
    def is_returned(self) -> bool:
        return self.date_returned is not None
