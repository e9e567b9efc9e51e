"""
Section Repository

Sections, their rosters (section_students) and their subjects (section_subjects).
"""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.books.models import BookIssuance
from division_sms.modules.enrollment.models import Enrollment
from division_sms.modules.grades.models import Grade
from division_sms.modules.sections.models import Section, SectionStudent, SectionSubject
from division_sms.modules.shared.pagination import paginate
from division_sms.modules.students.models import Student
from division_sms.modules.subjects.models import Subject

logger = logging.getLogger(__name__)


# ============================================
# Sections
# ============================================


async def create(db: AsyncSession, **fields: Any) -> Section:
    section = Section(**fields)
    db.add(section)
    await db.flush()
    await db.refresh(section)

    logger.info(f"Created section: {section.id} - {section.name} ({section.school_year})")
    return section


async def get_by_id(db: AsyncSession, id: str) -> Section | None:
    result = await db.execute(
        select(Section).where(Section.id == str(id), Section.deleted_at.is_(None))
    )
    return result.scalar_one_or_none()


async def list_sections(
    db: AsyncSession,
    *,
    school_id: str,
    school_year: str | None = None,
    grade_level: int | None = None,
    adviser_id: str | None = None,
    search: str | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Section], int]:
    query = select(Section).where(Section.school_id == school_id, Section.deleted_at.is_(None))

    if school_year:
        query = query.where(Section.school_year == school_year)
    if grade_level is not None:
        query = query.where(Section.grade_level == grade_level)
    if adviser_id:
        query = query.where(Section.section_adviser_id == adviser_id)
    if search:
        query = query.where(Section.name.ilike(f"%{search}%"))
    if is_active is not None:
        query = query.where(Section.is_active == is_active)

    query = query.order_by(Section.grade_level, Section.name)
    return await paginate(db, query, skip, limit)


async def list_active_for_grade(
    db: AsyncSession,
    school_id: str,
    grade_level: int,
    school_year: str,
) -> list[Section]:
    """Active, non-deleted sections of one grade level and school year."""
    result = await db.execute(
        select(Section)
        .where(
            Section.school_id == school_id,
            Section.grade_level == grade_level,
            Section.school_year == school_year,
            Section.is_active.is_(True),
            Section.deleted_at.is_(None),
        )
        .order_by(Section.name)
    )
    return list(result.scalars().all())


async def update(db: AsyncSession, section: Section, **fields: Any) -> Section:
    for key, value in fields.items():
        setattr(section, key, value)

    await db.flush()
    await db.refresh(section)
    return section


async def soft_delete(db: AsyncSession, section: Section) -> None:
    section.deleted_at = datetime.now(UTC)
    section.is_active = False
    await db.flush()


async def count_dependants(db: AsyncSession, section_id: str) -> int:
    """Enrollments, grades and book issuances recorded against a section."""
    total = 0
    for model in (Enrollment, Grade, BookIssuance):
        result = await db.execute(
            select(func.count(model.id)).where(model.section_id == section_id)
        )
        total += result.scalar() or 0
    return total


# ============================================
# Roster
# ============================================


async def get_roster_entry(
    db: AsyncSession,
    section_id: str,
    student_id: str,
    *,
    include_transferred: bool = False,
) -> SectionStudent | None:
    """The student's roster row; transferred rows only when asked for."""
    query = select(SectionStudent).where(
        SectionStudent.section_id == section_id,
        SectionStudent.student_id == student_id,
    )
    if not include_transferred:
        query = query.where(SectionStudent.transferred_at.is_(None))
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def count_students(db: AsyncSession, section_id: str) -> int:
    result = await db.execute(
        select(func.count(SectionStudent.id)).where(
            SectionStudent.section_id == section_id,
            SectionStudent.transferred_at.is_(None),
        )
    )
    return result.scalar() or 0


async def add_student(
    db: AsyncSession, section_id: str, student_id: str, school_year: str
) -> SectionStudent:
    entry = SectionStudent(section_id=section_id, student_id=student_id, school_year=school_year)
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    return entry


async def update_roster_entry(
    db: AsyncSession, entry: SectionStudent, **fields: Any
) -> SectionStudent:
    for key, value in fields.items():
        setattr(entry, key, value)

    await db.flush()
    await db.refresh(entry)
    return entry


async def list_students(
    db: AsyncSession, section_id: str
) -> list[tuple[SectionStudent, Student]]:
    """Current roster; transferred students are left out."""
    result = await db.execute(
        select(SectionStudent, Student)
        .join(Student, Student.id == SectionStudent.student_id)
        .where(
            SectionStudent.section_id == section_id,
            SectionStudent.transferred_at.is_(None),
            Student.deleted_at.is_(None),
        )
        .order_by(Student.last_name, Student.first_name)
    )
    return [(entry, student) for entry, student in result.all()]


# ============================================
# Subjects
# ============================================


async def get_section_subject(
    db: AsyncSession, section_id: str, subject_id: str
) -> SectionSubject | None:
    result = await db.execute(
        select(SectionSubject).where(
            SectionSubject.section_id == section_id,
            SectionSubject.subject_id == subject_id,
        )
    )
    return result.scalar_one_or_none()


async def add_subject(
    db: AsyncSession, section_id: str, subject_id: str, school_year: str
) -> SectionSubject:
    entry = SectionSubject(section_id=section_id, subject_id=subject_id, school_year=school_year)
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    return entry


async def remove_subject(db: AsyncSession, entry: SectionSubject) -> None:
    await db.delete(entry)
    await db.flush()


async def list_subjects(
    db: AsyncSession, section_id: str
) -> list[tuple[SectionSubject, Subject]]:
    result = await db.execute(
        select(SectionSubject, Subject)
        .join(Subject, Subject.id == SectionSubject.subject_id)
        .where(SectionSubject.section_id == section_id, Subject.deleted_at.is_(None))
        .order_by(Subject.code)
    )
    return [(entry, subject) for entry, subject in result.all()]
