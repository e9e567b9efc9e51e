"""
Section Service Layer

Besides CRUD this module handles:
1. Duplication: a section is copied under a new name and school year together
   with its subject schedules. Section and schedules are written in one
   transaction, so a failed schedule copy leaves no orphan section.
2. Roster: students are placed in a section once and the section becomes
   their current one. Removing a student marks the roster row transferred
   instead of deleting it. A section with ``max_students`` refuses students
   beyond that number.
3. Deletion is refused while enrollments, grades or book issuances still
   point at the section.
4. Subjects: each subject is attached to a section once.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.schedules import repository as schedules_repository
from division_sms.modules.sections import repository
from division_sms.modules.sections.models import Section, SectionStudent, SectionSubject
from division_sms.modules.sections.schemas import (
    SectionCreate,
    SectionDuplicateRequest,
    SectionUpdate,
)
from division_sms.modules.shared.errors import (
    DuplicateRecordError,
    NotFoundError,
    RecordInUseError,
    ServiceError,
    raise_for_integrity_error,
)
from division_sms.modules.students import repository as students_repository
from division_sms.modules.students.models import Student
from division_sms.modules.subjects import repository as subjects_repository
from division_sms.modules.subjects.models import Subject

logger = logging.getLogger(__name__)

DUPLICATE_SECTION = "A section with this name already exists for this school year."
SECTION_IN_USE = "This section has enrollments, grades or issued books and cannot be deleted."
ALREADY_IN_SECTION = "This student is already in the section."


class SectionFullError(ServiceError):
    """Raised when a section already holds max_students students."""

    def __init__(self, max_students: int):
        super().__init__(
            message=f"This section is full ({max_students} students).",
            error_code="SECTION_FULL",
            status_code=409,
        )


async def get_section(db: AsyncSession, school_id: str, id: str) -> Section:
    section = await repository.get_by_id(db, id)
    if not section or section.school_id != school_id:
        raise NotFoundError("Section", id)
    return section


async def list_sections(
    db: AsyncSession,
    school_id: str,
    **filters,
) -> tuple[list[Section], int]:
    return await repository.list_sections(db, school_id=school_id, **filters)


async def create_section(db: AsyncSession, school_id: str, data: SectionCreate) -> Section:
    try:
        section = await repository.create(
            db, **data.model_dump(exclude={"school_id"}), school_id=school_id, is_active=True
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_SECTION)

    return section


async def update_section(
    db: AsyncSession, school_id: str, id: str, data: SectionUpdate
) -> Section:
    section = await get_section(db, school_id, id)
    try:
        section = await repository.update(db, section, **data.model_dump(exclude_unset=True))
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_SECTION)

    return section


async def delete_section(db: AsyncSession, school_id: str, id: str) -> None:
    """
    Soft-delete a section.

    Raises:
        RecordInUseError: Enrollments, grades or book issuances reference it
    """
    section = await get_section(db, school_id, id)
    if await repository.count_dependants(db, id):
        raise RecordInUseError(SECTION_IN_USE)

    await repository.soft_delete(db, section)
    await students_repository.clear_section(db, id)
    await db.commit()

    logger.info(f"Soft-deleted section {id}")


async def duplicate_section(
    db: AsyncSession,
    school_id: str,
    id: str,
    data: SectionDuplicateRequest,
) -> tuple[Section, int]:
    """
    Copy a section and its schedules into a new name/school year.

    Returns:
        Tuple of (new section, number of schedules copied)

    Raises:
        NotFoundError: Source section not found
        DuplicateRecordError: Target name already used in that school year
    """
    source = await get_section(db, school_id, id)

    try:
        section = await repository.create(
            db,
            school_id=school_id,
            name=data.name,
            grade_level=source.grade_level,
            school_year=data.school_year,
            section_type=source.section_type,
            section_adviser_id=source.section_adviser_id,
            max_students=source.max_students,
            is_active=True,
        )

        source_schedules = await schedules_repository.list_for_section(
            db, source.id, source.school_year
        )
        await schedules_repository.create_many(
            db,
            [
                {
                    "subject_id": s.subject_id,
                    "section_id": section.id,
                    "teacher_id": s.teacher_id,
                    "room_id": s.room_id,
                    "school_id": school_id,
                    "days_of_week": list(s.days_of_week),
                    "start_time": s.start_time,
                    "end_time": s.end_time,
                    "school_year": data.school_year,
                }
                for s in source_schedules
            ],
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_SECTION)

    logger.info(
        f"Duplicated section {id} as {section.id} ({data.school_year}) "
        f"with {len(source_schedules)} schedules"
    )
    return section, len(source_schedules)


# ============================================
# Roster
# ============================================


async def list_roster(
    db: AsyncSession, school_id: str, section_id: str
) -> list[tuple[SectionStudent, Student]]:
    await get_section(db, school_id, section_id)
    return await repository.list_students(db, section_id)


async def add_student_to_section(
    db: AsyncSession,
    school_id: str,
    section_id: str,
    student_id: str,
) -> tuple[SectionStudent, Student]:
    """
    Place a student in a section and make it the student's current section.

    A student who transferred out earlier gets their old roster row back.

    Raises:
        NotFoundError: Section or student not in this school
        DuplicateRecordError: Student already in the section
        SectionFullError: Section reached max_students
    """
    section = await get_section(db, school_id, section_id)

    student = await students_repository.get_by_id(db, student_id)
    if not student or student.school_id != school_id:
        raise NotFoundError("Student", student_id)

    entry = await repository.get_roster_entry(
        db, section_id, student_id, include_transferred=True
    )
    if entry and entry.transferred_at is None:
        raise DuplicateRecordError(ALREADY_IN_SECTION)

    if section.max_students is not None:
        current = await repository.count_students(db, section_id)
        if current >= section.max_students:
            raise SectionFullError(section.max_students)

    try:
        if entry:
            entry = await repository.update_roster_entry(
                db, entry, transferred_at=None, enrolled_at=datetime.now(UTC)
            )
        else:
            entry = await repository.add_student(db, section_id, student_id, section.school_year)
        student = await students_repository.update(db, student, current_section_id=section_id)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=ALREADY_IN_SECTION)

    return entry, student


async def remove_student_from_section(
    db: AsyncSession, school_id: str, section_id: str, student_id: str
) -> None:
    """Mark the student transferred out; the roster row is kept as history."""
    await get_section(db, school_id, section_id)
    entry = await repository.get_roster_entry(db, section_id, student_id)
    if not entry:
        raise NotFoundError("Section student", student_id)

    await repository.update_roster_entry(db, entry, transferred_at=datetime.now(UTC))

    student = await students_repository.get_by_id(db, student_id)
    if student and student.current_section_id == section_id:
        await students_repository.update(db, student, current_section_id=None)

    await db.commit()
    logger.info(f"Transferred student {student_id} out of section {section_id}")


# ============================================
# Subjects
# ============================================


async def list_section_subjects(
    db: AsyncSession, school_id: str, section_id: str
) -> list[tuple[SectionSubject, Subject]]:
    await get_section(db, school_id, section_id)
    return await repository.list_subjects(db, section_id)


async def add_subject_to_section(
    db: AsyncSession,
    school_id: str,
    section_id: str,
    subject_id: str,
) -> tuple[SectionSubject, Subject]:
    section = await get_section(db, school_id, section_id)

    subject = await subjects_repository.get_by_id(db, subject_id)
    if not subject or subject.school_id != school_id:
        raise NotFoundError("Subject", subject_id)

    if await repository.get_section_subject(db, section_id, subject_id):
        raise DuplicateRecordError("This subject is already assigned to the section.")

    try:
        entry = await repository.add_subject(db, section_id, subject_id, section.school_year)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(
            e, duplicate_message="This subject is already assigned to the section."
        )

    return entry, subject


async def remove_subject_from_section(
    db: AsyncSession, school_id: str, section_id: str, subject_id: str
) -> None:
    await get_section(db, school_id, section_id)
    entry = await repository.get_section_subject(db, section_id, subject_id)
    if not entry:
        raise NotFoundError("Section subject", subject_id)

    await repository.remove_subject(db, entry)
    await db.commit()
