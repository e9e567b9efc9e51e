"""
Grade Service Layer

Grades are entered per section, subject and grading period. Saving a batch
updates the grades that already exist and inserts the rest; remarks are
derived from the grade.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.grades import repository
from division_sms.modules.grades.averages import general_averages_by_student, grade_remarks
from division_sms.modules.grades.models import Grade
from division_sms.modules.grades.schemas import GeneralAverageResponse, GradesBulkUpsert
from division_sms.modules.sections import repository as sections_repository
from division_sms.modules.sections.models import Section
from division_sms.modules.shared.errors import (
    NotFoundError,
    ValidationFailedError,
    raise_for_integrity_error,
)
from division_sms.modules.students import repository as students_repository
from division_sms.modules.subjects import repository as subjects_repository

logger = logging.getLogger(__name__)


async def _get_section(db: AsyncSession, school_id: str, section_id: str) -> Section:
    section = await sections_repository.get_by_id(db, section_id)
    if not section or section.school_id != school_id:
        raise NotFoundError("Section", section_id)
    return section


async def upsert_grades(
    db: AsyncSession,
    school_id: str,
    data: GradesBulkUpsert,
    teacher_id: str,
) -> tuple[list[Grade], int, int]:
    """
    Save a batch of grades.

    Returns:
        Tuple of (saved grades, created count, updated count)

    Raises:
        NotFoundError: Section or subject is not in this school
        ValidationFailedError: Some students are not in this school
    """
    await _get_section(db, school_id, data.section_id)
    subject = await subjects_repository.get_by_id(db, data.subject_id)
    if not subject or subject.school_id != school_id:
        raise NotFoundError("Subject", data.subject_id)

    student_ids = [entry.student_id for entry in data.grades]
    students = await students_repository.get_many(db, student_ids)
    known = {s.id for s in students if s.school_id == school_id}
    unknown = [sid for sid in student_ids if sid not in known]
    if unknown:
        raise ValidationFailedError(
            f"{len(unknown)} student(s) are not enrolled in this school.", "UNKNOWN_STUDENTS"
        )

    existing = await repository.list_for_period(
        db,
        section_id=data.section_id,
        subject_id=data.subject_id,
        grading_period=data.grading_period,
        school_year=data.school_year,
    )
    by_student = {g.student_id: g for g in existing}

    saved: list[Grade] = []
    created = updated = 0
    try:
        for entry in data.grades:
            fields = {
                "grade": entry.grade,
                "remarks": grade_remarks(entry.grade),
                "teacher_id": teacher_id,
            }
            current = by_student.get(entry.student_id)
            if current:
                saved.append(await repository.update(db, current, **fields))
                updated += 1
            else:
                saved.append(
                    await repository.create(
                        db,
                        student_id=entry.student_id,
                        subject_id=data.subject_id,
                        section_id=data.section_id,
                        grading_period=data.grading_period,
                        school_year=data.school_year,
                        **fields,
                    )
                )
                created += 1
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e)

    logger.info(
        f"Saved grades for section {data.section_id}, subject {data.subject_id}, "
        f"Q{data.grading_period}: {created} created, {updated} updated"
    )
    return saved, created, updated


async def list_section_grades(
    db: AsyncSession,
    school_id: str,
    section_id: str,
    **filters,
) -> list[Grade]:
    await _get_section(db, school_id, section_id)
    return await repository.list_for_section(db, section_id, **filters)


async def get_general_averages(
    db: AsyncSession,
    school_id: str,
    section_id: str,
    school_year: str | None = None,
) -> list[GeneralAverageResponse]:
    """General average of every student with grades in the section."""
    section = await _get_section(db, school_id, section_id)
    grades = await repository.list_for_section(
        db, section_id, school_year=school_year or section.school_year
    )

    averages = general_averages_by_student(grades)
    return [
        GeneralAverageResponse(
            student_id=student_id,
            subjects_graded=count,
            general_average=average,
            remarks=grade_remarks(average) if average is not None else None,
        )
        for student_id, (count, average) in averages.items()
    ]
