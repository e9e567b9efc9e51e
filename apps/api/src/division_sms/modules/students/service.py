"""
Student Service Layer

Learner records are scoped to one school. The LRN is unique division-wide,
so a learner who transfers keeps their LRN and moves school_id.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.shared.errors import NotFoundError, raise_for_integrity_error
from division_sms.modules.students import repository
from division_sms.modules.students.models import EnrollmentStatus, Gender, Student
from division_sms.modules.students.schemas import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)

DUPLICATE_LRN = "A student with this LRN already exists."
STUDENT_IN_USE = "This student has enrollments, grades or issued books and cannot be deleted."


async def get_student(db: AsyncSession, school_id: str, id: str) -> Student:
    student = await repository.get_by_id(db, id)
    if not student or student.school_id != school_id:
        raise NotFoundError("Student", id)
    return student


async def list_students(
    db: AsyncSession,
    school_id: str,
    *,
    search: str | None = None,
    grade_level: int | None = None,
    section_id: str | None = None,
    gender: Gender | None = None,
    enrollment_status: EnrollmentStatus | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Student], int]:
    return await repository.list_students(
        db,
        school_id=school_id,
        search=search,
        grade_level=grade_level,
        section_id=section_id,
        gender=gender,
        enrollment_status=enrollment_status,
        skip=skip,
        limit=limit,
    )


async def create_student(
    db: AsyncSession,
    school_id: str,
    data: StudentCreate,
    encoded_by: str,
) -> Student:
    fields = data.model_dump(exclude={"school_id"})
    try:
        student = await repository.create(db, **fields, school_id=school_id, encoded_by=encoded_by)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_LRN)

    return student


async def update_student(
    db: AsyncSession,
    school_id: str,
    id: str,
    data: StudentUpdate,
) -> Student:
    student = await get_student(db, school_id, id)
    try:
        student = await repository.update(db, student, **data.model_dump(exclude_unset=True))
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_LRN)

    return student


async def delete_student(db: AsyncSession, school_id: str, id: str) -> None:
    student = await get_student(db, school_id, id)
    try:
        await repository.soft_delete(db, student)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, in_use_message=STUDENT_IN_USE)

    logger.info(f"Soft-deleted student {id} of school {school_id}")
