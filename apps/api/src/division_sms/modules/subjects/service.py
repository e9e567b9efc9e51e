"""
Subject Service Layer
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.shared.errors import NotFoundError, raise_for_integrity_error
from division_sms.modules.subjects import repository
from division_sms.modules.subjects.models import Subject
from division_sms.modules.subjects.schemas import SubjectCreate, SubjectUpdate

logger = logging.getLogger(__name__)

DUPLICATE_CODE = "A subject with this code already exists in this school."
SUBJECT_IN_USE = "This subject is scheduled or graded and cannot be deleted."


async def get_subject(db: AsyncSession, school_id: str, id: str) -> Subject:
    subject = await repository.get_by_id(db, id)
    if not subject or subject.school_id != school_id:
        raise NotFoundError("Subject", id)
    return subject


async def list_subjects(
    db: AsyncSession,
    school_id: str,
    *,
    search: str | None = None,
    grade_level: int | None = None,
    teacher_id: str | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Subject], int]:
    return await repository.list_subjects(
        db,
        school_id=school_id,
        search=search,
        grade_level=grade_level,
        teacher_id=teacher_id,
        is_active=is_active,
        skip=skip,
        limit=limit,
    )


async def create_subject(db: AsyncSession, school_id: str, data: SubjectCreate) -> Subject:
    try:
        subject = await repository.create(
            db, **data.model_dump(exclude={"school_id"}), school_id=school_id
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_CODE)

    return subject


async def update_subject(
    db: AsyncSession, school_id: str, id: str, data: SubjectUpdate
) -> Subject:
    subject = await get_subject(db, school_id, id)
    try:
        subject = await repository.update(db, subject, **data.model_dump(exclude_unset=True))
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_CODE)

    return subject


async def delete_subject(db: AsyncSession, school_id: str, id: str) -> None:
    subject = await get_subject(db, school_id, id)
    try:
        await repository.soft_delete(db, subject)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, in_use_message=SUBJECT_IN_USE)

    logger.info(f"Soft-deleted subject {id}")
