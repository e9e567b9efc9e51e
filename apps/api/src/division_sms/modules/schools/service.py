"""
School Service Layer

Division-level school management. Only division administrators reach these
operations; the router enforces the role.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.schools.models import School
from division_sms.modules.schools.repository import SchoolRepository
from division_sms.modules.schools.schemas import SchoolCreate, SchoolUpdate
from division_sms.modules.shared.errors import NotFoundError, raise_for_integrity_error

logger = logging.getLogger(__name__)

DUPLICATE_SCHOOL_ID = "A school with this DepEd School ID already exists."
SCHOOL_IN_USE = "This school still has staff, students or records and cannot be deleted."


async def get_school(db: AsyncSession, id: str) -> School:
    school = await SchoolRepository.get_by_id(db, id)
    if not school:
        raise NotFoundError("School", id)
    return school


async def list_schools(
    db: AsyncSession,
    *,
    search: str | None = None,
    district: str | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[School], int]:
    return await SchoolRepository.list_all(
        db, search=search, district=district, is_active=is_active, skip=skip, limit=limit
    )


async def create_school(db: AsyncSession, data: SchoolCreate) -> School:
    try:
        school = await SchoolRepository.create(db, **data.model_dump())
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_SCHOOL_ID)

    return school


async def update_school(db: AsyncSession, id: str, data: SchoolUpdate) -> School:
    school = await get_school(db, id)
    try:
        school = await SchoolRepository.update(db, school, **data.model_dump(exclude_unset=True))
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_SCHOOL_ID)

    logger.info(f"Updated school {id}")
    return school


async def deactivate_school(db: AsyncSession, id: str) -> School:
    """Mark a school inactive. Its records stay untouched."""
    school = await get_school(db, id)
    school = await SchoolRepository.update(db, school, is_active=False)
    await db.commit()

    logger.info(f"Deactivated school {id}")
    return school


async def delete_school(db: AsyncSession, id: str) -> None:
    """
    Delete a school.

    Raises:
        NotFoundError: If the school doesn't exist
        RecordInUseError: If other records still reference it
    """
    school = await get_school(db, id)
    try:
        await SchoolRepository.delete(db, school)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, in_use_message=SCHOOL_IN_USE)

    logger.info(f"Deleted school {id}")
