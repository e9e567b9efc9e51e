"""
Learner Health Service Layer
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.health import repository
from division_sms.modules.health.models import LearnerHealth
from division_sms.modules.health.schemas import HealthBulkUpsert
from division_sms.modules.sections import repository as sections_repository
from division_sms.modules.sections.models import Section
from division_sms.modules.shared.errors import (
    NotFoundError,
    ValidationFailedError,
    raise_for_integrity_error,
)
from division_sms.modules.students import repository as students_repository

logger = logging.getLogger(__name__)


async def _get_section(db: AsyncSession, school_id: str, section_id: str) -> Section:
    section = await sections_repository.get_by_id(db, section_id)
    if not section or section.school_id != school_id:
        raise NotFoundError("Section", section_id)
    return section


async def upsert_health_records(
    db: AsyncSession,
    school_id: str,
    data: HealthBulkUpsert,
) -> tuple[list[LearnerHealth], int, int]:
    """
    Save the health rows of a section for a school year.

    Returns:
        Tuple of (saved rows, created count, updated count)
    """
    await _get_section(db, school_id, data.section_id)

    student_ids = [r.student_id for r in data.records]
    students = await students_repository.get_many(db, student_ids)
    known = {s.id for s in students if s.school_id == school_id}
    if len(known) != len(set(student_ids)):
        raise ValidationFailedError(
            "Some students are not enrolled in this school.", "UNKNOWN_STUDENTS"
        )

    existing = {
        r.student_id: r
        for r in await repository.list_for_section(db, data.section_id, data.school_year)
    }

    saved: list[LearnerHealth] = []
    created = updated = 0
    try:
        for entry in data.records:
            fields = entry.model_dump(exclude={"student_id"})
            current = existing.get(entry.student_id)
            if current:
                saved.append(await repository.update(db, current, **fields))
                updated += 1
            else:
                saved.append(
                    await repository.create(
                        db,
                        student_id=entry.student_id,
                        section_id=data.section_id,
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
        f"Saved health records for section {data.section_id} ({data.school_year}): "
        f"{created} created, {updated} updated"
    )
    return saved, created, updated


async def list_health_records(
    db: AsyncSession,
    school_id: str,
    section_id: str,
    school_year: str | None = None,
) -> list[LearnerHealth]:
    section = await _get_section(db, school_id, section_id)
    return await repository.list_for_section(db, section_id, school_year or section.school_year)
