"""
Learner Health Repository
"""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.health.models import LearnerHealth


async def list_for_section(
    db: AsyncSession, section_id: str, school_year: str
) -> list[LearnerHealth]:
    result = await db.execute(
        select(LearnerHealth)
        .where(LearnerHealth.section_id == section_id, LearnerHealth.school_year == school_year)
        .order_by(LearnerHealth.created_at)
    )
    return list(result.scalars().all())


async def create(db: AsyncSession, **fields: Any) -> LearnerHealth:
    record = LearnerHealth(**fields)
    db.add(record)
    await db.flush()
    await db.refresh(record)
    return record


async def update(db: AsyncSession, record: LearnerHealth, **fields: Any) -> LearnerHealth:
    for key, value in fields.items():
        setattr(record, key, value)
    await db.flush()
    await db.refresh(record)
    return record
