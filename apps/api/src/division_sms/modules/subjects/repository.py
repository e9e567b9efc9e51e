"""
Subject Repository
"""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.shared.pagination import paginate
from division_sms.modules.subjects.models import Subject

logger = logging.getLogger(__name__)


async def create(db: AsyncSession, **fields: Any) -> Subject:
    subject = Subject(**fields)
    db.add(subject)
    await db.flush()
    await db.refresh(subject)

    logger.info(f"Created subject: {subject.id} ({subject.code})")
    return subject


async def get_by_id(db: AsyncSession, id: str) -> Subject | None:
    result = await db.execute(
        select(Subject).where(Subject.id == str(id), Subject.deleted_at.is_(None))
    )
    return result.scalar_one_or_none()


async def list_subjects(
    db: AsyncSession,
    *,
    school_id: str,
    search: str | None = None,
    grade_level: int | None = None,
    teacher_id: str | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Subject], int]:
    query = select(Subject).where(Subject.school_id == school_id, Subject.deleted_at.is_(None))

    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Subject.code.ilike(pattern), Subject.name.ilike(pattern)))
    if grade_level is not None:
        query = query.where(Subject.grade_level == grade_level)
    if teacher_id:
        query = query.where(Subject.subject_teacher_id == teacher_id)
    if is_active is not None:
        query = query.where(Subject.is_active == is_active)

    query = query.order_by(Subject.grade_level, Subject.code)
    return await paginate(db, query, skip, limit)


async def update(db: AsyncSession, subject: Subject, **fields: Any) -> Subject:
    for key, value in fields.items():
        setattr(subject, key, value)

    await db.flush()
    await db.refresh(subject)
    return subject


async def soft_delete(db: AsyncSession, subject: Subject) -> None:
    subject.deleted_at = datetime.now(UTC)
    await db.flush()
