"""
School Repository

Database operations for school management.
"""

import logging
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.schools.models import School
from division_sms.modules.shared.pagination import paginate

logger = logging.getLogger(__name__)


class SchoolRepository:
    """Repository for school database operations."""

    @staticmethod
    async def create(db: AsyncSession, **fields: Any) -> School:
        """
        Create a new school record.

        Args:
            db: Database session
            **fields: Column values (school_id, name, contact and location fields)

        Returns:
            Created School instance
        """
        school = School(**fields, is_active=True)

        db.add(school)
        await db.flush()
        await db.refresh(school)

        logger.info(f"Created school: {school.id} - {school.school_id} {school.name}")
        return school

    @staticmethod
    async def get_by_id(db: AsyncSession, id: str) -> School | None:
        result = await db.execute(select(School).where(School.id == str(id)))
        return result.scalar_one_or_none()

    @staticmethod
    async def list_all(
        db: AsyncSession,
        *,
        search: str | None = None,
        district: str | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[School], int]:
        """
        List schools with filters and pagination.

        Args:
            db: Database session
            search: Case-insensitive match on name or DepEd School ID
            district: Exact district filter
            is_active: Active flag filter
            skip: Records to skip
            limit: Maximum records to return

        Returns:
            Tuple of (schools, total count matching filters)
        """
        query = select(School)

        if search:
            pattern = f"%{search}%"
            query = query.where(or_(School.name.ilike(pattern), School.school_id.ilike(pattern)))
        if district:
            query = query.where(School.district == district)
        if is_active is not None:
            query = query.where(School.is_active == is_active)

        query = query.order_by(School.name)
        return await paginate(db, query, skip, limit)

    @staticmethod
    async def update(db: AsyncSession, school: School, **fields: Any) -> School:
        for key, value in fields.items():
            setattr(school, key, value)

        await db.flush()
        await db.refresh(school)
        return school

    @staticmethod
    async def delete(db: AsyncSession, school: School) -> None:
        await db.delete(school)
        await db.flush()
