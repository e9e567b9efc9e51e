"""
Pagination helpers shared by list endpoints.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from fastapi import Query
from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.config import settings

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """Paginated list response."""

    items: list[T]
    total: int
    skip: int
    limit: int


@dataclass
class PageParams:
    skip: int
    limit: int


def page_params(
    skip: int = Query(0, ge=0, description="Records to skip"),
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Maximum records to return",
    ),
) -> PageParams:
    """FastAPI dependency for skip/limit query parameters."""
    return PageParams(skip=skip, limit=limit)


async def paginate(
    db: AsyncSession,
    query: Select,
    skip: int,
    limit: int,
) -> tuple[list, int]:
    """
    Run ``query`` with offset/limit and return (rows, total).

    The total is counted over the unpaginated query.
    """
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    total_result = await db.execute(count_query)
    total = total_result.scalar() or 0

    result = await db.execute(query.offset(skip).limit(limit))
    return list(result.scalars().all()), total
