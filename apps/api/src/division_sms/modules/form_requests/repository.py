"""
Form Request Repository
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.form_requests.models import (
    DocumentRequestType,
    FormRequest,
    FormRequestStatus,
)
from division_sms.modules.shared.pagination import paginate

# Requests in these states block a new request of the same type
OPEN_STATUSES = (FormRequestStatus.PENDING, FormRequestStatus.APPROVED)


async def create(db: AsyncSession, **fields: Any) -> FormRequest:
    request = FormRequest(**fields)
    db.add(request)
    await db.flush()
    await db.refresh(request)
    return request


async def get_by_id(db: AsyncSession, id: str) -> FormRequest | None:
    result = await db.execute(select(FormRequest).where(FormRequest.id == str(id)))
    return result.scalar_one_or_none()


async def get_open_types(db: AsyncSession, student_lrn: str) -> set[DocumentRequestType]:
    """Request types with a pending or approved request for the LRN."""
    result = await db.execute(
        select(FormRequest.request_type).where(
            FormRequest.student_lrn == student_lrn,
            FormRequest.status.in_(OPEN_STATUSES),
        )
    )
    return set(result.scalars().all())


async def list_by_lrn(db: AsyncSession, student_lrn: str) -> list[FormRequest]:
    result = await db.execute(
        select(FormRequest)
        .where(FormRequest.student_lrn == student_lrn)
        .order_by(FormRequest.requested_at.desc())
    )
    return list(result.scalars().all())


async def list_requests(
    db: AsyncSession,
    *,
    school_id: str,
    status: FormRequestStatus | None = None,
    request_type: DocumentRequestType | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[FormRequest], int]:
    query = select(FormRequest).where(FormRequest.school_id == school_id)

    if status:
        query = query.where(FormRequest.status == status)
    if request_type:
        query = query.where(FormRequest.request_type == request_type)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            FormRequest.student_lrn.ilike(pattern) | FormRequest.requestor_name.ilike(pattern)
        )

    query = query.order_by(FormRequest.requested_at.desc())
    return await paginate(db, query, skip, limit)


async def count_by_status(
    db: AsyncSession, school_id: str | None = None
) -> dict[FormRequestStatus, int]:
    query = select(FormRequest.status, func.count()).group_by(FormRequest.status)
    if school_id:
        query = query.where(FormRequest.school_id == school_id)
    result = await db.execute(query)
    return {status: count for status, count in result.all()}


async def update(db: AsyncSession, request: FormRequest, **fields: Any) -> FormRequest:
    for key, value in fields.items():
        setattr(request, key, value)

    await db.flush()
    await db.refresh(request)
    return request
