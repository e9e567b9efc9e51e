"""
Purchase Order Repository
"""

import logging
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.procurement.models import PurchaseOrder, PurchaseOrderStatus
from division_sms.modules.shared.pagination import paginate

logger = logging.getLogger(__name__)


async def create(db: AsyncSession, **fields: Any) -> PurchaseOrder:
    purchase_order = PurchaseOrder(**fields)
    db.add(purchase_order)
    await db.flush()
    await db.refresh(purchase_order)

    logger.info(f"Created purchase order: {purchase_order.id} ({purchase_order.pr_number})")
    return purchase_order


async def get_by_id(db: AsyncSession, id: str) -> PurchaseOrder | None:
    result = await db.execute(select(PurchaseOrder).where(PurchaseOrder.id == str(id)))
    return result.scalar_one_or_none()


async def list_purchase_orders(
    db: AsyncSession,
    *,
    status: PurchaseOrderStatus | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[PurchaseOrder], int]:
    query = select(PurchaseOrder)

    if status:
        query = query.where(PurchaseOrder.status == status)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                PurchaseOrder.pr_number.ilike(pattern),
                PurchaseOrder.purpose.ilike(pattern),
                PurchaseOrder.office_division.ilike(pattern),
            )
        )

    query = query.order_by(PurchaseOrder.date.desc(), PurchaseOrder.created_at.desc())
    return await paginate(db, query, skip, limit)


async def update(db: AsyncSession, purchase_order: PurchaseOrder, **fields: Any) -> PurchaseOrder:
    for key, value in fields.items():
        setattr(purchase_order, key, value)

    await db.flush()
    await db.refresh(purchase_order)
    return purchase_order


async def delete_purchase_order(db: AsyncSession, purchase_order: PurchaseOrder) -> None:
    await db.delete(purchase_order)
    await db.flush()
