"""
Purchase Order Service Layer

Purchase orders are drafted, edited and finally approved. Approved orders
are frozen: they can be printed but no longer edited or deleted.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.config import settings
from division_sms.modules.procurement import repository
from division_sms.modules.procurement.models import PurchaseOrder, PurchaseOrderStatus
from division_sms.modules.procurement.schemas import PurchaseOrderCreate, PurchaseOrderUpdate
from division_sms.modules.shared.errors import (
    InvalidStateError,
    NotFoundError,
    raise_for_integrity_error,
)

logger = logging.getLogger(__name__)

DUPLICATE_PR_NUMBER = "A purchase order with this PR number already exists."


def _ensure_draft(purchase_order: PurchaseOrder) -> None:
    if purchase_order.status != PurchaseOrderStatus.DRAFT:
        raise InvalidStateError(
            "Approved purchase orders can no longer be changed.", "PURCHASE_ORDER_APPROVED"
        )


def _dump_lots(lots) -> list[dict]:
    return [lot.model_dump(mode="json") for lot in lots]


async def get_purchase_order(db: AsyncSession, id: str) -> PurchaseOrder:
    purchase_order = await repository.get_by_id(db, id)
    if not purchase_order:
        raise NotFoundError("Purchase order", id)
    return purchase_order


async def list_purchase_orders(
    db: AsyncSession, **filters
) -> tuple[list[PurchaseOrder], int]:
    return await repository.list_purchase_orders(db, **filters)


async def create_purchase_order(
    db: AsyncSession, data: PurchaseOrderCreate, created_by: str
) -> PurchaseOrder:
    fields = data.model_dump(exclude={"lots"})
    fields["lots"] = _dump_lots(data.lots)
    if not fields["prepared_by_position"]:
        fields["prepared_by_position"] = settings.default_prepared_by_position

    try:
        purchase_order = await repository.create(
            db, **fields, status=PurchaseOrderStatus.DRAFT, created_by=created_by
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_PR_NUMBER)

    return purchase_order


async def update_purchase_order(
    db: AsyncSession, id: str, data: PurchaseOrderUpdate
) -> PurchaseOrder:
    purchase_order = await get_purchase_order(db, id)
    _ensure_draft(purchase_order)

    changes = data.model_dump(exclude_unset=True, exclude={"lots"})
    if data.lots is not None:
        changes["lots"] = _dump_lots(data.lots)

    try:
        purchase_order = await repository.update(db, purchase_order, **changes)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_PR_NUMBER)

    return purchase_order


async def approve_purchase_order(db: AsyncSession, id: str) -> PurchaseOrder:
    purchase_order = await get_purchase_order(db, id)
    _ensure_draft(purchase_order)

    purchase_order = await repository.update(
        db, purchase_order, status=PurchaseOrderStatus.APPROVED
    )
    await db.commit()

    logger.info(f"Approved purchase order {id} ({purchase_order.pr_number})")
    return purchase_order


async def delete_purchase_order(db: AsyncSession, id: str) -> None:
    purchase_order = await get_purchase_order(db, id)
    _ensure_draft(purchase_order)

    await repository.delete_purchase_order(db, purchase_order)
    await db.commit()
    logger.info(f"Deleted purchase order {id}")
