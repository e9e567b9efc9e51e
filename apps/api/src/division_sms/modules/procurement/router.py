"""
Procurement Router

Division-level endpoints; purchase orders do not belong to a school.

Endpoints:
- GET /purchase-orders - List purchase orders (status, search)
- GET /purchase-orders/{id}
- POST /purchase-orders
- PATCH /purchase-orders/{id} - Drafts only
- POST /purchase-orders/{id}/approve - draft -> approved
- DELETE /purchase-orders/{id} - Drafts only
- GET /purchase-orders/{id}/print/purchase-request - Printable PR (HTML)
- GET /purchase-orders/{id}/print/obligation-request - Printable OBR (HTML)
- GET /purchase-orders/{id}/print/approved-budget - Printable ABC (HTML)
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import CurrentUser, get_division_admin
from division_sms.core.database import get_db
from division_sms.documents.purchase_request import (
    render_approved_budget,
    render_obligation_request,
    render_purchase_request,
)
from division_sms.modules.procurement import service
from division_sms.modules.procurement.models import PurchaseOrderStatus
from division_sms.modules.procurement.schemas import (
    PurchaseOrderCreate,
    PurchaseOrderResponse,
    PurchaseOrderUpdate,
)
from division_sms.modules.shared.pagination import Page, PageParams, page_params

router = APIRouter()


@router.get("", response_model=Page[PurchaseOrderResponse], summary="List Purchase Orders")
async def list_purchase_orders(
    status_filter: PurchaseOrderStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, min_length=1, max_length=100),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> Page[PurchaseOrderResponse]:
    purchase_orders, total = await service.list_purchase_orders(
        db, status=status_filter, search=search, skip=page.skip, limit=page.limit
    )
    return Page[PurchaseOrderResponse](
        items=[PurchaseOrderResponse.model_validate(p) for p in purchase_orders],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get(
    "/{purchase_order_id}",
    response_model=PurchaseOrderResponse,
    summary="Get Purchase Order",
)
async def get_purchase_order(
    purchase_order_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> PurchaseOrderResponse:
    purchase_order = await service.get_purchase_order(db, purchase_order_id)
    return PurchaseOrderResponse.model_validate(purchase_order)


@router.post(
    "",
    response_model=PurchaseOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Purchase Order",
)
async def create_purchase_order(
    data: PurchaseOrderCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> PurchaseOrderResponse:
    purchase_order = await service.create_purchase_order(db, data, created_by=user.id)
    return PurchaseOrderResponse.model_validate(purchase_order)


@router.patch(
    "/{purchase_order_id}",
    response_model=PurchaseOrderResponse,
    summary="Update Purchase Order",
)
async def update_purchase_order(
    purchase_order_id: str,
    data: PurchaseOrderUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> PurchaseOrderResponse:
    purchase_order = await service.update_purchase_order(db, purchase_order_id, data)
    return PurchaseOrderResponse.model_validate(purchase_order)


@router.post(
    "/{purchase_order_id}/approve",
    response_model=PurchaseOrderResponse,
    summary="Approve Purchase Order",
)
async def approve_purchase_order(
    purchase_order_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> PurchaseOrderResponse:
    purchase_order = await service.approve_purchase_order(db, purchase_order_id)
    return PurchaseOrderResponse.model_validate(purchase_order)


@router.delete(
    "/{purchase_order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Purchase Order",
)
async def delete_purchase_order(
    purchase_order_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> None:
    await service.delete_purchase_order(db, purchase_order_id)


# ============================================
# Printables
# ============================================


@router.get(
    "/{purchase_order_id}/print/purchase-request",
    response_class=HTMLResponse,
    summary="Print Purchase Request",
)
async def print_purchase_request(
    purchase_order_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> HTMLResponse:
    purchase_order = await service.get_purchase_order(db, purchase_order_id)
    return HTMLResponse(render_purchase_request(purchase_order))


@router.get(
    "/{purchase_order_id}/print/obligation-request",
    response_class=HTMLResponse,
    summary="Print Obligation Request",
)
async def print_obligation_request(
    purchase_order_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> HTMLResponse:
    purchase_order = await service.get_purchase_order(db, purchase_order_id)
    return HTMLResponse(render_obligation_request(purchase_order))


@router.get(
    "/{purchase_order_id}/print/approved-budget",
    response_class=HTMLResponse,
    summary="Print Approved Budget",
)
async def print_approved_budget(
    purchase_order_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> HTMLResponse:
    purchase_order = await service.get_purchase_order(db, purchase_order_id)
    return HTMLResponse(render_approved_budget(purchase_order))
