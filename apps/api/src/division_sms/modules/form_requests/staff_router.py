"""
Form Requests Staff Router

Endpoints:
- GET /form-requests - List requests (status, type, LRN/requestor search)
- GET /form-requests/{id}
- POST /form-requests/{id}/approve
- POST /form-requests/{id}/reject
- POST /form-requests/{id}/complete
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import (
    CurrentUser,
    get_current_user,
    get_records_staff,
    resolve_school_id,
)
from division_sms.core.database import get_db
from division_sms.modules.form_requests import service
from division_sms.modules.form_requests.models import DocumentRequestType, FormRequestStatus
from division_sms.modules.form_requests.schemas import FormRequestDecision, FormRequestResponse
from division_sms.modules.shared.pagination import Page, PageParams, page_params

router = APIRouter()


@router.get("", response_model=Page[FormRequestResponse], summary="List Form Requests")
async def list_requests(
    school_id: str | None = Query(None),
    status_filter: FormRequestStatus | None = Query(None, alias="status"),
    request_type: DocumentRequestType | None = Query(None),
    search: str | None = Query(None, min_length=1, max_length=100),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[FormRequestResponse]:
    requests, total = await service.list_requests(
        db,
        resolve_school_id(user, school_id),
        status=status_filter,
        request_type=request_type,
        search=search,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[FormRequestResponse](
        items=[FormRequestResponse.model_validate(r) for r in requests],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{request_id}", response_model=FormRequestResponse, summary="Get Form Request")
async def get_request(
    request_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> FormRequestResponse:
    request = await service.get_request(db, resolve_school_id(user, school_id), request_id)
    return FormRequestResponse.model_validate(request)


@router.post(
    "/{request_id}/approve",
    response_model=FormRequestResponse,
    summary="Approve Form Request",
)
async def approve_request(
    request_id: str,
    data: FormRequestDecision | None = None,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> FormRequestResponse:
    request = await service.approve_request(
        db,
        resolve_school_id(user, school_id),
        request_id,
        user,
        remarks=data.remarks if data else None,
    )
    return FormRequestResponse.model_validate(request)


@router.post(
    "/{request_id}/reject",
    response_model=FormRequestResponse,
    summary="Reject Form Request",
)
async def reject_request(
    request_id: str,
    data: FormRequestDecision | None = None,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> FormRequestResponse:
    request = await service.reject_request(
        db,
        resolve_school_id(user, school_id),
        request_id,
        remarks=data.remarks if data else None,
    )
    return FormRequestResponse.model_validate(request)


@router.post(
    "/{request_id}/complete",
    response_model=FormRequestResponse,
    summary="Complete Form Request",
)
async def complete_request(
    request_id: str,
    data: FormRequestDecision | None = None,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> FormRequestResponse:
    request = await service.complete_request(
        db,
        resolve_school_id(user, school_id),
        request_id,
        remarks=data.remarks if data else None,
    )
    return FormRequestResponse.model_validate(request)
