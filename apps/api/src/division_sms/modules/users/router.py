"""
Staff Router

Endpoints:
- GET /users - List staff (division: any school; school managers: own school)
- GET /users/{id} - Staff details
- POST /users - Create staff account with a temporary password
- PATCH /users/{id} - Update staff account
- POST /users/{id}/reset-password - Issue a new temporary password
- DELETE /users/{id} - Soft-delete staff account
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import CurrentUser, get_school_manager
from division_sms.core.database import get_db
from division_sms.modules.shared.pagination import Page, PageParams, page_params
from division_sms.modules.users import service
from division_sms.modules.users.models import StaffRole
from division_sms.modules.users.schemas import (
    StaffCreate,
    StaffCreatedResponse,
    StaffResponse,
    StaffUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class PasswordResetResponse(BaseModel):
    email_sent: bool
    message: str = "A new temporary password was issued."


@router.get("", response_model=Page[StaffResponse], summary="List Staff")
async def list_staff(
    school_id: str | None = Query(None),
    role: StaffRole | None = Query(None),
    search: str | None = Query(None, min_length=1, max_length=100),
    is_active: bool | None = Query(None),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> Page[StaffResponse]:
    users, total = await service.list_staff(
        db,
        user,
        school_id=school_id,
        role=role,
        search=search,
        is_active=is_active,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[StaffResponse](
        items=[StaffResponse.model_validate(u) for u in users],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{user_id}", response_model=StaffResponse, summary="Get Staff")
async def get_staff(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> StaffResponse:
    return StaffResponse.model_validate(await service.get_staff(db, user, user_id))


@router.post(
    "",
    response_model=StaffCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Staff",
)
async def create_staff(
    data: StaffCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> StaffCreatedResponse:
    staff, email_sent = await service.create_staff(db, user, data)
    return StaffCreatedResponse(
        **StaffResponse.model_validate(staff).model_dump(),
        welcome_email_sent=email_sent,
    )


@router.patch("/{user_id}", response_model=StaffResponse, summary="Update Staff")
async def update_staff(
    user_id: str,
    data: StaffUpdate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> StaffResponse:
    return StaffResponse.model_validate(await service.update_staff(db, user, user_id, data))


@router.post(
    "/{user_id}/reset-password",
    response_model=PasswordResetResponse,
    summary="Reset Staff Password",
)
async def reset_password(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> PasswordResetResponse:
    email_sent = await service.reset_staff_password(db, user, user_id)
    return PasswordResetResponse(email_sent=email_sent)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Staff")
async def delete_staff(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> None:
    await service.delete_staff(db, user, user_id)
