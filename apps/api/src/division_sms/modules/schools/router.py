"""
Schools Router

Endpoints:
- GET /schools - List schools (any staff)
- GET /schools/{id} - School details (any staff)
- POST /schools - Create school (division admin)
- PATCH /schools/{id} - Update school (division admin)
- POST /schools/{id}/deactivate - Deactivate school (division admin)
- DELETE /schools/{id} - Delete school (division admin)
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import CurrentUser, get_current_user, get_division_admin
from division_sms.core.database import get_db
from division_sms.modules.schools import service
from division_sms.modules.schools.schemas import SchoolCreate, SchoolResponse, SchoolUpdate
from division_sms.modules.shared.pagination import Page, PageParams, page_params

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Page[SchoolResponse], summary="List Schools")
async def list_schools(
    search: str | None = Query(None, min_length=1, max_length=100),
    district: str | None = Query(None, max_length=100),
    is_active: bool | None = Query(None),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[SchoolResponse]:
    schools, total = await service.list_schools(
        db,
        search=search,
        district=district,
        is_active=is_active,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[SchoolResponse](
        items=[SchoolResponse.model_validate(s) for s in schools],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{school_id}", response_model=SchoolResponse, summary="Get School")
async def get_school(
    school_id: str,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> SchoolResponse:
    return SchoolResponse.model_validate(await service.get_school(db, school_id))


@router.post(
    "",
    response_model=SchoolResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create School",
)
async def create_school(
    data: SchoolCreate,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(get_division_admin),
) -> SchoolResponse:
    school = await service.create_school(db, data)
    logger.info(f"Admin {admin.id} created school {school.id} ({school.school_id})")
    return SchoolResponse.model_validate(school)


@router.patch("/{school_id}", response_model=SchoolResponse, summary="Update School")
async def update_school(
    school_id: str,
    data: SchoolUpdate,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(get_division_admin),
) -> SchoolResponse:
    return SchoolResponse.model_validate(await service.update_school(db, school_id, data))


@router.post(
    "/{school_id}/deactivate",
    response_model=SchoolResponse,
    summary="Deactivate School",
)
async def deactivate_school(
    school_id: str,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(get_division_admin),
) -> SchoolResponse:
    school = await service.deactivate_school(db, school_id)
    logger.info(f"Admin {admin.id} deactivated school {school_id}")
    return SchoolResponse.model_validate(school)


@router.delete(
    "/{school_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete School",
)
async def delete_school(
    school_id: str,
    db: AsyncSession = Depends(get_db),
    admin: CurrentUser = Depends(get_division_admin),
) -> None:
    await service.delete_school(db, school_id)
    logger.info(f"Admin {admin.id} deleted school {school_id}")
