"""
Learner Health Router

Endpoints:
- PUT /health-records - Save a section's health rows for a school year
- GET /health-records/sections/{section_id} - Health rows of a section (with BMI)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import CurrentUser, get_current_user, resolve_school_id
from division_sms.core.database import get_db
from division_sms.modules.health import service
from division_sms.modules.health.schemas import (
    HealthBulkResponse,
    HealthBulkUpsert,
    HealthResponse,
)

router = APIRouter()


@router.put("", response_model=HealthBulkResponse, summary="Save Health Records")
async def upsert_health_records(
    data: HealthBulkUpsert,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> HealthBulkResponse:
    records, created, updated = await service.upsert_health_records(
        db, resolve_school_id(user, data.school_id), data
    )
    return HealthBulkResponse(
        created=created,
        updated=updated,
        records=[HealthResponse.model_validate(r) for r in records],
    )


@router.get(
    "/sections/{section_id}",
    response_model=list[HealthResponse],
    summary="List Section Health Records",
)
async def list_health_records(
    section_id: str,
    school_id: str | None = Query(None),
    school_year: str | None = Query(None, max_length=9),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[HealthResponse]:
    records = await service.list_health_records(
        db, resolve_school_id(user, school_id), section_id, school_year
    )
    return [HealthResponse.model_validate(r) for r in records]
