"""
Reports Router

Endpoints:
- GET /reports/division - Division dashboard (division users)
- GET /reports/school - Dashboard of one school

``school_year`` defaults to the current school year.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import (
    CurrentUser,
    get_current_user,
    get_division_admin,
    resolve_school_id,
)
from division_sms.core.database import get_db
from division_sms.modules.reports import service
from division_sms.modules.reports.schemas import DivisionDashboard, SchoolDashboard

router = APIRouter()


@router.get("/division", response_model=DivisionDashboard, summary="Division Dashboard")
async def get_division_dashboard(
    school_year: str | None = Query(None, max_length=9),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_division_admin),
) -> DivisionDashboard:
    return await service.get_division_dashboard(db, school_year)


@router.get("/school", response_model=SchoolDashboard, summary="School Dashboard")
async def get_school_dashboard(
    school_id: str | None = Query(None),
    school_year: str | None = Query(None, max_length=9),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> SchoolDashboard:
    return await service.get_school_dashboard(
        db, resolve_school_id(user, school_id), school_year
    )
