"""
Schedules Router

Endpoints:
- GET /schedules - List schedules (school year, section, teacher, room, subject, day)
- GET /schedules/calendar - Schedules of a school year grouped by day of week
- POST /schedules/check-conflicts - Preview conflicts without saving
- GET /schedules/{id}
- POST /schedules - Create (409 SCHEDULE_CONFLICT with the conflict list)
- PATCH /schedules/{id} - Update (same conflict check, ignoring itself)
- POST /schedules/{id}/duplicate - Copy into another school year
- DELETE /schedules/{id}
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import (
    CurrentUser,
    get_current_user,
    get_school_manager,
    resolve_school_id,
)
from division_sms.core.database import get_db
from division_sms.modules.schedules import service
from division_sms.modules.schedules.schemas import (
    CalendarDay,
    ConflictCheckRequest,
    ConflictCheckResponse,
    ConflictItem,
    DuplicateScheduleRequest,
    ScheduleCreate,
    ScheduleResponse,
    ScheduleUpdate,
)
from division_sms.modules.shared.pagination import Page, PageParams, page_params

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Page[ScheduleResponse], summary="List Schedules")
async def list_schedules(
    school_id: str | None = Query(None),
    school_year: str | None = Query(None, max_length=9),
    section_id: str | None = Query(None),
    teacher_id: str | None = Query(None),
    room_id: str | None = Query(None),
    subject_id: str | None = Query(None),
    day: int | None = Query(None, ge=0, le=6, description="0=Sunday .. 6=Saturday"),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[ScheduleResponse]:
    schedules, total = await service.list_schedules(
        db,
        resolve_school_id(user, school_id),
        school_year=school_year,
        section_id=section_id,
        teacher_id=teacher_id,
        room_id=room_id,
        subject_id=subject_id,
        day=day,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[ScheduleResponse](
        items=[ScheduleResponse.model_validate(s) for s in schedules],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/calendar", response_model=list[CalendarDay], summary="Schedule Calendar")
async def get_calendar(
    school_year: str = Query(..., max_length=9),
    school_id: str | None = Query(None),
    teacher_id: str | None = Query(None),
    section_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[CalendarDay]:
    days = await service.get_calendar(
        db,
        resolve_school_id(user, school_id),
        school_year,
        teacher_id=teacher_id,
        section_id=section_id,
    )
    return [
        CalendarDay(
            day=day,
            day_name=day_name,
            schedules=[ScheduleResponse.model_validate(s) for s in schedules],
        )
        for day, day_name, schedules in days
    ]


@router.post(
    "/check-conflicts",
    response_model=ConflictCheckResponse,
    summary="Check Schedule Conflicts",
)
async def check_conflicts(
    data: ConflictCheckRequest,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> ConflictCheckResponse:
    conflicts = await service.check_conflicts(
        db, resolve_school_id(user, school_id), data, exclude_id=data.exclude_id
    )
    return ConflictCheckResponse(
        has_conflicts=bool(conflicts),
        conflicts=[ConflictItem.from_conflict(c) for c in conflicts],
    )


@router.get("/{schedule_id}", response_model=ScheduleResponse, summary="Get Schedule")
async def get_schedule(
    schedule_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> ScheduleResponse:
    schedule = await service.get_schedule(db, resolve_school_id(user, school_id), schedule_id)
    return ScheduleResponse.model_validate(schedule)


@router.post(
    "",
    response_model=ScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Schedule",
    responses={409: {"description": "Schedule conflicts with existing schedules"}},
)
async def create_schedule(
    data: ScheduleCreate,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> ScheduleResponse:
    schedule = await service.create_schedule(db, resolve_school_id(user, school_id), data)
    return ScheduleResponse.model_validate(schedule)


@router.patch(
    "/{schedule_id}",
    response_model=ScheduleResponse,
    summary="Update Schedule",
    responses={409: {"description": "Schedule conflicts with existing schedules"}},
)
async def update_schedule(
    schedule_id: str,
    data: ScheduleUpdate,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> ScheduleResponse:
    schedule = await service.update_schedule(
        db, resolve_school_id(user, school_id), schedule_id, data
    )
    return ScheduleResponse.model_validate(schedule)


@router.post(
    "/{schedule_id}/duplicate",
    response_model=ScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate Schedule",
)
async def duplicate_schedule(
    schedule_id: str,
    data: DuplicateScheduleRequest,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> ScheduleResponse:
    schedule = await service.duplicate_schedule(
        db, resolve_school_id(user, school_id), schedule_id, data.school_year
    )
    return ScheduleResponse.model_validate(schedule)


@router.delete(
    "/{schedule_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Schedule",
)
async def delete_schedule(
    schedule_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> None:
    await service.delete_schedule(db, resolve_school_id(user, school_id), schedule_id)
