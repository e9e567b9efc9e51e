"""
Grades Router

Endpoints:
- PUT /grades - Save a batch of grades for a section, subject and grading period
- GET /grades/sections/{section_id} - Grades of a section
- GET /grades/sections/{section_id}/general-averages - General average per student
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import CurrentUser, get_current_user, resolve_school_id
from division_sms.core.database import get_db
from division_sms.modules.grades import service
from division_sms.modules.grades.schemas import (
    GRADING_PERIOD_MAX,
    GRADING_PERIOD_MIN,
    BulkUpsertResponse,
    GeneralAverageResponse,
    GradeResponse,
    GradesBulkUpsert,
)

router = APIRouter()


@router.put("", response_model=BulkUpsertResponse, summary="Save Grades")
async def upsert_grades(
    data: GradesBulkUpsert,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> BulkUpsertResponse:
    grades, created, updated = await service.upsert_grades(
        db, resolve_school_id(user, data.school_id), data, teacher_id=user.id
    )
    return BulkUpsertResponse(
        created=created,
        updated=updated,
        grades=[GradeResponse.model_validate(g) for g in grades],
    )


@router.get(
    "/sections/{section_id}",
    response_model=list[GradeResponse],
    summary="List Section Grades",
)
async def list_section_grades(
    section_id: str,
    school_id: str | None = Query(None),
    school_year: str | None = Query(None, max_length=9),
    subject_id: str | None = Query(None),
    grading_period: int | None = Query(None, ge=GRADING_PERIOD_MIN, le=GRADING_PERIOD_MAX),
    student_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[GradeResponse]:
    grades = await service.list_section_grades(
        db,
        resolve_school_id(user, school_id),
        section_id,
        school_year=school_year,
        subject_id=subject_id,
        grading_period=grading_period,
        student_id=student_id,
    )
    return [GradeResponse.model_validate(g) for g in grades]


@router.get(
    "/sections/{section_id}/general-averages",
    response_model=list[GeneralAverageResponse],
    summary="General Averages",
)
async def get_general_averages(
    section_id: str,
    school_id: str | None = Query(None),
    school_year: str | None = Query(None, max_length=9),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[GeneralAverageResponse]:
    return await service.get_general_averages(
        db, resolve_school_id(user, school_id), section_id, school_year
    )
