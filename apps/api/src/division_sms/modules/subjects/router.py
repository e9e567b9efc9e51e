"""
Subjects Router

Endpoints:
- GET /subjects - List subjects (search, grade level, teacher, active)
- GET /subjects/{id}
- POST /subjects
- PATCH /subjects/{id}
- DELETE /subjects/{id}
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import (
    CurrentUser,
    get_current_user,
    get_school_manager,
    resolve_school_id,
)
from division_sms.core.database import get_db
from division_sms.modules.shared.grade_levels import GRADE_LEVEL_MAX, GRADE_LEVEL_MIN
from division_sms.modules.shared.pagination import Page, PageParams, page_params
from division_sms.modules.subjects import service
from division_sms.modules.subjects.schemas import SubjectCreate, SubjectResponse, SubjectUpdate

router = APIRouter()


@router.get("", response_model=Page[SubjectResponse], summary="List Subjects")
async def list_subjects(
    school_id: str | None = Query(None),
    search: str | None = Query(None, min_length=1, max_length=100),
    grade_level: int | None = Query(None, ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX),
    teacher_id: str | None = Query(None),
    is_active: bool | None = Query(None),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[SubjectResponse]:
    subjects, total = await service.list_subjects(
        db,
        resolve_school_id(user, school_id),
        search=search,
        grade_level=grade_level,
        teacher_id=teacher_id,
        is_active=is_active,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[SubjectResponse](
        items=[SubjectResponse.model_validate(s) for s in subjects],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{subject_id}", response_model=SubjectResponse, summary="Get Subject")
async def get_subject(
    subject_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> SubjectResponse:
    subject = await service.get_subject(db, resolve_school_id(user, school_id), subject_id)
    return SubjectResponse.model_validate(subject)


@router.post(
    "",
    response_model=SubjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Subject",
)
async def create_subject(
    data: SubjectCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> SubjectResponse:
    subject = await service.create_subject(db, resolve_school_id(user, data.school_id), data)
    return SubjectResponse.model_validate(subject)


@router.patch("/{subject_id}", response_model=SubjectResponse, summary="Update Subject")
async def update_subject(
    subject_id: str,
    data: SubjectUpdate,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> SubjectResponse:
    subject = await service.update_subject(
        db, resolve_school_id(user, school_id), subject_id, data
    )
    return SubjectResponse.model_validate(subject)


@router.delete(
    "/{subject_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Subject",
)
async def delete_subject(
    subject_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> None:
    await service.delete_subject(db, resolve_school_id(user, school_id), subject_id)
