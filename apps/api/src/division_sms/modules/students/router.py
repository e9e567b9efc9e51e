"""
Students Router

Endpoints:
- GET /students - List the school's students (search, grade, section, gender, status)
- GET /students/{id} - Student details
- POST /students - Create student
- PATCH /students/{id} - Update student
- DELETE /students/{id} - Soft-delete student

Division users pass ``school_id``; school staff are pinned to their school.
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import (
    CurrentUser,
    get_current_user,
    get_records_staff,
    resolve_school_id,
)
from division_sms.core.database import get_db
from division_sms.modules.shared.grade_levels import GRADE_LEVEL_MAX, GRADE_LEVEL_MIN
from division_sms.modules.shared.pagination import Page, PageParams, page_params
from division_sms.modules.students import service
from division_sms.modules.students.models import EnrollmentStatus, Gender
from division_sms.modules.students.schemas import StudentCreate, StudentResponse, StudentUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Page[StudentResponse], summary="List Students")
async def list_students(
    school_id: str | None = Query(None),
    search: str | None = Query(None, min_length=1, max_length=100),
    grade_level: int | None = Query(None, ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX),
    section_id: str | None = Query(None),
    gender: Gender | None = Query(None),
    enrollment_status: EnrollmentStatus | None = Query(None),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[StudentResponse]:
    students, total = await service.list_students(
        db,
        resolve_school_id(user, school_id),
        search=search,
        grade_level=grade_level,
        section_id=section_id,
        gender=gender,
        enrollment_status=enrollment_status,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[StudentResponse](
        items=[StudentResponse.model_validate(s) for s in students],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{student_id}", response_model=StudentResponse, summary="Get Student")
async def get_student(
    student_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> StudentResponse:
    student = await service.get_student(db, resolve_school_id(user, school_id), student_id)
    return StudentResponse.model_validate(student)


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Student",
)
async def create_student(
    data: StudentCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> StudentResponse:
    school_id = resolve_school_id(user, data.school_id)
    student = await service.create_student(db, school_id, data, encoded_by=user.id)
    logger.info(f"User {user.id} created student {student.id}")
    return StudentResponse.model_validate(student)


@router.patch("/{student_id}", response_model=StudentResponse, summary="Update Student")
async def update_student(
    student_id: str,
    data: StudentUpdate,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> StudentResponse:
    student = await service.update_student(
        db, resolve_school_id(user, school_id), student_id, data
    )
    return StudentResponse.model_validate(student)


@router.delete(
    "/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Student",
)
async def delete_student(
    student_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> None:
    await service.delete_student(db, resolve_school_id(user, school_id), student_id)
