"""
Enrollment Router

Endpoints:
- GET /enrollments/thresholds - GPA thresholds of the school
- PUT /enrollments/thresholds - Save GPA thresholds (school managers)
- GET /enrollments/previous-gpa - Student's previous-grade GPA and suggested section type
- GET /enrollments/eligible-sections - Sections the student may be enrolled in
- GET /enrollments - List enrollments
- GET /enrollments/{id}
- POST /enrollments - Enroll a student (teachers file a pending request)
- PATCH /enrollments/{id}
- POST /enrollments/{id}/approve, POST /enrollments/{id}/reject
- DELETE /enrollments/{id}
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import (
    CurrentUser,
    get_current_user,
    get_records_staff,
    get_school_manager,
    resolve_school_id,
)
from division_sms.core.database import get_db
from division_sms.modules.enrollment import service
from division_sms.modules.enrollment.models import EnrollmentRequestStatus
from division_sms.modules.enrollment.schemas import (
    EligibleSectionsResponse,
    EnrollmentCreate,
    EnrollmentDecision,
    EnrollmentResponse,
    EnrollmentUpdate,
    GpaThresholdsPayload,
    PreviousGpaResponse,
)
from division_sms.modules.sections.schemas import SectionResponse
from division_sms.modules.shared.grade_levels import GRADE_LEVEL_MAX, GRADE_LEVEL_MIN
from division_sms.modules.shared.pagination import Page, PageParams, page_params

router = APIRouter()


# ============================================
# GPA thresholds and eligibility
# ============================================


@router.get("/thresholds", response_model=GpaThresholdsPayload, summary="Get GPA Thresholds")
async def get_thresholds(
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> GpaThresholdsPayload:
    thresholds = await service.get_thresholds(db, resolve_school_id(user, school_id))
    return GpaThresholdsPayload.from_thresholds(thresholds)


@router.put("/thresholds", response_model=GpaThresholdsPayload, summary="Save GPA Thresholds")
async def save_thresholds(
    data: GpaThresholdsPayload,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> GpaThresholdsPayload:
    thresholds = await service.save_thresholds(
        db, resolve_school_id(user, school_id), data.to_thresholds()
    )
    return GpaThresholdsPayload.from_thresholds(thresholds)


@router.get("/previous-gpa", response_model=PreviousGpaResponse, summary="Previous Grade GPA")
async def get_previous_gpa(
    student_id: str = Query(...),
    grade_level: int = Query(..., ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX),
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> PreviousGpaResponse:
    gpa, suggested = await service.get_student_previous_gpa(
        db, resolve_school_id(user, school_id), student_id, grade_level
    )
    return PreviousGpaResponse(
        student_id=student_id,
        grade_level=grade_level,
        previous_grade_level=grade_level - 1,
        gpa=gpa,
        suggested_section_type=suggested,
    )


@router.get(
    "/eligible-sections",
    response_model=EligibleSectionsResponse,
    summary="Eligible Sections",
)
async def get_eligible_sections(
    student_id: str = Query(...),
    grade_level: int = Query(..., ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX),
    school_year: str = Query(..., max_length=9),
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> EligibleSectionsResponse:
    gpa, suggested, thresholds, sections = await service.get_eligible_sections(
        db, resolve_school_id(user, school_id), student_id, grade_level, school_year
    )
    return EligibleSectionsResponse(
        gpa=gpa,
        suggested_section_type=suggested,
        thresholds=GpaThresholdsPayload.from_thresholds(thresholds),
        sections=[SectionResponse.model_validate(s) for s in sections],
    )


# ============================================
# Enrollments
# ============================================


@router.get("", response_model=Page[EnrollmentResponse], summary="List Enrollments")
async def list_enrollments(
    school_id: str | None = Query(None),
    school_year: str | None = Query(None, max_length=9),
    grade_level: int | None = Query(None, ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX),
    section_id: str | None = Query(None),
    status_filter: EnrollmentRequestStatus | None = Query(None, alias="status"),
    search: str | None = Query(None, min_length=1, max_length=100),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[EnrollmentResponse]:
    enrollments, total = await service.list_enrollments(
        db,
        resolve_school_id(user, school_id),
        school_year=school_year,
        grade_level=grade_level,
        section_id=section_id,
        status=status_filter,
        search=search,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[EnrollmentResponse](
        items=[EnrollmentResponse.model_validate(e) for e in enrollments],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{enrollment_id}", response_model=EnrollmentResponse, summary="Get Enrollment")
async def get_enrollment(
    enrollment_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> EnrollmentResponse:
    enrollment = await service.get_enrollment(
        db, resolve_school_id(user, school_id), enrollment_id
    )
    return EnrollmentResponse.model_validate(enrollment)


@router.post(
    "",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Enrollment",
)
async def create_enrollment(
    data: EnrollmentCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> EnrollmentResponse:
    enrollment = await service.create_enrollment(
        db, resolve_school_id(user, data.school_id), data, user
    )
    return EnrollmentResponse.model_validate(enrollment)


@router.patch("/{enrollment_id}", response_model=EnrollmentResponse, summary="Update Enrollment")
async def update_enrollment(
    enrollment_id: str,
    data: EnrollmentUpdate,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> EnrollmentResponse:
    enrollment = await service.update_enrollment(
        db, resolve_school_id(user, school_id), enrollment_id, data
    )
    return EnrollmentResponse.model_validate(enrollment)


@router.post(
    "/{enrollment_id}/approve",
    response_model=EnrollmentResponse,
    summary="Approve Enrollment Request",
)
async def approve_enrollment(
    enrollment_id: str,
    data: EnrollmentDecision | None = None,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> EnrollmentResponse:
    enrollment = await service.approve_enrollment(
        db,
        resolve_school_id(user, school_id),
        enrollment_id,
        user,
        remarks=data.remarks if data else None,
    )
    return EnrollmentResponse.model_validate(enrollment)


@router.post(
    "/{enrollment_id}/reject",
    response_model=EnrollmentResponse,
    summary="Reject Enrollment Request",
)
async def reject_enrollment(
    enrollment_id: str,
    data: EnrollmentDecision | None = None,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> EnrollmentResponse:
    enrollment = await service.reject_enrollment(
        db,
        resolve_school_id(user, school_id),
        enrollment_id,
        user,
        remarks=data.remarks if data else None,
    )
    return EnrollmentResponse.model_validate(enrollment)


@router.delete(
    "/{enrollment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Enrollment",
)
async def delete_enrollment(
    enrollment_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> None:
    await service.delete_enrollment(db, resolve_school_id(user, school_id), enrollment_id)
