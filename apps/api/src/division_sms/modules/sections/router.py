"""
Sections Router

Endpoints:
- GET /sections - List sections (school year, grade level, adviser, search)
- GET /sections/{id}
- POST /sections
- PATCH /sections/{id}
- DELETE /sections/{id} - Soft delete (refused while records point at it)
- POST /sections/{id}/duplicate - Copy with schedules into a new school year
- GET/POST /sections/{id}/students, DELETE /sections/{id}/students/{student_id}
  (DELETE marks the student transferred out)
- GET/POST /sections/{id}/subjects, DELETE /sections/{id}/subjects/{subject_id}
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
from division_sms.modules.sections import service
from division_sms.modules.sections.schemas import (
    RosterAddRequest,
    RosterEntryResponse,
    SectionCreate,
    SectionDuplicateRequest,
    SectionDuplicateResponse,
    SectionResponse,
    SectionSubjectAddRequest,
    SectionSubjectResponse,
    SectionUpdate,
)
from division_sms.modules.shared.grade_levels import GRADE_LEVEL_MAX, GRADE_LEVEL_MIN
from division_sms.modules.shared.pagination import Page, PageParams, page_params
from division_sms.modules.students.schemas import StudentSummary

router = APIRouter()


def _roster_entry(entry, student) -> RosterEntryResponse:
    return RosterEntryResponse(
        id=entry.id,
        section_id=entry.section_id,
        school_year=entry.school_year,
        enrolled_at=entry.enrolled_at,
        transferred_at=entry.transferred_at,
        student=StudentSummary.model_validate(student),
    )


def _section_subject(entry, subject) -> SectionSubjectResponse:
    return SectionSubjectResponse(
        id=entry.id,
        section_id=entry.section_id,
        subject_id=entry.subject_id,
        school_year=entry.school_year,
        code=subject.code,
        name=subject.name,
    )


@router.get("", response_model=Page[SectionResponse], summary="List Sections")
async def list_sections(
    school_id: str | None = Query(None),
    school_year: str | None = Query(None, max_length=9),
    grade_level: int | None = Query(None, ge=GRADE_LEVEL_MIN, le=GRADE_LEVEL_MAX),
    adviser_id: str | None = Query(None),
    search: str | None = Query(None, min_length=1, max_length=100),
    is_active: bool | None = Query(None),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[SectionResponse]:
    sections, total = await service.list_sections(
        db,
        resolve_school_id(user, school_id),
        school_year=school_year,
        grade_level=grade_level,
        adviser_id=adviser_id,
        search=search,
        is_active=is_active,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[SectionResponse](
        items=[SectionResponse.model_validate(s) for s in sections],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{section_id}", response_model=SectionResponse, summary="Get Section")
async def get_section(
    section_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> SectionResponse:
    section = await service.get_section(db, resolve_school_id(user, school_id), section_id)
    return SectionResponse.model_validate(section)


@router.post(
    "",
    response_model=SectionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Section",
)
async def create_section(
    data: SectionCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> SectionResponse:
    section = await service.create_section(db, resolve_school_id(user, data.school_id), data)
    return SectionResponse.model_validate(section)


@router.patch("/{section_id}", response_model=SectionResponse, summary="Update Section")
async def update_section(
    section_id: str,
    data: SectionUpdate,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> SectionResponse:
    section = await service.update_section(
        db, resolve_school_id(user, school_id), section_id, data
    )
    return SectionResponse.model_validate(section)


@router.delete(
    "/{section_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Section",
)
async def delete_section(
    section_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> None:
    await service.delete_section(db, resolve_school_id(user, school_id), section_id)


@router.post(
    "/{section_id}/duplicate",
    response_model=SectionDuplicateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Duplicate Section",
)
async def duplicate_section(
    section_id: str,
    data: SectionDuplicateRequest,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> SectionDuplicateResponse:
    section, copied = await service.duplicate_section(
        db, resolve_school_id(user, school_id), section_id, data
    )
    return SectionDuplicateResponse(
        section=SectionResponse.model_validate(section), schedules_copied=copied
    )


# ============================================
# Roster
# ============================================


@router.get(
    "/{section_id}/students",
    response_model=list[RosterEntryResponse],
    summary="List Section Students",
)
async def list_section_students(
    section_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[RosterEntryResponse]:
    rows = await service.list_roster(db, resolve_school_id(user, school_id), section_id)
    return [_roster_entry(entry, student) for entry, student in rows]


@router.post(
    "/{section_id}/students",
    response_model=RosterEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Student to Section",
)
async def add_section_student(
    section_id: str,
    data: RosterAddRequest,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> RosterEntryResponse:
    entry, student = await service.add_student_to_section(
        db, resolve_school_id(user, school_id), section_id, data.student_id
    )
    return _roster_entry(entry, student)


@router.delete(
    "/{section_id}/students/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Student from Section",
)
async def remove_section_student(
    section_id: str,
    student_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_records_staff),
) -> None:
    await service.remove_student_from_section(
        db, resolve_school_id(user, school_id), section_id, student_id
    )


# ============================================
# Subjects
# ============================================


@router.get(
    "/{section_id}/subjects",
    response_model=list[SectionSubjectResponse],
    summary="List Section Subjects",
)
async def list_section_subjects(
    section_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> list[SectionSubjectResponse]:
    rows = await service.list_section_subjects(db, resolve_school_id(user, school_id), section_id)
    return [_section_subject(entry, subject) for entry, subject in rows]


@router.post(
    "/{section_id}/subjects",
    response_model=SectionSubjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add Subject to Section",
)
async def add_section_subject(
    section_id: str,
    data: SectionSubjectAddRequest,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> SectionSubjectResponse:
    entry, subject = await service.add_subject_to_section(
        db, resolve_school_id(user, school_id), section_id, data.subject_id
    )
    return _section_subject(entry, subject)


@router.delete(
    "/{section_id}/subjects/{subject_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove Subject from Section",
)
async def remove_section_subject(
    section_id: str,
    subject_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> None:
    await service.remove_subject_from_section(
        db, resolve_school_id(user, school_id), section_id, subject_id
    )
