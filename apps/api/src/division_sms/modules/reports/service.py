"""
Report Service Layer
"""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.form_requests import repository as form_requests_repository
from division_sms.modules.reports import repository
from division_sms.modules.reports.schemas import (
    DivisionDashboard,
    GradeLevelCount,
    RoleCount,
    SchoolCount,
    SchoolDashboard,
    StatusCount,
)
from division_sms.modules.schools.repository import SchoolRepository
from division_sms.modules.shared.errors import NotFoundError
from division_sms.modules.shared.school_year import get_current_school_year


async def _requests_by_status(db: AsyncSession, school_id: str | None) -> list[StatusCount]:
    counts = await form_requests_repository.count_by_status(db, school_id)
    return [StatusCount(status=status.value, count=count) for status, count in counts.items()]


async def get_division_dashboard(
    db: AsyncSession, school_year: str | None = None
) -> DivisionDashboard:
    school_year = school_year or get_current_school_year(date.today())

    return DivisionDashboard(
        school_year=school_year,
        active_schools=await repository.count_active_schools(db),
        total_students=await repository.count_students(db),
        active_sections=await repository.count_active_sections(db, school_year),
        staff_by_role=[
            RoleCount(role=role, count=count)
            for role, count in await repository.staff_by_role(db)
        ],
        staff_by_school=[
            SchoolCount(school_id=id, school_name=name, count=count)
            for id, name, count in await repository.staff_by_school(db)
        ],
        students_by_school=[
            SchoolCount(school_id=id, school_name=name, count=count)
            for id, name, count in await repository.students_by_school(db)
        ],
        enrollments_by_grade_level=[
            GradeLevelCount(grade_level=grade_level, count=count)
            for grade_level, count in await repository.enrollments_by_grade_level(db, school_year)
        ],
        requests_by_status=await _requests_by_status(db, None),
    )


async def get_school_dashboard(
    db: AsyncSession, school_id: str, school_year: str | None = None
) -> SchoolDashboard:
    if not await SchoolRepository.get_by_id(db, school_id):
        raise NotFoundError("School", school_id)

    school_year = school_year or get_current_school_year(date.today())
    by_grade = await repository.enrollments_by_grade_level(db, school_year, school_id)
    by_role = await repository.staff_by_role(db, school_id)

    return SchoolDashboard(
        school_id=school_id,
        school_year=school_year,
        total_students=await repository.count_students(db, school_id),
        active_sections=await repository.count_active_sections(db, school_year, school_id),
        staff_by_role=[RoleCount(role=role, count=count) for role, count in by_role],
        enrollments_by_grade_level=[
            GradeLevelCount(grade_level=grade_level, count=count)
            for grade_level, count in by_grade
        ],
        requests_by_status=await _requests_by_status(db, school_id),
    )
