"""
Report Schemas
"""

from pydantic import BaseModel, computed_field

from division_sms.modules.shared.grade_levels import get_grade_level_label


class RoleCount(BaseModel):
    role: str
    count: int


class SchoolCount(BaseModel):
    school_id: str
    school_name: str
    count: int


class GradeLevelCount(BaseModel):
    grade_level: int
    count: int

    @computed_field
    @property
    def grade_level_label(self) -> str:
        return get_grade_level_label(self.grade_level)


class StatusCount(BaseModel):
    status: str
    count: int


class SchoolDashboard(BaseModel):
    school_id: str
    school_year: str
    total_students: int
    active_sections: int
    staff_by_role: list[RoleCount]
    enrollments_by_grade_level: list[GradeLevelCount]
    requests_by_status: list[StatusCount]


class DivisionDashboard(BaseModel):
    school_year: str
    active_schools: int
    total_students: int
    active_sections: int
    staff_by_role: list[RoleCount]
    staff_by_school: list[SchoolCount]
    students_by_school: list[SchoolCount]
    enrollments_by_grade_level: list[GradeLevelCount]
    requests_by_status: list[StatusCount]
