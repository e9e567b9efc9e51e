"""
User Models

Staff accounts. Every school-level role belongs to exactly one school;
division-level roles have no school.
"""

from enum import Enum

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel, SoftDeleteMixin, pg_enum


class StaffRole(str, Enum):
    """Staff roles in the system."""

    SUPER_ADMIN = "super_admin"
    DIVISION_ADMIN = "division_admin"
    SCHOOL_HEAD = "school_head"
    ADMIN = "admin"
    REGISTRAR = "registrar"
    TEACHER = "teacher"


STAFF_ROLE_LABELS: dict[StaffRole, str] = {
    StaffRole.SUPER_ADMIN: "Super Admin",
    StaffRole.DIVISION_ADMIN: "Division Admin",
    StaffRole.SCHOOL_HEAD: "School Head",
    StaffRole.ADMIN: "Admin",
    StaffRole.REGISTRAR: "Registrar",
    StaffRole.TEACHER: "Teacher",
}

# Roles a school head/admin may assign within their own school
SCHOOL_ASSIGNABLE_ROLES = frozenset({StaffRole.ADMIN, StaffRole.REGISTRAR, StaffRole.TEACHER})


class User(SoftDeleteMixin, BaseModel):
    """
    Staff user model for authentication and authorization.

    school_id is NULL only for division-level roles.
    """

    __tablename__ = "users"

    # ON DELETE SET NULL: If school is deleted, staff remain but lose school association
    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Profile
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    employee_id: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Role and credentials
    role: Mapped[StaffRole] = mapped_column(
        pg_enum(StaffRole, "staff_role"),
        nullable=False,
        default=StaffRole.TEACHER,
    )
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    # Account status
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    must_change_password: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role.value})>"
