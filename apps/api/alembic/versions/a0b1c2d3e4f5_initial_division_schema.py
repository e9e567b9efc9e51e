"""initial division schema

Revision ID: a0b1c2d3e4f5
Revises:
Create Date: 2026-09-01 09:00:00.000000

This migration creates:
1. Every enum type (created manually with checkfirst)
2. Division tables: schools, users, hospitals, medical_assistance, purchase_orders
3. School records tables: students, subjects, rooms, sections and their rosters,
   subject_schedules, enrollments, gpa_thresholds, grades, learner_health,
   books, book_issuances, form_requests

students.current_section_id references sections, so sections is created first.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a0b1c2d3e4f5"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


ENUMS: dict[str, tuple[str, ...]] = {
    "staff_role": (
        "super_admin",
        "division_admin",
        "school_head",
        "admin",
        "registrar",
        "teacher",
    ),
    "gender": ("male", "female"),
    "student_enrollment_status": ("enrolled", "transferred", "graduated", "dropped"),
    "section_type": (
        "heterogeneous",
        "homogeneous_fast_learner",
        "homogeneous_crack_section",
        "homogeneous_random",
    ),
    "enrollment_request_status": ("pending", "approved", "rejected"),
    "nutritional_status": ("underweight", "normal", "overweight", "obese"),
    "height_for_age": ("severely_stunted", "stunted", "normal", "tall"),
    "book_return_code": ("FM", "TDO", "NEG"),
    "document_request_type": ("form137", "diploma"),
    "form_request_status": ("pending", "approved", "rejected", "completed"),
    "purchase_order_status": ("draft", "approved"),
    "age_unit": ("years", "months", "days"),
    "medical_assistance_status": (
        "pending",
        "for evaluation",
        "approved",
        "rejected",
        "processing",
        "completed",
        "endorsed to hor",
        "endorsed to lgu",
    ),
    "medical_access_type": ("LGU", "HOR", "LGU_TO_HOR", "HOR_TO_LGU"),
}


def enum(name: str) -> postgresql.ENUM:
    # Don't auto-create, types are created up front with checkfirst
    return postgresql.ENUM(*ENUMS[name], name=name, create_type=False)


def base_columns() -> list[sa.Column]:
    """Primary key and timestamps (from BaseModel)."""
    return [
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def deleted_at() -> sa.Column:
    return sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True)


def uuid_column(name: str, nullable: bool = True) -> sa.Column:
    return sa.Column(name, postgresql.UUID(as_uuid=False), nullable=nullable)


def upgrade() -> None:
    """Create all enum types and tables."""
    bind = op.get_bind()
    for name, values in ENUMS.items():
        postgresql.ENUM(*values, name=name, create_type=False).create(bind, checkfirst=True)

    # Schools
    op.create_table(
        "schools",
        *base_columns(),
        sa.Column("school_id", sa.String(length=6), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("school_type", sa.String(length=50), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("district", sa.String(length=100), nullable=True),
        sa.Column("region", sa.String(length=100), nullable=True),
        sa.Column("municipality_city", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("telephone_number", sa.String(length=30), nullable=True),
        sa.Column("mobile_number", sa.String(length=30), nullable=True),
        sa.Column("facebook_url", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_schools_school_id"), "schools", ["school_id"], unique=True)
    op.create_index(op.f("ix_schools_name"), "schools", ["name"], unique=False)

    # Staff
    op.create_table(
        "users",
        *base_columns(),
        deleted_at(),
        uuid_column("school_id"),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=20), nullable=True),
        sa.Column("position", sa.String(length=100), nullable=True),
        sa.Column("employee_id", sa.String(length=50), nullable=True),
        sa.Column("role", enum("staff_role"), nullable=False, server_default="teacher"),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "must_change_password", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["school_id"], ["schools.id"], name="fk_users_school_id", ondelete="SET NULL"
        ),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_school_id"), "users", ["school_id"], unique=False)

    op.create_table(
        "rooms",
        *base_columns(),
        deleted_at(),
        uuid_column("school_id"),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("building", sa.String(length=100), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("room_type", sa.String(length=50), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("school_id", "name", name="uq_rooms_school_name"),
    )
    op.create_index(op.f("ix_rooms_school_id"), "rooms", ["school_id"], unique=False)

    op.create_table(
        "subjects",
        *base_columns(),
        deleted_at(),
        uuid_column("school_id"),
        sa.Column("code", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("grade_level", sa.Integer(), nullable=False),
        uuid_column("subject_teacher_id"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["subject_teacher_id"], ["users.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("school_id", "code", name="uq_subjects_school_code"),
        sa.CheckConstraint("grade_level BETWEEN 0 AND 12", name="ck_subjects_grade_level"),
    )
    op.create_index(op.f("ix_subjects_school_id"), "subjects", ["school_id"], unique=False)

    op.create_table(
        "sections",
        *base_columns(),
        deleted_at(),
        uuid_column("school_id"),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("grade_level", sa.Integer(), nullable=False),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.Column("section_type", enum("section_type"), nullable=True),
        uuid_column("section_adviser_id"),
        sa.Column("max_students", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["section_adviser_id"], ["users.id"], ondelete="SET NULL"),
        sa.UniqueConstraint(
            "school_id", "name", "school_year", name="uq_sections_school_name_year"
        ),
        sa.CheckConstraint("grade_level BETWEEN 0 AND 12", name="ck_sections_grade_level"),
        sa.CheckConstraint(
            "max_students IS NULL OR max_students > 0", name="ck_sections_max_students"
        ),
    )
    op.create_index(op.f("ix_sections_school_id"), "sections", ["school_id"], unique=False)
    op.create_index(op.f("ix_sections_school_year"), "sections", ["school_year"], unique=False)

    # Learners (SF1)
    op.create_table(
        "students",
        *base_columns(),
        deleted_at(),
        uuid_column("school_id"),
        sa.Column("lrn", sa.String(length=12), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("middle_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("suffix", sa.String(length=20), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("gender", enum("gender"), nullable=False),
        sa.Column("mother_tongue", sa.String(length=100), nullable=True),
        sa.Column("ip_ethnic_group", sa.String(length=100), nullable=True),
        sa.Column("religion", sa.String(length=100), nullable=True),
        sa.Column("purok", sa.String(length=100), nullable=True),
        sa.Column("barangay", sa.String(length=100), nullable=True),
        sa.Column("municipality_city", sa.String(length=100), nullable=True),
        sa.Column("province", sa.String(length=100), nullable=True),
        sa.Column("contact_number", sa.String(length=30), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("father_last_name", sa.String(length=100), nullable=True),
        sa.Column("father_first_name", sa.String(length=100), nullable=True),
        sa.Column("father_middle_name", sa.String(length=100), nullable=True),
        sa.Column("mother_last_name", sa.String(length=100), nullable=True),
        sa.Column("mother_first_name", sa.String(length=100), nullable=True),
        sa.Column("mother_middle_name", sa.String(length=100), nullable=True),
        sa.Column("guardian_last_name", sa.String(length=100), nullable=True),
        sa.Column("guardian_first_name", sa.String(length=100), nullable=True),
        sa.Column("guardian_middle_name", sa.String(length=100), nullable=True),
        sa.Column("parent_guardian_name", sa.String(length=200), nullable=True),
        sa.Column("parent_guardian_contact", sa.String(length=30), nullable=True),
        sa.Column("parent_guardian_relationship", sa.String(length=50), nullable=True),
        sa.Column("previous_school", sa.Text(), nullable=True),
        sa.Column(
            "enrollment_status",
            enum("student_enrollment_status"),
            nullable=False,
            server_default="enrolled",
        ),
        sa.Column("grade_level", sa.Integer(), nullable=True),
        uuid_column("current_section_id"),
        uuid_column("enrollment_id"),
        sa.Column("enrolled_at", sa.DateTime(timezone=True), nullable=True),
        uuid_column("encoded_by"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["current_section_id"], ["sections.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["encoded_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(op.f("ix_students_lrn"), "students", ["lrn"], unique=True)
    op.create_index(op.f("ix_students_school_id"), "students", ["school_id"], unique=False)
    op.create_index(
        "ix_students_school_name", "students", ["school_id", "last_name", "first_name"]
    )

    op.create_table(
        "section_students",
        *base_columns(),
        uuid_column("section_id", nullable=False),
        uuid_column("student_id", nullable=False),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.Column(
            "enrolled_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("transferred_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["section_id"], ["sections.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "section_id", "student_id", name="uq_section_students_section_student"
        ),
    )
    op.create_index(
        op.f("ix_section_students_section_id"), "section_students", ["section_id"]
    )
    op.create_index(
        op.f("ix_section_students_student_id"), "section_students", ["student_id"]
    )

    op.create_table(
        "section_subjects",
        *base_columns(),
        uuid_column("section_id", nullable=False),
        uuid_column("subject_id", nullable=False),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["section_id"], ["sections.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "section_id", "subject_id", name="uq_section_subjects_section_subject"
        ),
    )
    op.create_index(
        op.f("ix_section_subjects_section_id"), "section_subjects", ["section_id"]
    )

    op.create_table(
        "subject_schedules",
        *base_columns(),
        uuid_column("subject_id", nullable=False),
        uuid_column("section_id", nullable=False),
        uuid_column("teacher_id", nullable=False),
        uuid_column("room_id", nullable=False),
        uuid_column("school_id"),
        sa.Column("days_of_week", postgresql.ARRAY(sa.Integer()), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["section_id"], ["sections.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["teacher_id"], ["users.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["room_id"], ["rooms.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.CheckConstraint("end_time > start_time", name="ck_subject_schedules_time_range"),
    )
    op.create_index(
        op.f("ix_subject_schedules_section_id"), "subject_schedules", ["section_id"]
    )
    op.create_index(
        op.f("ix_subject_schedules_teacher_id"), "subject_schedules", ["teacher_id"]
    )
    op.create_index(op.f("ix_subject_schedules_room_id"), "subject_schedules", ["room_id"])
    op.create_index(
        "ix_subject_schedules_school_year", "subject_schedules", ["school_id", "school_year"]
    )

    # Enrollment
    op.create_table(
        "enrollments",
        *base_columns(),
        uuid_column("school_id"),
        uuid_column("student_id", nullable=False),
        uuid_column("section_id", nullable=False),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.Column("grade_level", sa.Integer(), nullable=False),
        sa.Column("enrollment_date", sa.Date(), nullable=False),
        sa.Column(
            "status",
            enum("enrollment_request_status"),
            nullable=False,
            server_default="approved",
        ),
        uuid_column("enrolled_by"),
        uuid_column("approved_by"),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["section_id"], ["sections.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["enrolled_by"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["approved_by"], ["users.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("student_id", "school_year", name="uq_enrollments_student_year"),
    )
    op.create_index(op.f("ix_enrollments_school_id"), "enrollments", ["school_id"])
    op.create_index(op.f("ix_enrollments_section_id"), "enrollments", ["section_id"])

    op.create_table(
        "gpa_thresholds",
        *base_columns(),
        uuid_column("school_id", nullable=False),
        sa.Column(
            "homogeneous_fast_learner_min",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="90",
        ),
        sa.Column(
            "homogeneous_crack_section_max",
            sa.Numeric(precision=5, scale=2),
            nullable=False,
            server_default="75",
        ),
        sa.Column("heterogeneous_enabled", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column(
            "homogeneous_random_enabled", sa.Boolean(), nullable=False, server_default="true"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("school_id"),
    )

    # Grades and health (SF8)
    op.create_table(
        "grades",
        *base_columns(),
        uuid_column("student_id", nullable=False),
        uuid_column("subject_id", nullable=False),
        uuid_column("section_id", nullable=False),
        sa.Column("grading_period", sa.Integer(), nullable=False),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.Column("grade", sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column("remarks", sa.String(length=50), nullable=True),
        uuid_column("teacher_id"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["section_id"], ["sections.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["teacher_id"], ["users.id"], ondelete="SET NULL"),
        sa.UniqueConstraint(
            "student_id",
            "subject_id",
            "section_id",
            "grading_period",
            "school_year",
            name="uq_grades_student_subject_section_period_year",
        ),
        sa.CheckConstraint("grading_period BETWEEN 1 AND 4", name="ck_grades_grading_period"),
        sa.CheckConstraint("grade BETWEEN 0 AND 100", name="ck_grades_grade_range"),
    )
    op.create_index(op.f("ix_grades_student_id"), "grades", ["student_id"])
    op.create_index(op.f("ix_grades_section_id"), "grades", ["section_id"])

    op.create_table(
        "learner_health",
        *base_columns(),
        uuid_column("student_id", nullable=False),
        uuid_column("section_id", nullable=False),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.Column("height_cm", sa.Numeric(precision=5, scale=1), nullable=True),
        sa.Column("weight_kg", sa.Numeric(precision=5, scale=1), nullable=True),
        sa.Column("nutritional_status", enum("nutritional_status"), nullable=True),
        sa.Column("height_for_age", enum("height_for_age"), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("measured_at", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["section_id"], ["sections.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "student_id",
            "section_id",
            "school_year",
            name="uq_learner_health_student_section_year",
        ),
    )
    op.create_index(op.f("ix_learner_health_section_id"), "learner_health", ["section_id"])

    # Books (SF3)
    op.create_table(
        "books",
        *base_columns(),
        deleted_at(),
        uuid_column("school_id"),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("subject_area", sa.String(length=100), nullable=False),
        sa.Column("grade_level", sa.Integer(), nullable=False),
        sa.Column("isbn", sa.String(length=20), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
    )
    op.create_index(op.f("ix_books_school_id"), "books", ["school_id"])

    op.create_table(
        "book_issuances",
        *base_columns(),
        uuid_column("student_id", nullable=False),
        uuid_column("book_id", nullable=False),
        uuid_column("section_id", nullable=False),
        uuid_column("school_id"),
        sa.Column("school_year", sa.String(length=9), nullable=False),
        sa.Column("date_issued", sa.Date(), nullable=False),
        sa.Column("date_returned", sa.Date(), nullable=True),
        sa.Column("condition_on_return", sa.String(length=100), nullable=True),
        sa.Column("return_code", enum("book_return_code"), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        uuid_column("issued_by"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["section_id"], ["sections.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["issued_by"], ["users.id"], ondelete="SET NULL"),
        sa.UniqueConstraint(
            "student_id", "book_id", "school_year", name="uq_book_issuances_student_book_year"
        ),
    )
    op.create_index(op.f("ix_book_issuances_section_id"), "book_issuances", ["section_id"])

    # Public document requests
    op.create_table(
        "form_requests",
        *base_columns(),
        uuid_column("school_id"),
        sa.Column("request_type", enum("document_request_type"), nullable=False),
        sa.Column("student_lrn", sa.String(length=12), nullable=False),
        uuid_column("student_id"),
        sa.Column("requestor_name", sa.String(length=200), nullable=False),
        sa.Column("requestor_contact", sa.String(length=100), nullable=False),
        sa.Column("requestor_relationship", sa.String(length=50), nullable=False),
        sa.Column("purpose", sa.Text(), nullable=False),
        sa.Column(
            "status", enum("form_request_status"), nullable=False, server_default="pending"
        ),
        sa.Column(
            "requested_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        uuid_column("approved_by"),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["school_id"], ["schools.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["approved_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(op.f("ix_form_requests_school_id"), "form_requests", ["school_id"])
    op.create_index(
        "ix_form_requests_lrn_type", "form_requests", ["student_lrn", "request_type"]
    )
    op.create_index("ix_form_requests_status", "form_requests", ["status"])

    # Procurement
    op.create_table(
        "purchase_orders",
        *base_columns(),
        sa.Column("pr_number", sa.String(length=50), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column(
            "status", enum("purchase_order_status"), nullable=False, server_default="draft"
        ),
        sa.Column(
            "lots",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        sa.Column("office_division", sa.String(length=200), nullable=True),
        sa.Column("purpose", sa.Text(), nullable=True),
        sa.Column("source_of_funds", sa.String(length=200), nullable=True),
        sa.Column("mode_of_procurement", sa.String(length=200), nullable=True),
        sa.Column("delivery_period", sa.String(length=200), nullable=True),
        sa.Column("delivery_location", sa.String(length=200), nullable=True),
        sa.Column("terms_of_payment", sa.String(length=200), nullable=True),
        sa.Column("particulars", sa.Text(), nullable=True),
        sa.Column("prepared_by_name", sa.String(length=200), nullable=True),
        sa.Column("prepared_by_position", sa.String(length=200), nullable=True),
        sa.Column("requester_name", sa.String(length=200), nullable=True),
        sa.Column("requester_position", sa.String(length=200), nullable=True),
        sa.Column("approver_name", sa.String(length=200), nullable=True),
        sa.Column("approver_position", sa.String(length=200), nullable=True),
        uuid_column("created_by"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(
        op.f("ix_purchase_orders_pr_number"), "purchase_orders", ["pr_number"], unique=True
    )

    # Medical assistance
    op.create_table(
        "hospitals",
        *base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("hospital_director", sa.String(length=200), nullable=True),
        sa.Column("position", sa.String(length=200), nullable=True),
        sa.Column("full_hospital_name", sa.String(length=300), nullable=True),
        sa.Column("greeting_name", sa.String(length=200), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "medical_assistance",
        *base_columns(),
        uuid_column("hospital_id", nullable=False),
        sa.Column("total_bill_amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            "philhealth_granted_amount", sa.Numeric(precision=12, scale=2), nullable=True
        ),
        sa.Column("room_type", sa.String(length=50), nullable=True),
        sa.Column("diagnosis", sa.Text(), nullable=True),
        sa.Column("remarks", sa.Text(), nullable=True),
        sa.Column("reason_not_ward", sa.Text(), nullable=True),
        sa.Column("reason_not_mhars", sa.Text(), nullable=True),
        sa.Column("patient_fullname", sa.String(length=200), nullable=False),
        sa.Column("patient_address", sa.Text(), nullable=True),
        sa.Column("patient_age_value", sa.Integer(), nullable=False),
        sa.Column("patient_age_unit", enum("age_unit"), nullable=False),
        sa.Column("patient_gender", sa.String(length=20), nullable=False),
        sa.Column("patient_category", sa.String(length=100), nullable=True),
        sa.Column("patient_contact_number", sa.String(length=30), nullable=True),
        sa.Column("requester_fullname", sa.String(length=200), nullable=False),
        sa.Column("requester_address", sa.Text(), nullable=True),
        sa.Column("requester_age_value", sa.Integer(), nullable=True),
        sa.Column("requester_age_unit", enum("age_unit"), nullable=True),
        sa.Column("requester_gender", sa.String(length=20), nullable=True),
        sa.Column("requester_contact_number", sa.String(length=30), nullable=True),
        sa.Column("requester_relationship", sa.String(length=50), nullable=True),
        sa.Column("family_composition", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("doctors", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column(
            "status",
            enum("medical_assistance_status"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "access_type", enum("medical_access_type"), nullable=False, server_default="LGU"
        ),
        sa.Column("lgu_amount", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("maifip_amount", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("dswd_amount", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("lgu_gl_no", sa.Integer(), nullable=True),
        sa.Column("maifip_gl_no", sa.Integer(), nullable=True),
        sa.Column("dswd_gl_no", sa.Integer(), nullable=True),
        sa.Column("date_approved", sa.Date(), nullable=True),
        uuid_column("created_by"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["hospital_id"], ["hospitals.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(
        op.f("ix_medical_assistance_hospital_id"), "medical_assistance", ["hospital_id"]
    )
    op.create_index("ix_medical_assistance_status", "medical_assistance", ["status"])


def downgrade() -> None:
    """Drop all tables (reverse dependency order) and enum types."""
    for table in (
        "medical_assistance",
        "hospitals",
        "purchase_orders",
        "form_requests",
        "book_issuances",
        "books",
        "learner_health",
        "grades",
        "gpa_thresholds",
        "enrollments",
        "subject_schedules",
        "section_subjects",
        "section_students",
        "students",
        "sections",
        "subjects",
        "rooms",
        "users",
        "schools",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for name in reversed(list(ENUMS)):
        postgresql.ENUM(name=name).drop(bind, checkfirst=True)
