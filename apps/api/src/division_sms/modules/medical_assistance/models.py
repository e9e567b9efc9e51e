"""
Medical Assistance Models

Hospitals and the assistance requests whose approval produces guarantee letters.
"""

from datetime import date
from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, Date, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from division_sms.modules.shared import BaseModel, pg_enum


class AgeUnit(str, Enum):
    YEARS = "years"
    MONTHS = "months"
    DAYS = "days"


class MedicalAssistanceStatus(str, Enum):
    PENDING = "pending"
    FOR_EVALUATION = "for evaluation"
    APPROVED = "approved"
    REJECTED = "rejected"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ENDORSED_TO_HOR = "endorsed to hor"
    ENDORSED_TO_LGU = "endorsed to lgu"


class AccessType(str, Enum):
    """Which office handles the request (LGU, House of Representatives, or a hand-off)."""

    LGU = "LGU"
    HOR = "HOR"
    LGU_TO_HOR = "LGU_TO_HOR"
    HOR_TO_LGU = "HOR_TO_LGU"


class Hospital(BaseModel):
    __tablename__ = "hospitals"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    hospital_director: Mapped[str | None] = mapped_column(String(200), nullable=True)
    position: Mapped[str | None] = mapped_column(String(200), nullable=True)
    full_hospital_name: Mapped[str | None] = mapped_column(String(300), nullable=True)
    greeting_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    assistances: Mapped[list["MedicalAssistance"]] = relationship(
        "MedicalAssistance", back_populates="hospital"
    )


class MedicalAssistance(BaseModel):
    __tablename__ = "medical_assistance"

    hospital_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("hospitals.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Bill
    total_bill_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    philhealth_granted_amount: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2), nullable=True
    )
    room_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    diagnosis: Mapped[str | None] = mapped_column(Text, nullable=True)
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)
    reason_not_ward: Mapped[str | None] = mapped_column(Text, nullable=True)
    reason_not_mhars: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Patient
    patient_fullname: Mapped[str] = mapped_column(String(200), nullable=False)
    patient_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    patient_age_value: Mapped[int] = mapped_column(Integer, nullable=False)
    patient_age_unit: Mapped[AgeUnit] = mapped_column(pg_enum(AgeUnit, "age_unit"), nullable=False)
    patient_gender: Mapped[str] = mapped_column(String(20), nullable=False)
    patient_category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    patient_contact_number: Mapped[str | None] = mapped_column(String(30), nullable=True)

    # Requester
    requester_fullname: Mapped[str] = mapped_column(String(200), nullable=False)
    requester_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    requester_age_value: Mapped[int | None] = mapped_column(Integer, nullable=True)
    requester_age_unit: Mapped[AgeUnit | None] = mapped_column(
        pg_enum(AgeUnit, "age_unit"), nullable=True
    )
    requester_gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    requester_contact_number: Mapped[str | None] = mapped_column(String(30), nullable=True)
    requester_relationship: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # [{fullname, category, remarks}] / [{doctor_name, professional_fee}]
    family_composition: Mapped[list | None] = mapped_column(JSONB, nullable=True)
    doctors: Mapped[list | None] = mapped_column(JSONB, nullable=True)

    status: Mapped[MedicalAssistanceStatus] = mapped_column(
        pg_enum(MedicalAssistanceStatus, "medical_assistance_status"),
        nullable=False,
        default=MedicalAssistanceStatus.PENDING,
    )
    access_type: Mapped[AccessType] = mapped_column(
        pg_enum(AccessType, "medical_access_type"), nullable=False, default=AccessType.LGU
    )

    # Program amounts and guarantee letter numbers
    lgu_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    maifip_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    dswd_amount: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    lgu_gl_no: Mapped[int | None] = mapped_column(Integer, nullable=True)
    maifip_gl_no: Mapped[int | None] = mapped_column(Integer, nullable=True)
    dswd_gl_no: Mapped[int | None] = mapped_column(Integer, nullable=True)
    date_approved: Mapped[date | None] = mapped_column(Date, nullable=True)

    created_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    hospital: Mapped["Hospital"] = relationship(
        "Hospital", back_populates="assistances", lazy="joined"
    )

    __table_args__ = (Index("ix_medical_assistance_status", "status"),)
