"""
Medical Assistance Schemas
"""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from division_sms.modules.medical_assistance.models import (
    AccessType,
    AgeUnit,
    MedicalAssistanceStatus,
)


# ============================================
# Hospitals
# ============================================


class HospitalCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: str | None = None
    hospital_director: str | None = Field(None, max_length=200)
    position: str | None = Field(None, max_length=200)
    full_hospital_name: str | None = Field(None, max_length=300)
    greeting_name: str | None = Field(None, max_length=200)


class HospitalUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    address: str | None = None
    hospital_director: str | None = Field(None, max_length=200)
    position: str | None = Field(None, max_length=200)
    full_hospital_name: str | None = Field(None, max_length=300)
    greeting_name: str | None = Field(None, max_length=200)
    is_active: bool | None = None


class HospitalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    address: str | None
    hospital_director: str | None
    position: str | None
    full_hospital_name: str | None
    greeting_name: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


# ============================================
# Assistance
# ============================================


class FamilyMember(BaseModel):
    fullname: str = Field(..., min_length=1, max_length=200)
    category: str | None = Field(None, max_length=100)
    remarks: str | None = None


class Doctor(BaseModel):
    doctor_name: str = Field(..., min_length=1, max_length=200)
    professional_fee: Decimal | None = Field(None, ge=0)


class MedicalAssistanceFields(BaseModel):
    """Fields shared by create and update; all optional here."""

    philhealth_granted_amount: Decimal | None = Field(None, ge=0)
    room_type: str | None = Field(None, max_length=50)
    diagnosis: str | None = None
    remarks: str | None = None
    reason_not_ward: str | None = None
    reason_not_mhars: str | None = None

    patient_address: str | None = None
    patient_category: str | None = Field(None, max_length=100)
    patient_contact_number: str | None = Field(None, max_length=30)

    requester_address: str | None = None
    requester_age_value: int | None = Field(None, ge=0, le=150)
    requester_age_unit: AgeUnit | None = None
    requester_gender: str | None = Field(None, max_length=20)
    requester_contact_number: str | None = Field(None, max_length=30)
    requester_relationship: str | None = Field(None, max_length=50)

    family_composition: list[FamilyMember] | None = None
    doctors: list[Doctor] | None = None

    access_type: AccessType | None = None
    lgu_amount: Decimal | None = Field(None, ge=0)
    maifip_amount: Decimal | None = Field(None, ge=0)
    dswd_amount: Decimal | None = Field(None, ge=0)
    lgu_gl_no: int | None = Field(None, ge=0)
    maifip_gl_no: int | None = Field(None, ge=0)
    dswd_gl_no: int | None = Field(None, ge=0)
    date_approved: date | None = None


class MedicalAssistanceCreate(MedicalAssistanceFields):
    hospital_id: str
    total_bill_amount: Decimal = Field(..., ge=0)
    patient_fullname: str = Field(..., min_length=1, max_length=200)
    patient_age_value: int = Field(..., ge=0, le=150)
    patient_age_unit: AgeUnit = AgeUnit.YEARS
    patient_gender: str = Field(..., min_length=1, max_length=20)
    requester_fullname: str = Field(..., min_length=1, max_length=200)

    @model_validator(mode="after")
    def validate_amounts(self) -> "MedicalAssistanceCreate":
        granted = self.philhealth_granted_amount or Decimal("0")
        if granted > self.total_bill_amount:
            raise ValueError("philhealth_granted_amount cannot exceed total_bill_amount")
        return self


class MedicalAssistanceUpdate(MedicalAssistanceFields):
    hospital_id: str | None = None
    total_bill_amount: Decimal | None = Field(None, ge=0)
    patient_fullname: str | None = Field(None, min_length=1, max_length=200)
    patient_age_value: int | None = Field(None, ge=0, le=150)
    patient_age_unit: AgeUnit | None = None
    patient_gender: str | None = Field(None, min_length=1, max_length=20)
    requester_fullname: str | None = Field(None, min_length=1, max_length=200)


class StatusUpdate(BaseModel):
    status: MedicalAssistanceStatus
    remarks: str | None = None


class HospitalSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class MedicalAssistanceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    hospital_id: str
    hospital: HospitalSummary | None = None
    total_bill_amount: Decimal
    philhealth_granted_amount: Decimal | None
    room_type: str | None
    diagnosis: str | None
    remarks: str | None
    reason_not_ward: str | None
    reason_not_mhars: str | None

    patient_fullname: str
    patient_address: str | None
    patient_age_value: int
    patient_age_unit: AgeUnit
    patient_gender: str
    patient_category: str | None
    patient_contact_number: str | None

    requester_fullname: str
    requester_address: str | None
    requester_age_value: int | None
    requester_age_unit: AgeUnit | None
    requester_gender: str | None
    requester_contact_number: str | None
    requester_relationship: str | None

    family_composition: list[FamilyMember] | None
    doctors: list[Doctor] | None

    status: MedicalAssistanceStatus
    access_type: AccessType
    lgu_amount: Decimal | None
    maifip_amount: Decimal | None
    dswd_amount: Decimal | None
    lgu_gl_no: int | None
    maifip_gl_no: int | None
    dswd_gl_no: int | None
    date_approved: date | None
    created_by: str | None
    created_at: datetime
    updated_at: datetime
