"""
Form Request Schemas

Public schemas expose as little of the learner as possible: the LRN lookup
returns the name and school only.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from division_sms.modules.form_requests.models import DocumentRequestType, FormRequestStatus

LRN_PATTERN = r"^\d{12}$"

REQUEST_TYPE_LABELS: dict[DocumentRequestType, str] = {
    DocumentRequestType.FORM137: "Form 137",
    DocumentRequestType.DIPLOMA: "Diploma",
}


# ============================================
# Public
# ============================================


class StudentLookupResponse(BaseModel):
    """Result of a public LRN lookup."""

    lrn: str
    first_name: str
    last_name: str
    school_id: str | None
    school_name: str | None


class FormRequestSubmit(BaseModel):
    """Public request for one or more documents of a learner."""

    student_lrn: str = Field(..., pattern=LRN_PATTERN)
    request_types: list[DocumentRequestType] = Field(..., min_length=1)
    requestor_name: str = Field(..., min_length=1, max_length=200)
    requestor_contact: str = Field(..., min_length=1, max_length=100)
    requestor_relationship: str = Field(..., min_length=1, max_length=50)
    purpose: str = Field(..., min_length=1, max_length=2000)

    @field_validator("student_lrn", mode="before")
    @classmethod
    def strip_lrn(cls, value: str) -> str:
        return value.strip() if isinstance(value, str) else value

    @field_validator("request_types")
    @classmethod
    def dedupe_types(cls, value: list[DocumentRequestType]) -> list[DocumentRequestType]:
        return list(dict.fromkeys(value))


class PublicFormRequestResponse(BaseModel):
    """What a requestor can see about their request."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    request_type: DocumentRequestType
    student_lrn: str
    status: FormRequestStatus
    requested_at: datetime
    approved_at: datetime | None
    completed_at: datetime | None
    remarks: str | None


class FormRequestSubmitResponse(BaseModel):
    created: list[PublicFormRequestResponse]
    skipped: list[DocumentRequestType] = Field(
        default_factory=list,
        description="Types that already have a pending or approved request",
    )


# ============================================
# Staff
# ============================================


class FormRequestResponse(PublicFormRequestResponse):
    school_id: str | None
    student_id: str | None
    requestor_name: str
    requestor_contact: str
    requestor_relationship: str
    purpose: str
    approved_by: str | None


class FormRequestDecision(BaseModel):
    remarks: str | None = Field(None, max_length=1000)
