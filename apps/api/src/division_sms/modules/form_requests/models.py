"""
Form Request Models

Public requests for a learner's Form 137 (permanent record) or diploma.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from division_sms.modules.shared import BaseModel, pg_enum


class DocumentRequestType(str, Enum):
    FORM137 = "form137"
    DIPLOMA = "diploma"


class FormRequestStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


class FormRequest(BaseModel):
    __tablename__ = "form_requests"

    school_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("schools.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    request_type: Mapped[DocumentRequestType] = mapped_column(
        pg_enum(DocumentRequestType, "document_request_type"), nullable=False
    )
    student_lrn: Mapped[str] = mapped_column(String(12), nullable=False)
    student_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("students.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Requestor
    requestor_name: Mapped[str] = mapped_column(String(200), nullable=False)
    requestor_contact: Mapped[str] = mapped_column(String(100), nullable=False)
    requestor_relationship: Mapped[str] = mapped_column(String(50), nullable=False)
    purpose: Mapped[str] = mapped_column(Text, nullable=False)

    # Status tracking
    status: Mapped[FormRequestStatus] = mapped_column(
        pg_enum(FormRequestStatus, "form_request_status"),
        nullable=False,
        default=FormRequestStatus.PENDING,
    )
    requested_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    approved_by: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_form_requests_lrn_type", "student_lrn", "request_type"),
        Index("ix_form_requests_status", "status"),
    )
