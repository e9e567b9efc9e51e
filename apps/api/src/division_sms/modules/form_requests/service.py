"""
Form Request Service Layer

Public side: anyone holding a learner's LRN can look the learner up and
request a Form 137 and/or a diploma. A type that already has a pending or
approved request for that LRN is skipped; if every requested type is
skipped the submission fails.

Staff side: requests follow
    pending -> approved -> completed
    pending -> rejected
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import CurrentUser
from division_sms.modules.form_requests import repository
from division_sms.modules.form_requests.models import (
    DocumentRequestType,
    FormRequest,
    FormRequestStatus,
)
from division_sms.modules.form_requests.schemas import (
    REQUEST_TYPE_LABELS,
    FormRequestSubmit,
    StudentLookupResponse,
)
from division_sms.modules.schools.repository import SchoolRepository
from division_sms.modules.shared.errors import InvalidStateError, NotFoundError
from division_sms.modules.students import repository as students_repository
from division_sms.modules.students.models import Student

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: dict[FormRequestStatus, set[FormRequestStatus]] = {
    FormRequestStatus.PENDING: {FormRequestStatus.APPROVED, FormRequestStatus.REJECTED},
    FormRequestStatus.APPROVED: {FormRequestStatus.COMPLETED},
    FormRequestStatus.REJECTED: set(),
    FormRequestStatus.COMPLETED: set(),
}


def validate_status_transition(current: FormRequestStatus, new: FormRequestStatus) -> None:
    """
    Raises:
        InvalidStateError: If the transition is not allowed
    """
    if new not in ALLOWED_TRANSITIONS.get(current, set()):
        raise InvalidStateError(
            f"Cannot change a request from '{current.value}' to '{new.value}'.",
            "INVALID_STATUS_TRANSITION",
        )


# ============================================
# Public
# ============================================


async def _get_student_by_lrn(db: AsyncSession, lrn: str) -> Student:
    student = await students_repository.get_by_lrn(db, lrn.strip())
    if not student:
        raise NotFoundError("Student")
    return student


async def lookup_student(db: AsyncSession, lrn: str) -> StudentLookupResponse:
    student = await _get_student_by_lrn(db, lrn)

    school_name = None
    if student.school_id:
        school = await SchoolRepository.get_by_id(db, student.school_id)
        school_name = school.name if school else None

    return StudentLookupResponse(
        lrn=student.lrn,
        first_name=student.first_name,
        last_name=student.last_name,
        school_id=student.school_id,
        school_name=school_name,
    )


async def submit_requests(
    db: AsyncSession,
    data: FormRequestSubmit,
) -> tuple[list[FormRequest], list[DocumentRequestType]]:
    """
    Create one request per document type.

    Returns:
        Tuple of (created requests, skipped types)

    Raises:
        NotFoundError: No student with this LRN
        InvalidStateError: REQUEST_ALREADY_EXISTS when every type was skipped
    """
    student = await _get_student_by_lrn(db, data.student_lrn)

    open_types = await repository.get_open_types(db, student.lrn)
    skipped = [t for t in data.request_types if t in open_types]
    wanted = [t for t in data.request_types if t not in open_types]

    if not wanted:
        labels = ", ".join(REQUEST_TYPE_LABELS[t] for t in skipped)
        raise InvalidStateError(
            f"There is already a pending or approved request for: {labels}.",
            "REQUEST_ALREADY_EXISTS",
        )

    created = []
    for request_type in wanted:
        created.append(
            await repository.create(
                db,
                school_id=student.school_id,
                student_id=student.id,
                student_lrn=student.lrn,
                request_type=request_type,
                requestor_name=data.requestor_name,
                requestor_contact=data.requestor_contact,
                requestor_relationship=data.requestor_relationship,
                purpose=data.purpose,
                status=FormRequestStatus.PENDING,
            )
        )
    await db.commit()

    logger.info(
        f"Form requests for LRN {student.lrn}: created {[t.value for t in wanted]}, "
        f"skipped {[t.value for t in skipped]}"
    )
    return created, skipped


async def list_requests_by_lrn(db: AsyncSession, lrn: str) -> list[FormRequest]:
    return await repository.list_by_lrn(db, lrn.strip())


async def get_request_status(db: AsyncSession, id: str, lrn: str) -> FormRequest:
    """A request is only shown to someone who also knows its LRN."""
    request = await repository.get_by_id(db, id)
    if not request or request.student_lrn != lrn.strip():
        raise NotFoundError("Request", id)
    return request


# ============================================
# Staff
# ============================================


async def get_request(db: AsyncSession, school_id: str, id: str) -> FormRequest:
    request = await repository.get_by_id(db, id)
    if not request or request.school_id != school_id:
        raise NotFoundError("Request", id)
    return request


async def list_requests(
    db: AsyncSession,
    school_id: str,
    **filters,
) -> tuple[list[FormRequest], int]:
    return await repository.list_requests(db, school_id=school_id, **filters)


async def _transition(
    db: AsyncSession,
    school_id: str,
    id: str,
    new_status: FormRequestStatus,
    remarks: str | None,
    **fields,
) -> FormRequest:
    request = await get_request(db, school_id, id)
    validate_status_transition(request.status, new_status)

    if remarks is not None:
        fields["remarks"] = remarks
    request = await repository.update(db, request, status=new_status, **fields)
    await db.commit()

    logger.info(f"Form request {id} is now {new_status.value}")
    return request


async def approve_request(
    db: AsyncSession,
    school_id: str,
    id: str,
    user: CurrentUser,
    remarks: str | None = None,
) -> FormRequest:
    return await _transition(
        db,
        school_id,
        id,
        FormRequestStatus.APPROVED,
        remarks,
        approved_by=user.id,
        approved_at=datetime.now(UTC),
    )


async def reject_request(
    db: AsyncSession,
    school_id: str,
    id: str,
    remarks: str | None = None,
) -> FormRequest:
    return await _transition(db, school_id, id, FormRequestStatus.REJECTED, remarks)


async def complete_request(
    db: AsyncSession,
    school_id: str,
    id: str,
    remarks: str | None = None,
) -> FormRequest:
    return await _transition(
        db,
        school_id,
        id,
        FormRequestStatus.COMPLETED,
        remarks,
        completed_at=datetime.now(UTC),
    )
