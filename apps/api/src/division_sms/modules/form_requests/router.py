"""
Form Requests Public Router

Endpoints used by parents, guardians and former learners. They require no
authentication; the LRN is the only credential.

Endpoints:
- GET /public/students/{lrn} - Look up a learner by LRN
- POST /public/form-requests - Request a Form 137 and/or diploma
- GET /public/form-requests?lrn= - Requests filed for an LRN
- GET /public/form-requests/{id}?lrn= - Status of one request

Security:
- Every endpoint is rate limited per client IP (Redis, in-memory fallback)
- Lookups return the learner's name and school only
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.database import get_db
from division_sms.core.rate_limit import rate_limit
from division_sms.modules.form_requests import service
from division_sms.modules.form_requests.schemas import (
    LRN_PATTERN,
    FormRequestSubmit,
    FormRequestSubmitResponse,
    PublicFormRequestResponse,
    StudentLookupResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

lookup_rate_limit = rate_limit("lrn_lookup", limit=20, window_seconds=60)
submit_rate_limit = rate_limit("form_requests", limit=5, window_seconds=300)


@router.get(
    "/students/{lrn}",
    response_model=StudentLookupResponse,
    summary="Look Up Learner by LRN",
    description="""
Check that a Learner Reference Number belongs to a learner before filing a
request. Returns the learner's name and school only.
""",
    responses={
        404: {
            "description": "No learner with this LRN",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {"error": "STUDENT_NOT_FOUND", "message": "Student not found"}
                    }
                }
            },
        },
        429: {"description": "Too many lookups from this address"},
    },
    dependencies=[Depends(lookup_rate_limit)],
)
async def lookup_student(
    lrn: str,
    db: AsyncSession = Depends(get_db),
) -> StudentLookupResponse:
    return await service.lookup_student(db, lrn)


@router.post(
    "/form-requests",
    response_model=FormRequestSubmitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit Document Request",
    description="""
Request a learner's Form 137 and/or diploma.

**Duplicate Prevention:**
- A document type that already has a pending or approved request for the
  LRN is skipped and listed under ``skipped``
- If every requested type is skipped the request fails with 409

Keep the returned request IDs to check the status later.
""",
    responses={
        404: {"description": "No learner with this LRN"},
        409: {
            "description": "Every requested document already has an open request",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "error": "REQUEST_ALREADY_EXISTS",
                            "message": "There is already a pending or approved request for: "
                            "Form 137.",
                        }
                    }
                }
            },
        },
        429: {"description": "Too many requests from this address"},
    },
    dependencies=[Depends(submit_rate_limit)],
)
async def submit_requests(
    data: FormRequestSubmit,
    db: AsyncSession = Depends(get_db),
) -> FormRequestSubmitResponse:
    created, skipped = await service.submit_requests(db, data)
    return FormRequestSubmitResponse(
        created=[PublicFormRequestResponse.model_validate(r) for r in created],
        skipped=skipped,
    )


@router.get(
    "/form-requests",
    response_model=list[PublicFormRequestResponse],
    summary="List Requests by LRN",
    dependencies=[Depends(lookup_rate_limit)],
)
async def list_requests_by_lrn(
    lrn: str = Query(..., pattern=LRN_PATTERN),
    db: AsyncSession = Depends(get_db),
) -> list[PublicFormRequestResponse]:
    requests = await service.list_requests_by_lrn(db, lrn)
    return [PublicFormRequestResponse.model_validate(r) for r in requests]


@router.get(
    "/form-requests/{request_id}",
    response_model=PublicFormRequestResponse,
    summary="Get Request Status",
    dependencies=[Depends(lookup_rate_limit)],
)
async def get_request_status(
    request_id: str,
    lrn: str = Query(..., pattern=LRN_PATTERN),
    db: AsyncSession = Depends(get_db),
) -> PublicFormRequestResponse:
    request = await service.get_request_status(db, request_id, lrn)
    return PublicFormRequestResponse.model_validate(request)
