"""
Service Errors

Every service raises subclasses of ServiceError. The application registers
``service_error_handler`` so routers never translate errors by hand.

Database constraint violations are mapped by PostgreSQL SQLSTATE:
- 23505 unique_violation      -> DUPLICATE_RECORD (409)
- 23503 foreign_key_violation -> RECORD_IN_USE (409)
"""

import logging
from typing import Any, NoReturn

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 400,
        extra: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.extra = extra or {}
        super().__init__(message)

    def to_detail(self) -> dict[str, Any]:
        return {"error": self.error_code, "message": self.message, **self.extra}


class NotFoundError(ServiceError):
    """Raised when a record does not exist (or is soft-deleted)."""

    def __init__(self, entity: str, entity_id: str | None = None):
        message = f"{entity} {entity_id} not found" if entity_id else f"{entity} not found"
        super().__init__(
            message=message,
            error_code=f"{entity.upper().replace(' ', '_')}_NOT_FOUND",
            status_code=404,
        )


class ValidationFailedError(ServiceError):
    """Raised when input passes schema validation but breaks a business rule."""

    def __init__(self, message: str, error_code: str = "VALIDATION_ERROR"):
        super().__init__(message=message, error_code=error_code, status_code=400)


class DuplicateRecordError(ServiceError):
    """Raised when a record would violate a uniqueness rule."""

    def __init__(self, message: str = "A record with the same values already exists."):
        super().__init__(message=message, error_code="DUPLICATE_RECORD", status_code=409)


class RecordInUseError(ServiceError):
    """Raised when a record is still referenced by other records."""

    def __init__(self, message: str = "This record is in use and cannot be deleted."):
        super().__init__(message=message, error_code="RECORD_IN_USE", status_code=409)


class PermissionDeniedError(ServiceError):
    """Raised when the caller may not act on a record."""

    def __init__(self, message: str = "You do not have permission to perform this action."):
        super().__init__(message=message, error_code="FORBIDDEN", status_code=403)


class InvalidStateError(ServiceError):
    """Raised when a status transition is not allowed."""

    def __init__(self, message: str, error_code: str = "INVALID_STATE"):
        super().__init__(message=message, error_code=error_code, status_code=409)


def integrity_error_code(e: IntegrityError) -> str | None:
    """
    Extract the SQLSTATE from an IntegrityError.

    asyncpg exposes ``sqlstate`` on the driver exception, which SQLAlchemy
    wraps; psycopg exposes ``pgcode``.
    """
    candidates = [e.orig, getattr(e.orig, "__cause__", None)]
    for candidate in candidates:
        if candidate is None:
            continue
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def raise_for_integrity_error(
    e: IntegrityError,
    *,
    duplicate_message: str | None = None,
    in_use_message: str | None = None,
) -> NoReturn:
    """
    Re-raise an IntegrityError as the matching ServiceError.

    Unknown constraint violations propagate unchanged.
    """
    code = integrity_error_code(e)
    if code == UNIQUE_VIOLATION:
        raise (
            DuplicateRecordError(duplicate_message) if duplicate_message else DuplicateRecordError()
        ) from e
    if code == FOREIGN_KEY_VIOLATION:
        raise (RecordInUseError(in_use_message) if in_use_message else RecordInUseError()) from e

    logger.error(f"Unhandled integrity error (sqlstate={code}): {e}")
    raise e


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError as ``{"detail": {"error": ..., "message": ...}}``."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.error_code} - {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path}: {exc.error_code} - {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()})
