"""
Authentication and Authorization Module

Provides authentication dependencies for FastAPI endpoints.
This module handles JWT token validation, role-based access control and
school scoping using the security utilities defined in security.py.

SECURITY NOTE:
- Development mode auth bypass is ONLY enabled when PYTHON_ENV=development
- Production environments MUST set PYTHON_ENV=production to disable test tokens
"""

import logging
import os
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from division_sms.core.config import settings
from division_sms.core.security import decode_token
from division_sms.modules.users.models import StaffRole

logger = logging.getLogger(__name__)

# Security scheme for OpenAPI documentation
security = HTTPBearer(
    auto_error=True,
    description="JWT Bearer token for authentication",
)

# Role groups used by routers
DIVISION_ROLES = frozenset({StaffRole.SUPER_ADMIN, StaffRole.DIVISION_ADMIN})
SCHOOL_MANAGER_ROLES = DIVISION_ROLES | {StaffRole.SCHOOL_HEAD, StaffRole.ADMIN}
RECORDS_ROLES = SCHOOL_MANAGER_ROLES | {StaffRole.REGISTRAR}
ALL_STAFF_ROLES = frozenset(StaffRole)


@dataclass
class CurrentUser:
    """
    Represents an authenticated staff user.

    Populated from JWT claims after token validation.

    Attributes:
        id: Staff user's identifier
        email: User's email address
        role: Staff role
        school_id: School the user belongs to (None for division-level users)
        name: Display name (optional)
    """

    id: str
    email: str
    role: StaffRole
    school_id: str | None = None
    name: str | None = None

    @property
    def is_division_level(self) -> bool:
        return self.role in DIVISION_ROLES

    def __str__(self) -> str:
        return f"CurrentUser(id={self.id}, email={self.email}, role={self.role.value})"


def _is_dev_mode_safe() -> bool:
    """
    Check if development mode is safe to enable.

    Both the settings object and the raw PYTHON_ENV variable must agree
    that this is a development environment.
    """
    env_var = os.getenv("PYTHON_ENV", "").lower()

    is_safe = (
        settings.is_development
        and not settings.is_production
        and env_var not in ("production", "staging")
    )

    if is_safe:
        logger.warning(
            "SECURITY: Development auth mode is ENABLED. This MUST NOT be used in production!"
        )

    return is_safe


_DEVELOPMENT_MODE = _is_dev_mode_safe()

_DEV_DIVISION_ADMIN = CurrentUser(
    id="00000000-0000-0000-0000-000000000001",
    email="division.admin@division-sms.dev",
    role=StaffRole.DIVISION_ADMIN,
    name="Development Division Admin",
)


def _unauthorized(error: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"error": error, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


def user_from_claims(payload: dict[str, Any]) -> CurrentUser:
    """
    Build a CurrentUser from decoded access token claims.

    Raises:
        HTTPException 401: If required claims are missing or malformed,
            or the token is not an access token
    """
    token_type = payload.get("type", "access")
    if token_type != "access":
        logger.warning(f"Invalid token type: {token_type}")
        raise _unauthorized("INVALID_TOKEN_TYPE", "This endpoint requires an access token.")

    try:
        user_id = payload.get("sub")
        if not user_id:
            raise ValueError("Missing 'sub' claim in token")
        role = StaffRole(payload.get("role", ""))
    except ValueError as e:
        logger.warning(f"Invalid token claims: {e}")
        raise _unauthorized(
            "INVALID_TOKEN_CLAIMS", "Token contains invalid or missing claims."
        ) from e

    return CurrentUser(
        id=str(user_id),
        email=payload.get("email", ""),
        role=role,
        school_id=payload.get("school_id"),
        name=payload.get("name"),
    )


async def _validate_jwt_token(token: str) -> CurrentUser:
    """
    Validate JWT token and extract user claims.

    Raises:
        HTTPException 401: If token is invalid or expired
    """
    if _DEVELOPMENT_MODE and token in ("dev-token", "test-token"):
        logger.debug("Development mode: Using test token")
        return _DEV_DIVISION_ADMIN

    payload = decode_token(token)
    if payload is None:
        logger.warning("Invalid or expired JWT token")
        raise _unauthorized("INVALID_TOKEN", "Invalid or expired authentication token.")

    return user_from_claims(payload)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> CurrentUser:
    """
    FastAPI dependency that validates the bearer token and returns the user.

    Raises:
        HTTPException 401: If token is missing, invalid, or expired
    """
    user = await _validate_jwt_token(credentials.credentials)
    logger.debug(f"Authenticated user: {user.id} ({user.role.value})")
    return user


def require_roles(
    *roles: StaffRole,
) -> Callable[..., Coroutine[Any, Any, CurrentUser]]:
    """
    Build a dependency that only admits users holding one of ``roles``.

    Usage:
        @router.post("")
        async def create(user: CurrentUser = Depends(require_roles(*RECORDS_ROLES))):
            ...
    """
    allowed = frozenset(roles)

    async def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in allowed:
            logger.warning(
                f"Access denied: User {user.id} has role '{user.role.value}', "
                f"required one of {sorted(r.value for r in allowed)}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={
                    "error": "FORBIDDEN",
                    "message": "You do not have permission to perform this action.",
                },
            )
        return user

    return dependency


get_division_admin = require_roles(*DIVISION_ROLES)
get_school_manager = require_roles(*SCHOOL_MANAGER_ROLES)
get_records_staff = require_roles(*RECORDS_ROLES)


def resolve_school_id(user: CurrentUser, requested_school_id: str | None = None) -> str:
    """
    Decide which school a request operates on.

    School staff are always pinned to their own school. Division-level
    users must name the school explicitly.

    Raises:
        HTTPException 403: School staff asking for another school
        HTTPException 400: Division user without a school_id
    """
    if user.is_division_level:
        school_id = requested_school_id or user.school_id
        if not school_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "error": "SCHOOL_REQUIRED",
                    "message": "school_id is required for division-level users.",
                },
            )
        return school_id

    if not user.school_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "NO_SCHOOL_ASSIGNED",
                "message": "Your account is not assigned to a school.",
            },
        )

    if requested_school_id and requested_school_id != user.school_id:
        logger.warning(
            f"User {user.id} attempted to access school {requested_school_id} "
            f"(assigned to {user.school_id})"
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={
                "error": "FORBIDDEN",
                "message": "You can only access records of your own school.",
            },
        )

    return user.school_id


__all__ = [
    "ALL_STAFF_ROLES",
    "CurrentUser",
    "DIVISION_ROLES",
    "RECORDS_ROLES",
    "SCHOOL_MANAGER_ROLES",
    "get_current_user",
    "get_division_admin",
    "get_records_staff",
    "get_school_manager",
    "require_roles",
    "resolve_school_id",
    "user_from_claims",
]
