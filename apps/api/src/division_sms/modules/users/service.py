"""
Staff Service Layer

Who may manage whom:
- Division admins manage staff of any school, and other division admins.
- School heads and admins manage teachers, registrars and admins of their
  own school only.

New accounts get a generated temporary password and must change it on first
login. The welcome email is best-effort: a delivery failure never fails the
request.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import DIVISION_ROLES, CurrentUser
from division_sms.core.email import send_password_reset_by_admin, send_staff_welcome
from division_sms.core.security import generate_temporary_password, hash_password
from division_sms.modules.schools.repository import SchoolRepository
from division_sms.modules.shared.errors import (
    DuplicateRecordError,
    NotFoundError,
    PermissionDeniedError,
    ValidationFailedError,
    raise_for_integrity_error,
)
from division_sms.modules.users.models import (
    SCHOOL_ASSIGNABLE_ROLES,
    STAFF_ROLE_LABELS,
    StaffRole,
    User,
)
from division_sms.modules.users.repository import UserRepository
from division_sms.modules.users.schemas import StaffCreate, StaffUpdate

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "A staff account with this email already exists."


def _assert_can_manage(actor: CurrentUser, school_id: str | None, role: StaffRole) -> None:
    """
    Raise PermissionDeniedError unless ``actor`` may manage a ``role`` account
    in ``school_id``.
    """
    if actor.is_division_level:
        if role == StaffRole.SUPER_ADMIN and actor.role != StaffRole.SUPER_ADMIN:
            raise PermissionDeniedError("Only a super admin can manage super admin accounts.")
        return

    if role not in SCHOOL_ASSIGNABLE_ROLES:
        raise PermissionDeniedError(
            f"You cannot manage {STAFF_ROLE_LABELS[role]} accounts."
        )
    if not actor.school_id or school_id != actor.school_id:
        raise PermissionDeniedError("You can only manage staff of your own school.")


async def get_staff(db: AsyncSession, actor: CurrentUser, user_id: str) -> User:
    user = await UserRepository.get_by_id(db, user_id)
    if not user:
        raise NotFoundError("User", user_id)
    if not actor.is_division_level and user.school_id != actor.school_id:
        # Hide staff of other schools entirely
        raise NotFoundError("User", user_id)
    return user


async def list_staff(
    db: AsyncSession,
    actor: CurrentUser,
    *,
    school_id: str | None = None,
    role: StaffRole | None = None,
    search: str | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[User], int]:
    if not actor.is_division_level:
        school_id = actor.school_id
    return await UserRepository.list_all(
        db,
        school_id=school_id,
        role=role,
        search=search,
        is_active=is_active,
        skip=skip,
        limit=limit,
    )


async def create_staff(
    db: AsyncSession,
    actor: CurrentUser,
    data: StaffCreate,
) -> tuple[User, bool]:
    """
    Create a staff account and email its temporary password.

    Returns:
        Tuple of (user, whether the welcome email was sent)

    Raises:
        ValidationFailedError: School-level role without a school
        PermissionDeniedError: Actor may not create this account
        NotFoundError: Unknown school
        DuplicateRecordError: Email already registered
    """
    if data.role in DIVISION_ROLES:
        school_id = None
    else:
        school_id = data.school_id if actor.is_division_level else actor.school_id
        if not school_id:
            raise ValidationFailedError(
                "school_id is required for school-level roles.", error_code="SCHOOL_REQUIRED"
            )

    _assert_can_manage(actor, school_id, data.role)

    school_name = None
    if school_id:
        school = await SchoolRepository.get_by_id(db, school_id)
        if not school:
            raise NotFoundError("School", school_id)
        school_name = school.name

    if await UserRepository.email_exists(db, data.email):
        raise DuplicateRecordError(DUPLICATE_EMAIL)

    temp_password = generate_temporary_password()
    try:
        user = await UserRepository.create(
            db,
            email=data.email,
            password_hash=hash_password(temp_password),
            name=data.name,
            role=data.role,
            school_id=school_id,
            phone=data.phone,
            position=data.position,
            employee_id=data.employee_id,
            must_change_password=True,
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_EMAIL)

    logger.info(
        f"User {actor.id} created staff {user.id} ({user.role.value}) in school {school_id}"
    )

    email_sent = await send_staff_welcome(
        to_email=user.email,
        staff_name=user.name,
        school_name=school_name,
        role_label=STAFF_ROLE_LABELS[user.role],
        temp_password=temp_password,
    )
    if not email_sent:
        logger.warning(f"Welcome email to {user.email} was not delivered")

    return user, email_sent


async def update_staff(
    db: AsyncSession,
    actor: CurrentUser,
    user_id: str,
    data: StaffUpdate,
) -> User:
    user = await get_staff(db, actor, user_id)
    _assert_can_manage(actor, user.school_id, user.role)

    fields = data.model_dump(exclude_unset=True)
    new_role = fields.get("role")
    if new_role is not None and new_role != user.role:
        _assert_can_manage(actor, user.school_id, new_role)
        if (new_role in DIVISION_ROLES) != (user.role in DIVISION_ROLES):
            raise ValidationFailedError(
                "A school-level account cannot become a division-level account (or vice versa)."
            )

    user = await UserRepository.update(db, user, **fields)
    await db.commit()
    return user


async def reset_staff_password(db: AsyncSession, actor: CurrentUser, user_id: str) -> bool:
    """
    Replace a staff member's password with a new temporary one and email it.

    Returns:
        Whether the email was sent
    """
    user = await get_staff(db, actor, user_id)
    _assert_can_manage(actor, user.school_id, user.role)

    temp_password = generate_temporary_password()
    await UserRepository.update(
        db, user, password_hash=hash_password(temp_password), must_change_password=True
    )
    await db.commit()

    logger.info(f"User {actor.id} reset the password of {user.id}")
    return await send_password_reset_by_admin(
        to_email=user.email, staff_name=user.name, temp_password=temp_password
    )


async def delete_staff(db: AsyncSession, actor: CurrentUser, user_id: str) -> None:
    if user_id == actor.id:
        raise ValidationFailedError("You cannot delete your own account.")

    user = await get_staff(db, actor, user_id)
    _assert_can_manage(actor, user.school_id, user.role)

    await UserRepository.soft_delete(db, user)
    await db.commit()
    logger.info(f"User {actor.id} deleted staff {user_id}")
