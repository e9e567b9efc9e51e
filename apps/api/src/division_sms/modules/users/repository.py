"""
User Repository

Database operations for staff accounts. Soft-deleted users are never returned.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.shared.pagination import paginate
from division_sms.modules.users.models import StaffRole, User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user database operations."""

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        email: str,
        password_hash: str,
        name: str,
        role: StaffRole,
        school_id: str | None = None,
        phone: str | None = None,
        position: str | None = None,
        employee_id: str | None = None,
        must_change_password: bool = True,
    ) -> User:
        """
        Create a new user record.

        Args:
            db: Database session
            email: User's email address (unique, stored lowercase)
            password_hash: Hashed password
            name: Display name
            role: Staff role
            school_id: School ID (None for division-level roles)
            phone: Phone number (optional)
            position: Plantilla position (optional)
            employee_id: DepEd employee number (optional)
            must_change_password: Whether user must change password on next login

        Returns:
            Created User instance
        """
        user = User(
            email=email.lower(),
            password_hash=password_hash,
            name=name,
            role=role,
            school_id=school_id,
            phone=phone,
            position=position,
            employee_id=employee_id,
            is_active=True,
            must_change_password=must_change_password,
        )

        db.add(user)
        await db.flush()
        await db.refresh(user)

        logger.info(f"Created user: {user.id} - {user.email} ({user.role.value})")
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: str) -> User | None:
        result = await db.execute(
            select(User).where(User.id == str(user_id), User.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        """Case-insensitive lookup by email."""
        result = await db.execute(
            select(User).where(func.lower(User.email) == email.lower(), User.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def email_exists(db: AsyncSession, email: str) -> bool:
        user = await UserRepository.get_by_email(db, email)
        return user is not None

    @staticmethod
    async def list_all(
        db: AsyncSession,
        *,
        school_id: str | None = None,
        role: StaffRole | None = None,
        search: str | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[User], int]:
        query = select(User).where(User.deleted_at.is_(None))

        if school_id:
            query = query.where(User.school_id == school_id)
        if role:
            query = query.where(User.role == role)
        if is_active is not None:
            query = query.where(User.is_active == is_active)
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(
                    User.name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.employee_id.ilike(pattern),
                )
            )

        query = query.order_by(User.name)
        return await paginate(db, query, skip, limit)

    @staticmethod
    async def update(db: AsyncSession, user: User, **fields: Any) -> User:
        for key, value in fields.items():
            setattr(user, key, value)

        await db.flush()
        await db.refresh(user)
        return user

    @staticmethod
    async def soft_delete(db: AsyncSession, user: User) -> None:
        user.deleted_at = datetime.now(UTC)
        user.is_active = False
        await db.flush()
