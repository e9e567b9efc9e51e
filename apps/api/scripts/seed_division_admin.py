"""
Seed Division Admin User

Creates the initial division admin account for the Division SMS system.
Run this script once after the first migration.

Usage:
    cd apps/api
    SEED_ADMIN_EMAIL=admin@deped.gov.ph SEED_ADMIN_PASSWORD=... \
        python scripts/seed_division_admin.py
"""

import asyncio
import os

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

import division_sms.models  # noqa: F401 - registers every table for relationship resolution
from division_sms.core.config import settings
from division_sms.core.security import hash_password
from division_sms.modules.users.models import StaffRole
from division_sms.modules.users.repository import UserRepository


async def seed_division_admin() -> None:
    """Create the division admin user if it doesn't exist."""
    email = os.environ.get("SEED_ADMIN_EMAIL", "division.admin@deped.gov.ph")
    password = os.environ.get("SEED_ADMIN_PASSWORD")
    name = os.environ.get("SEED_ADMIN_NAME", "Division Administrator")

    if not password:
        raise SystemExit("SEED_ADMIN_PASSWORD must be set")

    engine = create_async_engine(settings.database_url, echo=False)
    async_session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    try:
        async with async_session() as db:
            existing_user = await UserRepository.get_by_email(db, email)
            if existing_user:
                print(f"Division admin already exists: {email}")
                print(f"  ID: {existing_user.id}")
                print(f"  Role: {existing_user.role.value}")
                return

            admin_user = await UserRepository.create(
                db,
                email=email,
                password_hash=hash_password(password),
                name=name,
                role=StaffRole.DIVISION_ADMIN,
                school_id=None,  # Division roles have no school
                must_change_password=False,
            )
            await db.commit()

            print("Division admin created successfully!")
            print(f"  Email: {admin_user.email}")
            print(f"  Name: {admin_user.name}")
            print(f"  ID: {admin_user.id}")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed_division_admin())
