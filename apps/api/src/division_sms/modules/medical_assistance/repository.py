"""
Medical Assistance Repository

Hospitals and assistance records. Assistance rows load their hospital
eagerly (joined) since guarantee letters always need it.
"""

import logging
from datetime import date
from typing import Any

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.medical_assistance.models import (
    AccessType,
    Hospital,
    MedicalAssistance,
    MedicalAssistanceStatus,
)
from division_sms.modules.shared.pagination import paginate

logger = logging.getLogger(__name__)


# ============================================
# Hospitals
# ============================================


async def create_hospital(db: AsyncSession, **fields: Any) -> Hospital:
    hospital = Hospital(**fields)
    db.add(hospital)
    await db.flush()
    await db.refresh(hospital)

    logger.info(f"Created hospital: {hospital.id} ({hospital.name})")
    return hospital


async def get_hospital(db: AsyncSession, id: str) -> Hospital | None:
    result = await db.execute(select(Hospital).where(Hospital.id == str(id)))
    return result.scalar_one_or_none()


async def list_hospitals(
    db: AsyncSession,
    *,
    search: str | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Hospital], int]:
    query = select(Hospital)

    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(Hospital.name.ilike(pattern), Hospital.full_hospital_name.ilike(pattern))
        )
    if is_active is not None:
        query = query.where(Hospital.is_active == is_active)

    query = query.order_by(Hospital.name)
    return await paginate(db, query, skip, limit)


async def update_hospital(db: AsyncSession, hospital: Hospital, **fields: Any) -> Hospital:
    for key, value in fields.items():
        setattr(hospital, key, value)

    await db.flush()
    await db.refresh(hospital)
    return hospital


async def delete_hospital(db: AsyncSession, hospital: Hospital) -> None:
    await db.execute(delete(Hospital).where(Hospital.id == hospital.id))
    await db.flush()


# ============================================
# Assistance
# ============================================


async def create(db: AsyncSession, **fields: Any) -> MedicalAssistance:
    assistance = MedicalAssistance(**fields)
    db.add(assistance)
    await db.flush()
    return await get_by_id(db, assistance.id, populate_existing=True)


async def get_by_id(
    db: AsyncSession, id: str, *, populate_existing: bool = False
) -> MedicalAssistance | None:
    query = select(MedicalAssistance).where(MedicalAssistance.id == str(id))
    if populate_existing:
        query = query.execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def list_assistance(
    db: AsyncSession,
    *,
    status: MedicalAssistanceStatus | None = None,
    access_type: AccessType | None = None,
    hospital_id: str | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[MedicalAssistance], int]:
    query = select(MedicalAssistance)

    if status:
        query = query.where(MedicalAssistance.status == status)
    if access_type:
        query = query.where(MedicalAssistance.access_type == access_type)
    if hospital_id:
        query = query.where(MedicalAssistance.hospital_id == hospital_id)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                MedicalAssistance.patient_fullname.ilike(pattern),
                MedicalAssistance.requester_fullname.ilike(pattern),
            )
        )

    query = query.order_by(MedicalAssistance.created_at.desc())
    return await paginate(db, query, skip, limit)


async def next_gl_number(
    db: AsyncSession, column_name: str, year_start: date, year_end: date
) -> int:
    """Next sequence for a program's GL numbers within the approval year."""
    column = getattr(MedicalAssistance, column_name)
    result = await db.execute(
        select(func.max(column)).where(
            MedicalAssistance.date_approved >= year_start,
            MedicalAssistance.date_approved < year_end,
        )
    )
    return (result.scalar() or 0) + 1


async def update(
    db: AsyncSession, assistance: MedicalAssistance, **fields: Any
) -> MedicalAssistance:
    for key, value in fields.items():
        setattr(assistance, key, value)

    await db.flush()
    return await get_by_id(db, assistance.id, populate_existing=True)


async def delete_assistance(db: AsyncSession, assistance: MedicalAssistance) -> None:
    await db.delete(assistance)
    await db.flush()
