"""
Room Repository
"""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.rooms.models import Room
from division_sms.modules.shared.pagination import paginate


async def create(db: AsyncSession, **fields: Any) -> Room:
    room = Room(**fields)
    db.add(room)
    await db.flush()
    await db.refresh(room)
    return room


async def get_by_id(db: AsyncSession, id: str) -> Room | None:
    result = await db.execute(select(Room).where(Room.id == str(id), Room.deleted_at.is_(None)))
    return result.scalar_one_or_none()


async def list_rooms(
    db: AsyncSession,
    *,
    school_id: str,
    search: str | None = None,
    room_type: str | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Room], int]:
    query = select(Room).where(Room.school_id == school_id, Room.deleted_at.is_(None))

    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Room.name.ilike(pattern), Room.building.ilike(pattern)))
    if room_type:
        query = query.where(Room.room_type == room_type)
    if is_active is not None:
        query = query.where(Room.is_active == is_active)

    query = query.order_by(Room.name)
    return await paginate(db, query, skip, limit)


async def update(db: AsyncSession, room: Room, **fields: Any) -> Room:
    for key, value in fields.items():
        setattr(room, key, value)

    await db.flush()
    await db.refresh(room)
    return room


async def soft_delete(db: AsyncSession, room: Room) -> None:
    room.deleted_at = datetime.now(UTC)
    await db.flush()
