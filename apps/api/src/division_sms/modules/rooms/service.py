"""
Room Service Layer
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.modules.rooms import repository
from division_sms.modules.rooms.models import Room
from division_sms.modules.rooms.schemas import RoomCreate, RoomUpdate
from division_sms.modules.shared.errors import NotFoundError, raise_for_integrity_error

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "A room with this name already exists in this school."


async def get_room(db: AsyncSession, school_id: str, id: str) -> Room:
    room = await repository.get_by_id(db, id)
    if not room or room.school_id != school_id:
        raise NotFoundError("Room", id)
    return room


async def list_rooms(
    db: AsyncSession,
    school_id: str,
    *,
    search: str | None = None,
    room_type: str | None = None,
    is_active: bool | None = None,
    skip: int = 0,
    limit: int = 10,
) -> tuple[list[Room], int]:
    return await repository.list_rooms(
        db,
        school_id=school_id,
        search=search,
        room_type=room_type,
        is_active=is_active,
        skip=skip,
        limit=limit,
    )


async def create_room(db: AsyncSession, school_id: str, data: RoomCreate) -> Room:
    try:
        room = await repository.create(
            db, **data.model_dump(exclude={"school_id"}), school_id=school_id
        )
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_NAME)

    return room


async def update_room(db: AsyncSession, school_id: str, id: str, data: RoomUpdate) -> Room:
    room = await get_room(db, school_id, id)
    try:
        room = await repository.update(db, room, **data.model_dump(exclude_unset=True))
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise_for_integrity_error(e, duplicate_message=DUPLICATE_NAME)

    return room


async def delete_room(db: AsyncSession, school_id: str, id: str) -> None:
    room = await get_room(db, school_id, id)
    await repository.soft_delete(db, room)
    await db.commit()
    logger.info(f"Soft-deleted room {id}")
