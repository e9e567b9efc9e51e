"""
Rooms Router

Endpoints:
- GET /rooms
- GET /rooms/{id}
- POST /rooms
- PATCH /rooms/{id}
- DELETE /rooms/{id}
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from division_sms.core.auth import (
    CurrentUser,
    get_current_user,
    get_school_manager,
    resolve_school_id,
)
from division_sms.core.database import get_db
from division_sms.modules.rooms import service
from division_sms.modules.rooms.schemas import RoomCreate, RoomResponse, RoomUpdate
from division_sms.modules.shared.pagination import Page, PageParams, page_params

router = APIRouter()


@router.get("", response_model=Page[RoomResponse], summary="List Rooms")
async def list_rooms(
    school_id: str | None = Query(None),
    search: str | None = Query(None, min_length=1, max_length=100),
    room_type: str | None = Query(None, max_length=50),
    is_active: bool | None = Query(None),
    page: PageParams = Depends(page_params),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> Page[RoomResponse]:
    rooms, total = await service.list_rooms(
        db,
        resolve_school_id(user, school_id),
        search=search,
        room_type=room_type,
        is_active=is_active,
        skip=page.skip,
        limit=page.limit,
    )
    return Page[RoomResponse](
        items=[RoomResponse.model_validate(r) for r in rooms],
        total=total,
        skip=page.skip,
        limit=page.limit,
    )


@router.get("/{room_id}", response_model=RoomResponse, summary="Get Room")
async def get_room(
    room_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
) -> RoomResponse:
    room = await service.get_room(db, resolve_school_id(user, school_id), room_id)
    return RoomResponse.model_validate(room)


@router.post(
    "",
    response_model=RoomResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Room",
)
async def create_room(
    data: RoomCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> RoomResponse:
    room = await service.create_room(db, resolve_school_id(user, data.school_id), data)
    return RoomResponse.model_validate(room)


@router.patch("/{room_id}", response_model=RoomResponse, summary="Update Room")
async def update_room(
    room_id: str,
    data: RoomUpdate,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> RoomResponse:
    room = await service.update_room(db, resolve_school_id(user, school_id), room_id, data)
    return RoomResponse.model_validate(room)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Room")
async def delete_room(
    room_id: str,
    school_id: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_school_manager),
) -> None:
    await service.delete_room(db, resolve_school_id(user, school_id), room_id)
