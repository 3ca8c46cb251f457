from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.common import BookingCount, DeleteResult
from studio_booking.schemas.room import Room as RoomSchema, RoomCreate, RoomUpdate
from studio_booking.services import rooms as room_service

router = APIRouter(prefix="/admin/locations/{location_id}/rooms", tags=["Admin - Rooms"])
room_router = APIRouter(prefix="/admin/rooms", tags=["Admin - Rooms"])


# ---------------------------------------------------------------------------
# Rooms of a location (list / create)
# ---------------------------------------------------------------------------


@router.get("/", response_model=List[RoomSchema])
def list_rooms(
    location_id: UUID,
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
):
    return room_service.list_rooms(db, location_id, include_inactive)


@router.post("/", response_model=RoomSchema, status_code=status.HTTP_201_CREATED)
def create_room(location_id: UUID, data: RoomCreate, db: Session = Depends(get_db)):
    room = room_service.create_room(db, location_id, **data.model_dump())
    db.commit()
    db.refresh(room)
    return room


# ---------------------------------------------------------------------------
# Single room (get / update / delete)
# ---------------------------------------------------------------------------


@room_router.get("/{room_id}", response_model=RoomSchema)
def get_room(room_id: UUID, db: Session = Depends(get_db)):
    return room_service.get_room(db, room_id)


@room_router.patch("/{room_id}", response_model=RoomSchema)
def update_room(room_id: UUID, data: RoomUpdate, db: Session = Depends(get_db)):
    room = room_service.update_room(db, room_id, **data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(room)
    return room


@room_router.delete("/{room_id}", response_model=DeleteResult)
def delete_room(room_id: UUID, db: Session = Depends(get_db)):
    """Deactivates a room that has bookings, removes it otherwise."""
    result = room_service.delete_room(db, room_id)
    db.commit()
    return result


@room_router.get("/{room_id}/booking-count", response_model=BookingCount)
def get_booking_count(room_id: UUID, db: Session = Depends(get_db)):
    return {"id": str(room_id), "booking_count": room_service.get_booking_count(db, room_id)}
