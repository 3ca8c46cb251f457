import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.core.config import settings
from studio_booking.core.exceptions import ConflictError, NotFoundError
from studio_booking.models.room import Room
from studio_booking.services.common import name_taken, next_sort_order, require_location
from studio_booking.services.price_timeline import room_price_timeline
from studio_booking.stores.bookings import BookingStore
from studio_booking.stores.prices import room_price_store
from studio_booking.stores.tiers import TierStore
from studio_booking.utils.local_time import local_now

logger = logging.getLogger(__name__)


def list_rooms(db: Session, location_id: UUID, include_inactive: bool = False) -> List[Room]:
    query = db.query(Room).filter(Room.location_id == location_id)
    if not include_inactive:
        query = query.filter(Room.is_active == True)  # noqa: E712
    return query.order_by(Room.sort_order, Room.name).all()


def get_room(db: Session, room_id: UUID) -> Room:
    room = db.query(Room).filter(Room.id == room_id).first()
    if not room:
        raise NotFoundError(f"Room not found: {room_id}")
    return room


def create_room(
    db: Session,
    location_id: UUID,
    name: str,
    hourly_rate: Decimal,
    sort_order: Optional[int] = None,
    color: Optional[str] = None,
    price_valid_from: Optional[datetime] = None,
) -> Room:
    """Create a room and open its price timeline with ``hourly_rate``."""
    require_location(db, location_id)
    if name_taken(db, Room, location_id, name):
        raise ConflictError(f"A room named '{name.strip()}' already exists at this location")

    room = Room(
        location_id=location_id,
        name=name.strip(),
        hourly_rate=hourly_rate,
        sort_order=sort_order if sort_order is not None else next_sort_order(db, Room, location_id),
        color=color or settings.DEFAULT_ROOM_COLOR,
        is_active=True,
    )
    db.add(room)
    db.flush()

    room_price_timeline(db).set_new_price(room.id, hourly_rate, price_valid_from or local_now())
    logger.info("Created room %s at location %s", room.id, location_id)
    return room


def update_room(db: Session, room_id: UUID, **changes) -> Room:
    room = get_room(db, room_id)
    name = changes.get("name")
    if name is not None:
        if name_taken(db, Room, room.location_id, name, exclude_id=room_id):
            raise ConflictError(f"A room named '{name.strip()}' already exists at this location")
        changes["name"] = name.strip()

    for field, value in changes.items():
        setattr(room, field, value)
    db.flush()
    return room


def delete_room(db: Session, room_id: UUID) -> dict:
    """
    Soft-delete a room that has bookings, hard-delete one that never had any.

    Rooms with upcoming bookings cannot be deleted at all.
    """
    room = get_room(db, room_id)
    bookings = BookingStore(db)

    future = bookings.count_future_by_room(room_id, local_now())
    if future:
        raise ConflictError(
            f"Room has {future} upcoming booking(s); deactivate it instead of deleting"
        )

    if bookings.count_by_room(room_id):
        room.is_active = False
        db.flush()
        logger.info("Deactivated room %s", room_id)
        return {"id": str(room_id), "is_active": False, "deleted": False}

    prices = room_price_store(db)
    TierStore(db).delete_for_prices([p.id for p in prices.find_history(room_id)])
    prices.delete_all(room_id)
    db.delete(room)
    db.flush()
    logger.info("Deleted room %s", room_id)
    return {"id": str(room_id), "is_active": False, "deleted": True}


def get_booking_count(db: Session, room_id: UUID) -> int:
    get_room(db, room_id)
    return BookingStore(db).count_by_room(room_id)
