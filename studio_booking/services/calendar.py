from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.models.booking import Booking
from studio_booking.models.room import Room
from studio_booking.services.common import require_location
from studio_booking.services.rooms import list_rooms


@dataclass
class RoomDay:
    room: Room
    bookings: List[Booking] = field(default_factory=list)


@dataclass
class CalendarDay:
    day: date
    rooms: List[RoomDay]


def get_calendar_for_date(db: Session, location_id: UUID, day: date) -> CalendarDay:
    """Active rooms of a location with the bookings starting on ``day``."""
    require_location(db, location_id)
    rooms = list_rooms(db, location_id)
    start = datetime.combine(day, time.min)
    end = start + timedelta(days=1)

    bookings = (
        db.query(Booking)
        .join(Room, Room.id == Booking.room_id)
        .filter(Room.location_id == location_id, Booking.start_time >= start, Booking.start_time < end)
        .order_by(Booking.start_time)
        .all()
    )
    by_room = {room.id: RoomDay(room=room) for room in rooms}
    for booking in bookings:
        if booking.room_id in by_room:
            by_room[booking.room_id].bookings.append(booking)
    return CalendarDay(day=day, rooms=list(by_room.values()))
