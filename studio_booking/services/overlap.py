import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.core.exceptions import ConflictError, InvalidRangeError, NotFoundError
from studio_booking.models.room import Room
from studio_booking.stores.bookings import BookingStore
from studio_booking.utils.intervals import TimeInterval

logger = logging.getLogger(__name__)


def check_available(
    db: Session,
    room_id: UUID,
    start_time: datetime,
    duration_minutes: int,
    resting_time_minutes: int = 0,
    exclude_booking_id: Optional[UUID] = None,
) -> TimeInterval:
    """
    Raise ConflictError if the room is occupied anywhere in
    ``[start, start + duration + resting)``.

    The room row is locked first, so concurrent writers for the same room wait
    for this transaction instead of both passing the check. Returns the blocked
    interval on success.
    """
    if duration_minutes is None or duration_minutes <= 0:
        raise InvalidRangeError("Duration must be greater than 0 minutes")
    if resting_time_minutes is None or resting_time_minutes < 0:
        raise InvalidRangeError("Resting time must not be negative")

    room = db.query(Room).filter(Room.id == room_id).with_for_update().first()
    if not room:
        raise NotFoundError(f"Room not found: {room_id}")

    interval = TimeInterval.from_duration(start_time, duration_minutes + resting_time_minutes)
    conflicts = [
        b for b in BookingStore(db).find_overlapping(room_id, interval, exclude_booking_id)
        if interval.overlaps(b.blocked_window)
    ]
    if conflicts:
        conflict_ids = [str(b.id) for b in conflicts]
        logger.info("Room %s occupied between %s and %s by %s", room_id, interval.start, interval.end, conflict_ids)
        first = conflicts[0]
        raise ConflictError(
            f"Room is already booked from {first.start_time} to {first.blocked_until} "
            f"(booking {first.id})",
            booking_ids=conflict_ids,
        )
    return interval
