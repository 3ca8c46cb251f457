from datetime import datetime
from typing import Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from studio_booking.models.booking import Booking, BookingUpgrade
from studio_booking.models.room import Room
from studio_booking.utils.intervals import TimeInterval


class BookingStore:
    def __init__(self, db: Session):
        self.db = db

    def find(self, booking_id: UUID) -> Optional[Booking]:
        return self.db.query(Booking).filter(Booking.id == booking_id).first()

    def find_many(self, booking_ids: Iterable[UUID]) -> List[Booking]:
        ids = list(booking_ids)
        if not ids:
            return []
        return self.db.query(Booking).filter(Booking.id.in_(ids)).all()

    def find_overlapping(
        self,
        room_id: UUID,
        interval: TimeInterval,
        exclude_id: Optional[UUID] = None,
    ) -> List[Booking]:
        """Bookings of the room whose blocked window overlaps ``interval``."""
        filters = [
            Booking.room_id == room_id,
            Booking.start_time < interval.end,
            Booking.blocked_until > interval.start,
        ]
        if exclude_id:
            filters.append(Booking.id != exclude_id)
        return self.db.query(Booking).filter(*filters).order_by(Booking.start_time).all()

    def find_for_location(
        self,
        location_id: UUID,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        provider_id: Optional[UUID] = None,
        room_id: Optional[UUID] = None,
        client_search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> Tuple[List[Booking], int]:
        query = (
            self.db.query(Booking)
            .join(Room, Room.id == Booking.room_id)
            .filter(Room.location_id == location_id)
        )
        if start:
            query = query.filter(Booking.start_time >= start)
        if end:
            query = query.filter(Booking.start_time < end)
        if provider_id:
            query = query.filter(Booking.provider_id == provider_id)
        if room_id:
            query = query.filter(Booking.room_id == room_id)
        if client_search:
            query = query.filter(func.lower(Booking.client_alias).contains(client_search.lower()))

        total = query.count()
        bookings = (
            query.order_by(Booking.start_time.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return bookings, total

    def save(self, booking: Booking) -> Booking:
        self.db.add(booking)
        self.db.flush()
        return booking

    def delete(self, booking: Booking) -> None:
        self.db.delete(booking)
        self.db.flush()

    def count_by_room(self, room_id: UUID) -> int:
        return self.db.query(func.count(Booking.id)).filter(Booking.room_id == room_id).scalar()

    def count_by_provider(self, provider_id: UUID) -> int:
        return self.db.query(func.count(Booking.id)).filter(Booking.provider_id == provider_id).scalar()

    def count_future_by_room(self, room_id: UUID, now: datetime) -> int:
        return (
            self.db.query(func.count(Booking.id))
            .filter(Booking.room_id == room_id, Booking.start_time >= now)
            .scalar()
        )

    def count_future_by_provider(self, provider_id: UUID, now: datetime) -> int:
        return (
            self.db.query(func.count(Booking.id))
            .filter(Booking.provider_id == provider_id, Booking.start_time >= now)
            .scalar()
        )

    def count_by_upgrade(self, upgrade_id: UUID) -> int:
        return (
            self.db.query(func.count(BookingUpgrade.booking_id))
            .filter(BookingUpgrade.upgrade_id == upgrade_id)
            .scalar()
        )
