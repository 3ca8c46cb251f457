import enum
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.core.config import settings
from studio_booking.core.exceptions import (
    AlreadyBilledError,
    InvalidRangeError,
    NotFoundError,
)
from studio_booking.models.booking import Booking, BookingUpgrade
from studio_booking.models.room import Room
from studio_booking.models.service_provider import ServiceProvider
from studio_booking.models.upgrade import Upgrade
from studio_booking.services.booking_pricing import estimate_total
from studio_booking.services.duration_options import validate_duration
from studio_booking.services.overlap import check_available
from studio_booking.stores.billings import BillingStore
from studio_booking.stores.bookings import BookingStore
from studio_booking.utils.local_time import local_now, to_local_naive

logger = logging.getLogger(__name__)


class BookingStatus(str, enum.Enum):
    UPCOMING = "UPCOMING"
    TODAY = "TODAY"
    PAST = "PAST"


@dataclass
class BookingListEntry:
    booking: Booking
    room: Room
    provider: ServiceProvider
    status: BookingStatus
    total_price: Optional[Decimal]
    is_billed: bool


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _require_active_room(db: Session, room_id: UUID) -> Room:
    room = db.query(Room).filter(Room.id == room_id, Room.is_active == True).first()  # noqa: E712
    if not room:
        raise NotFoundError(f"Room not found or inactive: {room_id}")
    return room


def _require_active_provider(db: Session, provider_id: UUID) -> ServiceProvider:
    provider = (
        db.query(ServiceProvider)
        .filter(ServiceProvider.id == provider_id, ServiceProvider.is_active == True)  # noqa: E712
        .first()
    )
    if not provider:
        raise NotFoundError(f"Service provider not found or inactive: {provider_id}")
    return provider


def _validate_upgrades(db: Session, upgrades: Dict[UUID, int]) -> None:
    for upgrade_id, quantity in upgrades.items():
        if quantity is None or quantity < 1:
            raise InvalidRangeError(f"Quantity for upgrade {upgrade_id} must be at least 1")
        exists = (
            db.query(Upgrade.id)
            .filter(Upgrade.id == upgrade_id, Upgrade.is_active == True)  # noqa: E712
            .first()
        )
        if not exists:
            raise NotFoundError(f"Upgrade not found or inactive: {upgrade_id}")


def _apply_upgrades(booking: Booking, upgrades: Dict[UUID, int]) -> None:
    """Make the booking's upgrade rows match ``upgrades`` exactly."""
    for booked in list(booking.upgrades):
        if booked.upgrade_id in upgrades:
            booked.quantity = upgrades[booked.upgrade_id]
        else:
            booking.upgrades.remove(booked)

    present = {booked.upgrade_id for booked in booking.upgrades}
    for upgrade_id, quantity in upgrades.items():
        if upgrade_id not in present:
            booking.upgrades.append(BookingUpgrade(upgrade_id=upgrade_id, quantity=quantity))


def _check_request(
    db: Session,
    provider_id: UUID,
    room_id: UUID,
    duration_minutes: int,
    upgrades: Dict[UUID, int],
) -> Room:
    room = _require_active_room(db, room_id)
    provider = _require_active_provider(db, provider_id)
    if provider.location_id != room.location_id:
        raise InvalidRangeError("Room and service provider belong to different locations")
    validate_duration(db, room.location_id, duration_minutes)
    _validate_upgrades(db, upgrades)
    return room


def _require_unbilled(db: Session, booking_id: UUID) -> None:
    if BillingStore(db).exists_for_booking(booking_id):
        raise AlreadyBilledError(
            f"Booking {booking_id} is already billed", booking_ids=[booking_id]
        )


def booking_status(start_time: datetime, today: date) -> BookingStatus:
    booking_day = start_time.date()
    if booking_day < today:
        return BookingStatus.PAST
    if booking_day == today:
        return BookingStatus.TODAY
    return BookingStatus.UPCOMING


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


def get_booking(db: Session, booking_id: UUID) -> Booking:
    booking = BookingStore(db).find(booking_id)
    if not booking:
        raise NotFoundError(f"Booking not found: {booking_id}")
    return booking


def create_booking(
    db: Session,
    provider_id: UUID,
    room_id: UUID,
    start_time: datetime,
    duration_minutes: int,
    resting_time_minutes: int = 0,
    client_alias: str = "",
    upgrades: Optional[Dict[UUID, int]] = None,
) -> Booking:
    """
    Book a room for a provider.

    The room must be free for ``duration + resting`` minutes from ``start_time``;
    the check and the insert run in the caller's transaction with the room row
    locked.
    """
    upgrades = upgrades or {}
    start_time = to_local_naive(start_time)
    _check_request(db, provider_id, room_id, duration_minutes, upgrades)

    if not settings.ALLOW_PAST_BOOKINGS and start_time < local_now():
        raise InvalidRangeError("Start time must not lie in the past")

    check_available(db, room_id, start_time, duration_minutes, resting_time_minutes)

    booking = Booking(room_id=room_id, provider_id=provider_id, client_alias=client_alias or "")
    booking.schedule(start_time, duration_minutes, resting_time_minutes)
    _apply_upgrades(booking, upgrades)
    BookingStore(db).save(booking)
    logger.info(
        "Created booking %s in room %s from %s (%d+%d min)",
        booking.id, room_id, start_time, duration_minutes, resting_time_minutes,
    )
    return booking


def update_booking(
    db: Session,
    booking_id: UUID,
    provider_id: UUID,
    room_id: UUID,
    start_time: datetime,
    duration_minutes: int,
    resting_time_minutes: int = 0,
    client_alias: str = "",
    upgrades: Optional[Dict[UUID, int]] = None,
) -> Booking:
    """Reschedule or reassign a booking; its upgrades are replaced wholesale."""
    upgrades = upgrades or {}
    start_time = to_local_naive(start_time)
    booking = get_booking(db, booking_id)
    _require_unbilled(db, booking_id)
    _check_request(db, provider_id, room_id, duration_minutes, upgrades)

    check_available(
        db, room_id, start_time, duration_minutes, resting_time_minutes,
        exclude_booking_id=booking_id,
    )

    booking.room_id = room_id
    booking.provider_id = provider_id
    booking.client_alias = client_alias or ""
    booking.schedule(start_time, duration_minutes, resting_time_minutes)
    _apply_upgrades(booking, upgrades)
    BookingStore(db).save(booking)
    logger.info("Updated booking %s", booking_id)
    return booking


def delete_booking(db: Session, booking_id: UUID) -> None:
    booking = get_booking(db, booking_id)
    _require_unbilled(db, booking_id)
    BookingStore(db).delete(booking)
    logger.info("Deleted booking %s", booking_id)


def list_bookings(
    db: Session,
    location_id: UUID,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    provider_id: Optional[UUID] = None,
    room_id: Optional[UUID] = None,
    client_search: Optional[str] = None,
    status: Optional[BookingStatus] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[BookingListEntry], int]:
    """
    Bookings of a location, newest start first.

    ``end_date`` is inclusive. ``status`` narrows the window further: UPCOMING
    keeps bookings starting from now on, PAST those that started before now and
    TODAY those starting on the current local date.
    """
    if start_date and end_date and end_date < start_date:
        raise InvalidRangeError("end_date must not lie before start_date")

    now = local_now()
    lower = datetime.combine(start_date, time.min) if start_date else None
    upper = datetime.combine(end_date + timedelta(days=1), time.min) if end_date else None

    if status == BookingStatus.UPCOMING:
        lower = max(lower, now) if lower else now
    elif status == BookingStatus.PAST:
        upper = min(upper, now) if upper else now
    elif status == BookingStatus.TODAY:
        day_start = datetime.combine(now.date(), time.min)
        day_end = day_start + timedelta(days=1)
        lower = max(lower, day_start) if lower else day_start
        upper = min(upper, day_end) if upper else day_end

    bookings, total = BookingStore(db).find_for_location(
        location_id,
        start=lower,
        end=upper,
        provider_id=provider_id,
        room_id=room_id,
        client_search=client_search.strip() if client_search and client_search.strip() else None,
        page=page,
        limit=limit,
    )

    rooms = {r.id: r for r in db.query(Room).filter(Room.id.in_([b.room_id for b in bookings]))}
    providers = {
        p.id: p
        for p in db.query(ServiceProvider).filter(
            ServiceProvider.id.in_([b.provider_id for b in bookings])
        )
    }
    billed = BillingStore(db).billed_booking_ids(b.id for b in bookings)

    entries = [
        BookingListEntry(
            booking=booking,
            room=rooms[booking.room_id],
            provider=providers[booking.provider_id],
            status=booking_status(booking.start_time, now.date()),
            total_price=estimate_total(db, booking),
            is_billed=booking.id in billed,
        )
        for booking in bookings
    ]
    return entries, total
