"""
Billing runs.

``create_billings`` turns a set of unbilled bookings into one immutable billing
per service provider. Every booking is priced with the room and upgrade prices
valid at its start and frozen into a billing item, so later price or booking
changes never alter an existing billing. The unique ``booking_id`` on billing
items guarantees that a booking is billed at most once, also under concurrent
runs.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from studio_booking.core.exceptions import (
    AlreadyBilledError,
    InvalidRangeError,
    NotFoundError,
    PeriodMismatchError,
)
from studio_booking.models.billing import Billing, BillingItem, BillingItemUpgrade
from studio_booking.models.booking import Booking
from studio_booking.models.room import Room
from studio_booking.services.booking_pricing import BookingQuote, quote_booking
from studio_booking.services.tiered_pricing import to_cents
from studio_booking.stores.billings import BillingStore
from studio_booking.stores.bookings import BookingStore
from studio_booking.utils.intervals import TimeInterval
from studio_booking.utils.local_time import local_now, to_local_naive

logger = logging.getLogger(__name__)


def _describe(booking: Booking, room: Room, quote: BookingQuote) -> str:
    text = f"{room.name}, {booking.start_time:%Y-%m-%d %H:%M}, {booking.duration_minutes} min"
    if booking.resting_time_minutes:
        text += f" (+{booking.resting_time_minutes} min resting, not billed)"
    for line in quote.upgrade_lines:
        text += f"; {line.quantity}x {line.upgrade.name}"
    return text


def _build_item(db: Session, booking: Booking) -> BillingItem:
    room = db.query(Room).filter(Room.id == booking.room_id).first()
    if not room:
        raise NotFoundError(f"Room not found: {booking.room_id}")
    quote = quote_booking(db, booking)

    item = BillingItem(
        booking_id=booking.id,
        frozen_start_time=booking.start_time,
        frozen_end_time=booking.end_time,
        frozen_duration_minutes=booking.duration_minutes,
        frozen_resting_time_minutes=booking.resting_time_minutes,
        frozen_client_alias=booking.client_alias,
        frozen_room_name=room.name,
        room_price_id=quote.room_price.id,
        frozen_room_price_amount=quote.room_price.amount,
        subtotal_room=quote.subtotal_room,
        subtotal_upgrades=quote.subtotal_upgrades,
        total_amount=quote.total,
        description=_describe(booking, room, quote),
    )
    item.upgrades = [
        BillingItemUpgrade(
            upgrade_id=line.upgrade.id,
            upgrade_price_id=line.price.id,
            frozen_upgrade_name=line.upgrade.name,
            frozen_quantity=line.quantity,
            frozen_upgrade_price_amount=line.price.amount,
            total_amount=line.total,
        )
        for line in quote.upgrade_lines
    ]
    return item


def create_billings(
    db: Session,
    booking_ids: List[UUID],
    period_start: datetime,
    period_end: datetime,
) -> List[Billing]:
    """
    Bill the given bookings, one billing per service provider.

    The whole run fails without side effects when a booking is unknown, already
    billed or starts outside ``[period_start, period_end)``.
    """
    period_start = to_local_naive(period_start)
    period_end = to_local_naive(period_end)
    requested = list(dict.fromkeys(booking_ids))
    if not requested:
        raise InvalidRangeError("At least one booking is required")
    if period_start >= period_end:
        raise InvalidRangeError("Billing period must end after it starts")

    bookings = BookingStore(db).find_many(requested)
    found = {b.id for b in bookings}
    missing = [bid for bid in requested if bid not in found]
    if missing:
        raise NotFoundError(f"Bookings not found: {', '.join(map(str, missing))}", booking_ids=missing)

    store = BillingStore(db)
    billed = store.billed_booking_ids(requested)
    if billed:
        logger.warning("Billing run rejected, already billed: %s", sorted(map(str, billed)))
        raise AlreadyBilledError(
            f"Some bookings are already billed: {', '.join(sorted(map(str, billed)))}",
            booking_ids=billed,
        )

    window = TimeInterval(period_start, period_end)
    outside = [b.id for b in bookings if not window.contains(b.start_time)]
    if outside:
        raise PeriodMismatchError(
            f"Bookings start outside the period {period_start} - {period_end}",
            booking_ids=outside,
        )

    by_provider: Dict[UUID, List[Booking]] = {}
    for booking in sorted(bookings, key=lambda b: b.start_time):
        by_provider.setdefault(booking.provider_id, []).append(booking)

    created_at = local_now()
    billings = []
    try:
        for provider_id, provider_bookings in by_provider.items():
            items = [_build_item(db, booking) for booking in provider_bookings]
            billing = Billing(
                service_provider_id=provider_id,
                period_start=period_start,
                period_end=period_end,
                total_amount=to_cents(sum((i.total_amount for i in items), Decimal("0"))),
                created_at=created_at,
            )
            billings.append(store.save(billing, items))
    except IntegrityError as exc:
        # A concurrent run billed one of these bookings first
        db.rollback()
        raise AlreadyBilledError("Some bookings were billed concurrently", booking_ids=requested) from exc

    logger.info(
        "Created %d billing(s) for %d booking(s), total %s",
        len(billings), len(requested), sum((b.total_amount for b in billings), Decimal("0")),
    )
    return billings


def get_all_billings(db: Session) -> List[Billing]:
    return BillingStore(db).find_all()


def get_billings_by_service_provider(db: Session, service_provider_id: UUID) -> List[Billing]:
    return BillingStore(db).find_by_provider(service_provider_id)


def get_billing_by_id(db: Session, billing_id: UUID) -> Billing:
    billing = BillingStore(db).find_by_id(billing_id)
    if not billing:
        raise NotFoundError(f"Billing not found: {billing_id}")
    return billing


def get_billing_items(db: Session, billing_id: UUID) -> List[BillingItem]:
    get_billing_by_id(db, billing_id)
    return BillingStore(db).find_items(billing_id)
