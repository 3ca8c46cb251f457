"""
Price a booking with the prices that were valid when it starts.

Billing freezes the resulting quote into its items; the booking list shows the
same figure as an estimate.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

from studio_booking.core.exceptions import NotFoundError
from studio_booking.models.booking import Booking
from studio_booking.models.price import RoomPrice, UpgradePrice
from studio_booking.models.upgrade import Upgrade
from studio_booking.services.price_timeline import room_price_timeline, upgrade_price_timeline
from studio_booking.services.tiered_pricing import calculate_room_price, to_cents
from studio_booking.stores.tiers import TierStore


@dataclass
class UpgradeLine:
    upgrade: Upgrade
    price: UpgradePrice
    quantity: int
    total: Decimal


@dataclass
class BookingQuote:
    room_price: RoomPrice
    subtotal_room: Decimal
    upgrade_lines: List[UpgradeLine] = field(default_factory=list)

    @property
    def subtotal_upgrades(self) -> Decimal:
        return to_cents(sum((line.total for line in self.upgrade_lines), Decimal("0")))

    @property
    def total(self) -> Decimal:
        return to_cents(self.subtotal_room + self.subtotal_upgrades)


def quote_booking(db: Session, booking: Booking) -> BookingQuote:
    """
    Room price at the booking start (tiered, or hourly without tiers) for the
    booked duration, plus every upgrade's unit price at the start times its
    quantity. Resting time is not billed.
    """
    room_price = room_price_timeline(db).at(booking.room_id, booking.start_time)
    tiers = TierStore(db).find_by_price(room_price.id)
    quote = BookingQuote(
        room_price=room_price,
        subtotal_room=calculate_room_price(room_price, tiers, booking.duration_minutes),
    )

    upgrades = upgrade_price_timeline(db)
    for booked in booking.upgrades:
        upgrade = db.query(Upgrade).filter(Upgrade.id == booked.upgrade_id).first()
        if not upgrade:
            raise NotFoundError(f"Upgrade not found: {booked.upgrade_id}")
        price = upgrades.at(booked.upgrade_id, booking.start_time)
        quote.upgrade_lines.append(
            UpgradeLine(
                upgrade=upgrade,
                price=price,
                quantity=booked.quantity,
                total=to_cents(Decimal(price.amount) * booked.quantity),
            )
        )
    return quote


def estimate_total(db: Session, booking: Booking) -> Optional[Decimal]:
    """Quoted total, or None when a needed price does not exist."""
    try:
        return quote_booking(db, booking).total
    except NotFoundError:
        return None
