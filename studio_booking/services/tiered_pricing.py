"""
Duration-tiered room pricing.

A tier covers the minute range ``[from_minutes, to_minutes)`` of a booking's
duration (``to_minutes=None`` is open-ended). A FIXED tier adds its price once
as soon as the booking reaches into it; an HOURLY tier charges its rate for the
minutes that fall inside it.

Example for 90 minutes with tiers ``[0, 60) FIXED 50`` and ``[60, open)
HOURLY 30``: ``50 + 30 * 30 / 60 = 65.00``.
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Sequence

from studio_booking.core.config import settings
from studio_booking.core.exceptions import ConflictError, InvalidRangeError
from studio_booking.models.price import PriceType
from studio_booking.utils.intervals import minute_overlap

CENTS = Decimal("0.01")
MINUTES_PER_HOUR = Decimal(60)


@dataclass
class PriceTierSpec:
    from_minutes: int
    to_minutes: Optional[int]
    price_type: PriceType
    price: Decimal

    @classmethod
    def from_tier(cls, tier) -> "PriceTierSpec":
        return cls(
            from_minutes=tier.from_minutes,
            to_minutes=tier.to_minutes,
            price_type=tier.price_type,
            price=tier.price,
        )


def to_cents(amount: Decimal) -> Decimal:
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_price_type(value) -> PriceType:
    """Accept ``FIXED`` or ``HOURLY`` in any letter case."""
    if isinstance(value, PriceType):
        return value
    normalized = str(value or "").strip().upper()
    if normalized == "FIXED":
        return PriceType.FIXED
    if normalized == "HOURLY":
        return PriceType.HOURLY
    raise ConflictError(f"Invalid price type: {value}. Must be FIXED or HOURLY")


def _describe(tier) -> str:
    upper = "open" if tier.to_minutes is None else tier.to_minutes
    return f"[{tier.from_minutes}, {upper})"


def validate_tiers(tiers: Iterable) -> List:
    """
    Check that the tiers tile ``[0, ...)`` without gaps or overlaps.

    Returns the tiers sorted by ``from_minutes``. An empty set is valid: the
    price then falls back to its plain hourly amount.
    """
    ordered = sorted(tiers, key=lambda t: t.from_minutes)
    if not ordered:
        return ordered

    for tier in ordered:
        if tier.from_minutes < 0:
            raise InvalidRangeError(f"Tier {_describe(tier)} starts before minute 0")
        if tier.to_minutes is not None and tier.from_minutes >= tier.to_minutes:
            raise InvalidRangeError(f"Tier {_describe(tier)} must end after it starts")
        if tier.price is None or Decimal(tier.price) <= 0:
            raise InvalidRangeError(f"Tier {_describe(tier)} needs a price greater than 0")

    if sum(1 for t in ordered if t.to_minutes is None) > 1:
        raise InvalidRangeError("Only one tier may be open-ended")

    if ordered[0].from_minutes != 0:
        raise InvalidRangeError(f"First tier must start at minute 0, not {ordered[0].from_minutes}")

    for previous, current in zip(ordered, ordered[1:]):
        if previous.to_minutes is None or current.from_minutes < previous.to_minutes:
            raise InvalidRangeError(
                f"Tier {_describe(current)} overlaps tier {_describe(previous)}"
            )
        if current.from_minutes > previous.to_minutes:
            raise InvalidRangeError(
                f"Gap between tier {_describe(previous)} and tier {_describe(current)}"
            )
    return ordered


def calculate_hourly_price(hourly_rate: Decimal, duration_minutes: int) -> Decimal:
    return to_cents(Decimal(hourly_rate) * Decimal(duration_minutes) / MINUTES_PER_HOUR)


def calculate_tiered_price(duration_minutes: int, tiers: Sequence) -> Decimal:
    """
    Sum the contribution of every tier the duration reaches into.

    The highest tier absorbs whatever lies beyond its upper bound.
    """
    if duration_minutes < 0:
        raise InvalidRangeError("Duration must not be negative")
    if not tiers:
        raise InvalidRangeError("Tiers list cannot be empty")

    ordered = sorted(tiers, key=lambda t: t.from_minutes)
    last_index = len(ordered) - 1
    total = Decimal("0")

    for index, tier in enumerate(ordered):
        if tier.from_minutes >= duration_minutes:
            break
        upper = None if index == last_index else tier.to_minutes
        minutes = minute_overlap(tier.from_minutes, upper, duration_minutes)
        if minutes <= 0:
            continue

        if tier.price_type == PriceType.FIXED:
            total += Decimal(tier.price)
        else:
            total += Decimal(tier.price) * Decimal(minutes) / MINUTES_PER_HOUR

    return to_cents(total)


def calculate_room_price(room_price, tiers: Sequence, duration_minutes: int) -> Decimal:
    """Tiered price when tiers exist, else the price amount as an hourly rate."""
    if not tiers:
        return calculate_hourly_price(room_price.amount, duration_minutes)
    return calculate_tiered_price(duration_minutes, tiers)


def price_preview(room_price, tiers: Sequence) -> Dict[int, Decimal]:
    return {
        minutes: calculate_room_price(room_price, tiers, minutes)
        for minutes in settings.PRICE_PREVIEW_DURATIONS
    }
