import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.core.exceptions import InvalidRangeError, NotFoundError
from studio_booking.models.price import RoomPrice, RoomPriceTier
from studio_booking.services.price_timeline import room_price_timeline
from studio_booking.services.tiered_pricing import PriceTierSpec, price_preview, validate_tiers
from studio_booking.stores.tiers import TierStore

logger = logging.getLogger(__name__)


def _require_room_price(db: Session, room_id: UUID, room_price_id: UUID) -> RoomPrice:
    price = room_price_timeline(db).get(room_price_id)
    if price.room_id != room_id:
        raise NotFoundError(f"Room price {room_price_id} does not belong to room {room_id}")
    return price


def _require_tier(store: TierStore, room_price_id: UUID, tier_id: UUID) -> RoomPriceTier:
    tier = store.find(tier_id)
    if not tier or tier.room_price_id != room_price_id:
        raise NotFoundError(f"Price tier not found: {tier_id}")
    return tier


def list_tiers(db: Session, room_id: UUID, room_price_id: UUID) -> List[RoomPriceTier]:
    _require_room_price(db, room_id, room_price_id)
    return TierStore(db).find_by_price(room_price_id)


def replace_tiers(
    db: Session, room_id: UUID, room_price_id: UUID, tiers: List[PriceTierSpec]
) -> List[RoomPriceTier]:
    """Validate the complete tier set and swap it in for the price's current tiers."""
    price = _require_room_price(db, room_id, room_price_id)
    if price.valid_to is not None:
        raise InvalidRangeError("Tiers can only be changed on the currently open room price")

    ordered = validate_tiers(tiers)
    created = TierStore(db).replace_all(room_price_id, ordered)
    logger.info("Replaced tiers of room price %s with %d tier(s)", room_price_id, len(created))
    return created


def create_tier(db: Session, room_id: UUID, room_price_id: UUID, tier: PriceTierSpec) -> RoomPriceTier:
    store = TierStore(db)
    specs = [PriceTierSpec.from_tier(t) for t in store.find_by_price(room_price_id)]
    created = replace_tiers(db, room_id, room_price_id, specs + [tier])
    return next(t for t in created if t.from_minutes == tier.from_minutes)


def update_tier(
    db: Session, room_id: UUID, room_price_id: UUID, tier_id: UUID, tier: PriceTierSpec
) -> RoomPriceTier:
    store = TierStore(db)
    _require_tier(store, room_price_id, tier_id)
    specs = [
        PriceTierSpec.from_tier(t) for t in store.find_by_price(room_price_id) if t.id != tier_id
    ]
    created = replace_tiers(db, room_id, room_price_id, specs + [tier])
    return next(t for t in created if t.from_minutes == tier.from_minutes)


def delete_tier(db: Session, room_id: UUID, room_price_id: UUID, tier_id: UUID) -> None:
    store = TierStore(db)
    _require_tier(store, room_price_id, tier_id)
    specs = [
        PriceTierSpec.from_tier(t) for t in store.find_by_price(room_price_id) if t.id != tier_id
    ]
    replace_tiers(db, room_id, room_price_id, specs)


def preview_room_price(db: Session, room_id: UUID, room_price_id: UUID):
    price = _require_room_price(db, room_id, room_price_id)
    return price_preview(price, TierStore(db).find_by_price(room_price_id))
