from datetime import datetime
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.price import (
    PriceCreate,
    PricePreview,
    PricePreviewEntry,
    RoomPrice as RoomPriceSchema,
    UpgradePrice as UpgradePriceSchema,
)
from studio_booking.services import price_tiers as tier_service
from studio_booking.services.price_timeline import room_price_timeline, upgrade_price_timeline

room_price_router = APIRouter(prefix="/admin/rooms/{room_id}/prices", tags=["Admin - Prices"])
upgrade_price_router = APIRouter(prefix="/admin/upgrades/{upgrade_id}/prices", tags=["Admin - Prices"])


# ---------------------------------------------------------------------------
# Room prices
# ---------------------------------------------------------------------------


@room_price_router.get("/", response_model=List[RoomPriceSchema])
def room_price_history(room_id: UUID, db: Session = Depends(get_db)):
    """All price periods of the room, most recent first."""
    return room_price_timeline(db).history(room_id)


@room_price_router.get("/current", response_model=RoomPriceSchema)
def current_room_price(room_id: UUID, db: Session = Depends(get_db)):
    return room_price_timeline(db).current(room_id)


@room_price_router.get("/at", response_model=RoomPriceSchema)
def room_price_at(room_id: UUID, timestamp: datetime = Query(...), db: Session = Depends(get_db)):
    return room_price_timeline(db).at(room_id, timestamp)


@room_price_router.post("/", response_model=RoomPriceSchema, status_code=status.HTTP_201_CREATED)
def set_room_price(room_id: UUID, data: PriceCreate, db: Session = Depends(get_db)):
    """Close the open period at ``valid_from`` and open a new one."""
    price = room_price_timeline(db).set_new_price(room_id, data.amount, data.valid_from)
    db.commit()
    db.refresh(price)
    return price


@room_price_router.get("/{price_id}/preview", response_model=PricePreview)
def preview_room_price(room_id: UUID, price_id: UUID, db: Session = Depends(get_db)):
    tiers = tier_service.list_tiers(db, room_id, price_id)
    preview = tier_service.preview_room_price(db, room_id, price_id)
    return PricePreview(
        room_price_id=price_id,
        tiered=bool(tiers),
        prices=[PricePreviewEntry(duration_minutes=m, price=p) for m, p in preview.items()],
    )


# ---------------------------------------------------------------------------
# Upgrade prices
# ---------------------------------------------------------------------------


@upgrade_price_router.get("/", response_model=List[UpgradePriceSchema])
def upgrade_price_history(upgrade_id: UUID, db: Session = Depends(get_db)):
    return upgrade_price_timeline(db).history(upgrade_id)


@upgrade_price_router.get("/current", response_model=UpgradePriceSchema)
def current_upgrade_price(upgrade_id: UUID, db: Session = Depends(get_db)):
    return upgrade_price_timeline(db).current(upgrade_id)


@upgrade_price_router.get("/at", response_model=UpgradePriceSchema)
def upgrade_price_at(
    upgrade_id: UUID, timestamp: datetime = Query(...), db: Session = Depends(get_db)
):
    return upgrade_price_timeline(db).at(upgrade_id, timestamp)


@upgrade_price_router.post("/", response_model=UpgradePriceSchema, status_code=status.HTTP_201_CREATED)
def set_upgrade_price(upgrade_id: UUID, data: PriceCreate, db: Session = Depends(get_db)):
    price = upgrade_price_timeline(db).set_new_price(upgrade_id, data.amount, data.valid_from)
    db.commit()
    db.refresh(price)
    return price
