from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.price import PriceTier as PriceTierSchema, PriceTierIn, PriceTierReplace
from studio_booking.services import price_tiers as tier_service
from studio_booking.services.tiered_pricing import PriceTierSpec, parse_price_type

router = APIRouter(prefix="/admin/rooms/{room_id}/prices/{price_id}/tiers", tags=["Admin - Price Tiers"])


def _to_spec(data: PriceTierIn) -> PriceTierSpec:
    return PriceTierSpec(
        from_minutes=data.from_minutes,
        to_minutes=data.to_minutes,
        price_type=parse_price_type(data.price_type),
        price=data.price,
    )


@router.get("/", response_model=List[PriceTierSchema])
def list_tiers(room_id: UUID, price_id: UUID, db: Session = Depends(get_db)):
    return tier_service.list_tiers(db, room_id, price_id)


@router.put("/", response_model=List[PriceTierSchema])
def replace_tiers(
    room_id: UUID, price_id: UUID, data: PriceTierReplace, db: Session = Depends(get_db)
):
    """Swap in a complete tier set; an empty list restores hourly pricing."""
    tiers = tier_service.replace_tiers(db, room_id, price_id, [_to_spec(t) for t in data.tiers])
    db.commit()
    return tiers


@router.post("/", response_model=PriceTierSchema, status_code=status.HTTP_201_CREATED)
def create_tier(room_id: UUID, price_id: UUID, data: PriceTierIn, db: Session = Depends(get_db)):
    tier = tier_service.create_tier(db, room_id, price_id, _to_spec(data))
    db.commit()
    db.refresh(tier)
    return tier


@router.put("/{tier_id}", response_model=PriceTierSchema)
def update_tier(
    room_id: UUID,
    price_id: UUID,
    tier_id: UUID,
    data: PriceTierIn,
    db: Session = Depends(get_db),
):
    """Tier ids change on every edit; the response carries the new one."""
    tier = tier_service.update_tier(db, room_id, price_id, tier_id, _to_spec(data))
    db.commit()
    db.refresh(tier)
    return tier


@router.delete("/{tier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_tier(room_id: UUID, price_id: UUID, tier_id: UUID, db: Session = Depends(get_db)):
    tier_service.delete_tier(db, room_id, price_id, tier_id)
    db.commit()
