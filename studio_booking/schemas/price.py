from typing import Optional, List
from pydantic import BaseModel, UUID4, Field
from decimal import Decimal
from datetime import datetime

from studio_booking.models.price import PriceType


# Price periods (shared by room and upgrade prices)
class PriceCreate(BaseModel):
    amount: Decimal = Field(max_digits=10, decimal_places=2)
    valid_from: datetime


class Price(BaseModel):
    id: UUID4
    amount: Decimal
    valid_from: datetime
    valid_to: Optional[datetime] = None

    class Config:
        from_attributes = True


class RoomPrice(Price):
    room_id: UUID4


class UpgradePrice(Price):
    upgrade_id: UUID4


# Tiers
class PriceTierIn(BaseModel):
    from_minutes: int
    to_minutes: Optional[int] = None
    # FIXED or HOURLY, any letter case
    price_type: str
    price: Decimal = Field(max_digits=10, decimal_places=2)


class PriceTierReplace(BaseModel):
    tiers: List[PriceTierIn] = []


class PriceTier(BaseModel):
    id: UUID4
    room_price_id: UUID4
    from_minutes: int
    to_minutes: Optional[int] = None
    price_type: PriceType
    price: Decimal
    sort_order: int

    class Config:
        from_attributes = True


class PricePreviewEntry(BaseModel):
    duration_minutes: int
    price: Decimal


class PricePreview(BaseModel):
    room_price_id: UUID4
    tiered: bool
    prices: List[PricePreviewEntry]
