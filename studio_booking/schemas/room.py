from typing import Optional
from pydantic import BaseModel, UUID4, Field
from decimal import Decimal
from datetime import datetime

HEX_COLOR = r"^#[0-9A-Fa-f]{6}$"


# Room Schemas
class RoomCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    hourly_rate: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    sort_order: Optional[int] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    # Start of the first price period; defaults to now
    price_valid_from: Optional[datetime] = None


class RoomUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    sort_order: Optional[int] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    is_active: Optional[bool] = None


class Room(BaseModel):
    id: UUID4
    location_id: UUID4
    name: str
    hourly_rate: Decimal
    is_active: bool
    sort_order: int
    color: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Compact room for nested responses (bookings, calendar)
class RoomSummary(BaseModel):
    id: UUID4
    name: str
    color: str

    class Config:
        from_attributes = True
