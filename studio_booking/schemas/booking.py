from typing import Optional, List
from pydantic import BaseModel, UUID4, Field
from decimal import Decimal
from datetime import datetime

from studio_booking.schemas.room import RoomSummary
from studio_booking.schemas.provider import ProviderSummary


class BookingUpgradeIn(BaseModel):
    upgrade_id: UUID4
    quantity: int = Field(default=1, ge=1)


# Booking: Create / Update (POST, PUT /bookings)
class BookingCreate(BaseModel):
    provider_id: UUID4
    room_id: UUID4
    start_time: datetime
    duration_minutes: int
    resting_time_minutes: int = 0
    client_alias: str = Field(default="", max_length=255)
    upgrades: List[BookingUpgradeIn] = []

    def upgrade_quantities(self) -> dict:
        quantities = {}
        for item in self.upgrades:
            quantities[item.upgrade_id] = quantities.get(item.upgrade_id, 0) + item.quantity
        return quantities


class BookingUpdate(BookingCreate):
    pass


class BookingUpgrade(BaseModel):
    upgrade_id: UUID4
    quantity: int

    class Config:
        from_attributes = True


# Booking: Full response
class Booking(BaseModel):
    id: UUID4
    room_id: UUID4
    provider_id: UUID4
    start_time: datetime
    end_time: datetime
    blocked_until: datetime
    duration_minutes: int
    resting_time_minutes: int
    client_alias: str
    created_at: Optional[datetime] = None
    upgrades: List[BookingUpgrade] = []

    class Config:
        from_attributes = True


# Booking: List item (GET /locations/{id}/bookings)
class BookingListItem(Booking):
    room: RoomSummary
    provider: ProviderSummary
    status: str
    total_price: Optional[Decimal] = None
    is_billed: bool = False
