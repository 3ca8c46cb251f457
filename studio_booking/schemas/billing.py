from typing import Optional, List
from pydantic import BaseModel, UUID4, Field
from decimal import Decimal
from datetime import datetime


class BillingCreate(BaseModel):
    booking_ids: List[UUID4] = Field(min_length=1)
    period_start: datetime
    period_end: datetime


class Billing(BaseModel):
    id: UUID4
    service_provider_id: UUID4
    period_start: datetime
    period_end: datetime
    total_amount: Decimal
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BillingItemUpgrade(BaseModel):
    id: UUID4
    upgrade_id: UUID4
    upgrade_price_id: UUID4
    frozen_upgrade_name: str
    frozen_quantity: int
    frozen_upgrade_price_amount: Decimal
    total_amount: Decimal

    class Config:
        from_attributes = True


class BillingItem(BaseModel):
    id: UUID4
    billing_id: UUID4
    booking_id: UUID4
    frozen_start_time: datetime
    frozen_end_time: datetime
    frozen_duration_minutes: int
    frozen_resting_time_minutes: int
    frozen_client_alias: Optional[str] = None
    frozen_room_name: str
    room_price_id: UUID4
    frozen_room_price_amount: Decimal
    subtotal_room: Decimal
    subtotal_upgrades: Decimal
    total_amount: Decimal
    description: Optional[str] = None
    upgrades: List[BillingItemUpgrade] = []

    class Config:
        from_attributes = True
