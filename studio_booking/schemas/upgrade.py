from typing import Optional
from pydantic import BaseModel, UUID4, Field
from decimal import Decimal
from datetime import datetime


class UpgradeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    price_valid_from: Optional[datetime] = None


class UpgradeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    is_active: Optional[bool] = None


class Upgrade(BaseModel):
    id: UUID4
    name: str
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
