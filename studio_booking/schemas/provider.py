from typing import Optional
from pydantic import BaseModel, UUID4, Field
from datetime import datetime

from studio_booking.schemas.room import HEX_COLOR


class ProviderCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    sort_order: Optional[int] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)


class ProviderUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    sort_order: Optional[int] = None
    color: Optional[str] = Field(default=None, pattern=HEX_COLOR)
    is_active: Optional[bool] = None


class Provider(BaseModel):
    id: UUID4
    location_id: UUID4
    name: str
    is_active: bool
    sort_order: int
    color: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProviderSummary(BaseModel):
    id: UUID4
    name: str
    color: str

    class Config:
        from_attributes = True
