from typing import Optional
from pydantic import BaseModel, UUID4, Field


class DurationOptionBase(BaseModel):
    label: str = Field(min_length=1, max_length=50)
    minutes: Optional[int] = None
    is_variable: bool = False
    min_minutes: Optional[int] = None
    max_minutes: Optional[int] = None
    step_minutes: Optional[int] = None


class DurationOptionCreate(DurationOptionBase):
    sort_order: Optional[int] = None


class DurationOptionUpdate(DurationOptionBase):
    sort_order: int
    is_active: bool = True


class DurationOption(DurationOptionBase):
    id: UUID4
    location_id: UUID4
    sort_order: int
    is_active: bool

    class Config:
        from_attributes = True
