from pydantic import BaseModel, UUID4, Field
from datetime import datetime


class LocationCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class Location(BaseModel):
    id: UUID4
    name: str
    created_at: datetime

    class Config:
        from_attributes = True
