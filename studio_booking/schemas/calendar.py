from typing import List
from pydantic import BaseModel
from datetime import date

from studio_booking.schemas.booking import Booking
from studio_booking.schemas.room import Room


class CalendarRoom(BaseModel):
    room: Room
    bookings: List[Booking] = []

    class Config:
        from_attributes = True


class CalendarDay(BaseModel):
    day: date
    rooms: List[CalendarRoom]

    class Config:
        from_attributes = True
