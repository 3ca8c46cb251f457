from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.calendar import CalendarDay
from studio_booking.services.calendar import get_calendar_for_date

router = APIRouter(prefix="/locations/{location_id}/calendar", tags=["Calendar"])


@router.get("/", response_model=CalendarDay)
def get_calendar(
    location_id: UUID,
    day: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
):
    """Active rooms with the bookings starting on the given date."""
    return CalendarDay.model_validate(get_calendar_for_date(db, location_id, day))
