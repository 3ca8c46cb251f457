from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.booking import (
    Booking as BookingSchema,
    BookingCreate,
    BookingListItem,
    BookingUpdate,
)
from studio_booking.schemas.common import PaginatedResponse
from studio_booking.services import bookings as booking_service
from studio_booking.services.bookings import BookingListEntry, BookingStatus

router = APIRouter(prefix="/bookings", tags=["Bookings"])
location_bookings_router = APIRouter(prefix="/locations/{location_id}/bookings", tags=["Bookings"])


def _serialize_entry(entry: BookingListEntry) -> BookingListItem:
    item = BookingListItem.model_validate(
        {
            **BookingSchema.model_validate(entry.booking).model_dump(),
            "room": entry.room,
            "provider": entry.provider,
            "status": entry.status.value,
            "total_price": entry.total_price,
            "is_billed": entry.is_billed,
        },
        from_attributes=True,
    )
    return item


# ---------------------------------------------------------------------------
# POST /bookings: create a booking
# ---------------------------------------------------------------------------


@router.post("/", response_model=BookingSchema, status_code=status.HTTP_201_CREATED)
def create_booking(data: BookingCreate, db: Session = Depends(get_db)):
    """
    Book a room for a service provider.

    - The room is blocked for `duration_minutes + resting_time_minutes`.
    - Overlapping bookings of the same room are rejected with 409 and their ids.
    - `upgrades` lists upgrade ids with quantities.
    """
    booking = booking_service.create_booking(
        db,
        provider_id=data.provider_id,
        room_id=data.room_id,
        start_time=data.start_time,
        duration_minutes=data.duration_minutes,
        resting_time_minutes=data.resting_time_minutes,
        client_alias=data.client_alias,
        upgrades=data.upgrade_quantities(),
    )
    db.commit()
    db.refresh(booking)
    return booking


@router.get("/{booking_id}", response_model=BookingSchema)
def get_booking(booking_id: UUID, db: Session = Depends(get_db)):
    return booking_service.get_booking(db, booking_id)


@router.put("/{booking_id}", response_model=BookingSchema)
def update_booking(booking_id: UUID, data: BookingUpdate, db: Session = Depends(get_db)):
    booking = booking_service.update_booking(
        db,
        booking_id,
        provider_id=data.provider_id,
        room_id=data.room_id,
        start_time=data.start_time,
        duration_minutes=data.duration_minutes,
        resting_time_minutes=data.resting_time_minutes,
        client_alias=data.client_alias,
        upgrades=data.upgrade_quantities(),
    )
    db.commit()
    db.refresh(booking)
    return booking


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(booking_id: UUID, db: Session = Depends(get_db)):
    booking_service.delete_booking(db, booking_id)
    db.commit()


# ---------------------------------------------------------------------------
# GET /locations/{location_id}/bookings: filtered, paginated list
# ---------------------------------------------------------------------------


@location_bookings_router.get("/", response_model=PaginatedResponse[BookingListItem])
def list_bookings(
    location_id: UUID,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    provider_id: Optional[UUID] = Query(None),
    room_id: Optional[UUID] = Query(None),
    client_search: Optional[str] = Query(None),
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
):
    entries, total = booking_service.list_bookings(
        db,
        location_id,
        start_date=start_date,
        end_date=end_date,
        provider_id=provider_id,
        room_id=room_id,
        client_search=client_search,
        status=status_filter,
        page=page,
        limit=limit,
    )
    return PaginatedResponse(
        data=[_serialize_entry(entry) for entry in entries],
        total=total,
        page=page,
        limit=limit,
        total_pages=-(-total // limit) if total else 0,
    )
