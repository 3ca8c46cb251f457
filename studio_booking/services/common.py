from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from studio_booking.core.exceptions import NotFoundError
from studio_booking.models.location import Location


def require_location(db: Session, location_id: UUID) -> Location:
    location = db.query(Location).filter(Location.id == location_id).first()
    if not location:
        raise NotFoundError(f"Location not found: {location_id}")
    return location


def next_sort_order(db: Session, model, location_id: UUID) -> int:
    current = (
        db.query(func.max(model.sort_order)).filter(model.location_id == location_id).scalar()
    )
    return (current or 0) + 1


def name_taken(
    db: Session, model, location_id: UUID, name: str, exclude_id: Optional[UUID] = None
) -> bool:
    """Case-insensitive name lookup within one location."""
    query = db.query(model.id).filter(
        model.location_id == location_id,
        func.lower(model.name) == name.strip().lower(),
    )
    if exclude_id:
        query = query.filter(model.id != exclude_id)
    return query.first() is not None
