from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.location import Location as LocationSchema, LocationCreate
from studio_booking.services import locations as location_service

router = APIRouter(prefix="/admin/locations", tags=["Admin - Locations"])


@router.post("/", response_model=LocationSchema, status_code=status.HTTP_201_CREATED)
def create_location(data: LocationCreate, db: Session = Depends(get_db)):
    location = location_service.create_location(db, data.name)
    db.commit()
    db.refresh(location)
    return location


@router.get("/", response_model=List[LocationSchema])
def list_locations(db: Session = Depends(get_db)):
    return location_service.list_locations(db)


@router.get("/{location_id}", response_model=LocationSchema)
def get_location(location_id: UUID, db: Session = Depends(get_db)):
    return location_service.get_location(db, location_id)
