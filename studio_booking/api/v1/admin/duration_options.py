from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.duration_option import (
    DurationOption as DurationOptionSchema,
    DurationOptionCreate,
    DurationOptionUpdate,
)
from studio_booking.services import duration_options as option_service

router = APIRouter(
    prefix="/admin/locations/{location_id}/duration-options", tags=["Admin - Duration Options"]
)
option_router = APIRouter(prefix="/admin/duration-options", tags=["Admin - Duration Options"])


@router.get("/", response_model=List[DurationOptionSchema])
def list_duration_options(
    location_id: UUID,
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
):
    return option_service.list_duration_options(db, location_id, include_inactive)


@router.post("/", response_model=DurationOptionSchema, status_code=status.HTTP_201_CREATED)
def create_duration_option(
    location_id: UUID, data: DurationOptionCreate, db: Session = Depends(get_db)
):
    option = option_service.create_duration_option(db, location_id, **data.model_dump())
    db.commit()
    db.refresh(option)
    return option


@option_router.get("/{option_id}", response_model=DurationOptionSchema)
def get_duration_option(option_id: UUID, db: Session = Depends(get_db)):
    return option_service.get_duration_option(db, option_id)


@option_router.put("/{option_id}", response_model=DurationOptionSchema)
def update_duration_option(
    option_id: UUID, data: DurationOptionUpdate, db: Session = Depends(get_db)
):
    option = option_service.update_duration_option(db, option_id, **data.model_dump())
    db.commit()
    db.refresh(option)
    return option


@option_router.delete("/{option_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_duration_option(option_id: UUID, db: Session = Depends(get_db)):
    option_service.delete_duration_option(db, option_id)
    db.commit()
