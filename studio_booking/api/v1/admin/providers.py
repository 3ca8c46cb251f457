from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.common import BookingCount, DeleteResult
from studio_booking.schemas.provider import Provider as ProviderSchema, ProviderCreate, ProviderUpdate
from studio_booking.services import providers as provider_service

router = APIRouter(prefix="/admin/locations/{location_id}/providers", tags=["Admin - Providers"])
provider_router = APIRouter(prefix="/admin/providers", tags=["Admin - Providers"])


@router.get("/", response_model=List[ProviderSchema])
def list_providers(
    location_id: UUID,
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
):
    return provider_service.list_providers(db, location_id, include_inactive)


@router.post("/", response_model=ProviderSchema, status_code=status.HTTP_201_CREATED)
def create_provider(location_id: UUID, data: ProviderCreate, db: Session = Depends(get_db)):
    provider = provider_service.create_provider(db, location_id, **data.model_dump())
    db.commit()
    db.refresh(provider)
    return provider


@provider_router.get("/{provider_id}", response_model=ProviderSchema)
def get_provider(provider_id: UUID, db: Session = Depends(get_db)):
    return provider_service.get_provider(db, provider_id)


@provider_router.patch("/{provider_id}", response_model=ProviderSchema)
def update_provider(provider_id: UUID, data: ProviderUpdate, db: Session = Depends(get_db)):
    provider = provider_service.update_provider(db, provider_id, **data.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(provider)
    return provider


@provider_router.delete("/{provider_id}", response_model=DeleteResult)
def delete_provider(provider_id: UUID, db: Session = Depends(get_db)):
    result = provider_service.delete_provider(db, provider_id)
    db.commit()
    return result


@provider_router.get("/{provider_id}/booking-count", response_model=BookingCount)
def get_booking_count(provider_id: UUID, db: Session = Depends(get_db)):
    return {"id": str(provider_id), "booking_count": provider_service.get_booking_count(db, provider_id)}
