from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from studio_booking.db.session import get_db
from studio_booking.schemas.billing import (
    Billing as BillingSchema,
    BillingCreate,
    BillingItem as BillingItemSchema,
)
from studio_booking.services import billing as billing_service

router = APIRouter(prefix="/admin/billings", tags=["Admin - Billings"])


@router.post("/", response_model=List[BillingSchema], status_code=status.HTTP_201_CREATED)
def create_billings(data: BillingCreate, db: Session = Depends(get_db)):
    """
    Bill the given bookings, one billing per service provider.

    Fails as a whole when a booking is unknown, already billed or starts
    outside the period.
    """
    billings = billing_service.create_billings(
        db, data.booking_ids, data.period_start, data.period_end
    )
    db.commit()
    for billing in billings:
        db.refresh(billing)
    return billings


@router.get("/", response_model=List[BillingSchema])
def list_billings(
    service_provider_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
):
    if service_provider_id:
        return billing_service.get_billings_by_service_provider(db, service_provider_id)
    return billing_service.get_all_billings(db)


@router.get("/{billing_id}", response_model=BillingSchema)
def get_billing(billing_id: UUID, db: Session = Depends(get_db)):
    return billing_service.get_billing_by_id(db, billing_id)


@router.get("/{billing_id}/items", response_model=List[BillingItemSchema])
def get_billing_items(billing_id: UUID, db: Session = Depends(get_db)):
    return billing_service.get_billing_items(db, billing_id)
