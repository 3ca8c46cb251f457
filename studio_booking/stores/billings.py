from typing import Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from studio_booking.models.billing import Billing, BillingItem


class BillingStore:
    def __init__(self, db: Session):
        self.db = db

    def exists_for_booking(self, booking_id: UUID) -> bool:
        return (
            self.db.query(BillingItem.id).filter(BillingItem.booking_id == booking_id).first()
            is not None
        )

    def billed_booking_ids(self, booking_ids: Iterable[UUID]) -> Set[UUID]:
        ids = list(booking_ids)
        if not ids:
            return set()
        rows = self.db.query(BillingItem.booking_id).filter(BillingItem.booking_id.in_(ids)).all()
        return {row.booking_id for row in rows}

    def save(self, billing: Billing, items: List[BillingItem]) -> Billing:
        billing.items = items
        self.db.add(billing)
        self.db.flush()
        return billing

    def find_all(self) -> List[Billing]:
        return self.db.query(Billing).order_by(Billing.created_at.desc()).all()

    def find_by_provider(self, service_provider_id: UUID) -> List[Billing]:
        return (
            self.db.query(Billing)
            .filter(Billing.service_provider_id == service_provider_id)
            .order_by(Billing.created_at.desc())
            .all()
        )

    def find_by_id(self, billing_id: UUID) -> Optional[Billing]:
        return self.db.query(Billing).filter(Billing.id == billing_id).first()

    def find_items(self, billing_id: UUID) -> List[BillingItem]:
        return (
            self.db.query(BillingItem)
            .options(selectinload(BillingItem.upgrades))
            .filter(BillingItem.billing_id == billing_id)
            .order_by(BillingItem.frozen_start_time)
            .all()
        )
