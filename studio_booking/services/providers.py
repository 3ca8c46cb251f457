import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.core.config import settings
from studio_booking.core.exceptions import ConflictError, NotFoundError
from studio_booking.models.service_provider import ServiceProvider
from studio_booking.services.common import name_taken, next_sort_order, require_location
from studio_booking.stores.bookings import BookingStore
from studio_booking.utils.local_time import local_now

logger = logging.getLogger(__name__)


def list_providers(db: Session, location_id: UUID, include_inactive: bool = False) -> List[ServiceProvider]:
    query = db.query(ServiceProvider).filter(ServiceProvider.location_id == location_id)
    if not include_inactive:
        query = query.filter(ServiceProvider.is_active == True)  # noqa: E712
    return query.order_by(ServiceProvider.sort_order, ServiceProvider.name).all()


def get_provider(db: Session, provider_id: UUID) -> ServiceProvider:
    provider = db.query(ServiceProvider).filter(ServiceProvider.id == provider_id).first()
    if not provider:
        raise NotFoundError(f"Service provider not found: {provider_id}")
    return provider


def create_provider(
    db: Session,
    location_id: UUID,
    name: str,
    sort_order: Optional[int] = None,
    color: Optional[str] = None,
) -> ServiceProvider:
    require_location(db, location_id)
    if name_taken(db, ServiceProvider, location_id, name):
        raise ConflictError(f"A provider named '{name.strip()}' already exists at this location")

    provider = ServiceProvider(
        location_id=location_id,
        name=name.strip(),
        sort_order=(
            sort_order if sort_order is not None
            else next_sort_order(db, ServiceProvider, location_id)
        ),
        color=color or settings.DEFAULT_PROVIDER_COLOR,
        is_active=True,
    )
    db.add(provider)
    db.flush()
    logger.info("Created service provider %s at location %s", provider.id, location_id)
    return provider


def update_provider(db: Session, provider_id: UUID, **changes) -> ServiceProvider:
    provider = get_provider(db, provider_id)
    name = changes.get("name")
    if name is not None:
        if name_taken(db, ServiceProvider, provider.location_id, name, exclude_id=provider_id):
            raise ConflictError(f"A provider named '{name.strip()}' already exists at this location")
        changes["name"] = name.strip()

    for field, value in changes.items():
        setattr(provider, field, value)
    db.flush()
    return provider


def delete_provider(db: Session, provider_id: UUID) -> dict:
    provider = get_provider(db, provider_id)
    bookings = BookingStore(db)

    future = bookings.count_future_by_provider(provider_id, local_now())
    if future:
        raise ConflictError(
            f"Provider has {future} upcoming booking(s); deactivate it instead of deleting"
        )

    if bookings.count_by_provider(provider_id):
        provider.is_active = False
        db.flush()
        logger.info("Deactivated service provider %s", provider_id)
        return {"id": str(provider_id), "is_active": False, "deleted": False}

    db.delete(provider)
    db.flush()
    logger.info("Deleted service provider %s", provider_id)
    return {"id": str(provider_id), "is_active": False, "deleted": True}


def get_booking_count(db: Session, provider_id: UUID) -> int:
    get_provider(db, provider_id)
    return BookingStore(db).count_by_provider(provider_id)
