import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.core.exceptions import NotFoundError
from studio_booking.models.upgrade import Upgrade
from studio_booking.services.price_timeline import upgrade_price_timeline
from studio_booking.stores.bookings import BookingStore
from studio_booking.stores.prices import upgrade_price_store
from studio_booking.utils.local_time import local_now

logger = logging.getLogger(__name__)


def list_upgrades(db: Session, include_inactive: bool = False) -> List[Upgrade]:
    query = db.query(Upgrade)
    if not include_inactive:
        query = query.filter(Upgrade.is_active == True)  # noqa: E712
    return query.order_by(Upgrade.name).all()


def get_upgrade(db: Session, upgrade_id: UUID) -> Upgrade:
    upgrade = db.query(Upgrade).filter(Upgrade.id == upgrade_id).first()
    if not upgrade:
        raise NotFoundError(f"Upgrade not found: {upgrade_id}")
    return upgrade


def create_upgrade(
    db: Session, name: str, price: Decimal, price_valid_from: Optional[datetime] = None
) -> Upgrade:
    """Create an upgrade and open its price timeline with ``price`` per unit."""
    upgrade = Upgrade(name=name.strip(), is_active=True)
    db.add(upgrade)
    db.flush()
    upgrade_price_timeline(db).set_new_price(upgrade.id, price, price_valid_from or local_now())
    logger.info("Created upgrade %s", upgrade.id)
    return upgrade


def update_upgrade(db: Session, upgrade_id: UUID, **changes) -> Upgrade:
    upgrade = get_upgrade(db, upgrade_id)
    if changes.get("name") is not None:
        changes["name"] = changes["name"].strip()
    for field, value in changes.items():
        setattr(upgrade, field, value)
    db.flush()
    return upgrade


def delete_upgrade(db: Session, upgrade_id: UUID) -> dict:
    """Deactivate an upgrade used by bookings, remove an unused one with its prices."""
    upgrade = get_upgrade(db, upgrade_id)
    if BookingStore(db).count_by_upgrade(upgrade_id):
        upgrade.is_active = False
        db.flush()
        logger.info("Deactivated upgrade %s", upgrade_id)
        return {"id": str(upgrade_id), "is_active": False, "deleted": False}

    upgrade_price_store(db).delete_all(upgrade_id)
    db.delete(upgrade)
    db.flush()
    logger.info("Deleted upgrade %s", upgrade_id)
    return {"id": str(upgrade_id), "is_active": False, "deleted": True}
