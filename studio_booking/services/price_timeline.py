"""
Price timelines for rooms and upgrades.

Each priced entity owns an append-only sequence of validity windows
``[valid_from, valid_to)``. At most one window is open (``valid_to`` NULL);
opening a new price closes the open one exactly where the new one starts, so
the windows chain without gaps.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.core.exceptions import DataIntegrityError, InvalidRangeError, NotFoundError
from studio_booking.models.room import Room
from studio_booking.models.upgrade import Upgrade
from studio_booking.stores.prices import PriceStore, room_price_store, upgrade_price_store
from studio_booking.utils.local_time import to_local_naive

logger = logging.getLogger(__name__)


class PriceTimeline:
    def __init__(self, db: Session, store: PriceStore, owner_model, label: str):
        self.db = db
        self.store = store
        self.owner_model = owner_model
        self.label = label

    def _require_owner(self, entity_id: UUID, lock: bool = False):
        query = self.db.query(self.owner_model).filter(self.owner_model.id == entity_id)
        if lock:
            # Serializes price writes per entity
            query = query.with_for_update()
        owner = query.first()
        if not owner:
            raise NotFoundError(f"{self.label.capitalize()} not found: {entity_id}")
        return owner

    def get(self, price_id: UUID):
        price = self.store.find(price_id)
        if not price:
            raise NotFoundError(f"{self.label.capitalize()} price not found: {price_id}")
        return price

    def current(self, entity_id: UUID):
        self._require_owner(entity_id)
        price = self.store.find_open(entity_id)
        if not price:
            raise NotFoundError(f"No current price for {self.label} {entity_id}")
        return price

    def at(self, entity_id: UUID, timestamp: datetime):
        self._require_owner(entity_id)
        timestamp = to_local_naive(timestamp)
        matches = self.store.find_at(entity_id, timestamp)
        if len(matches) > 1:
            logger.error(
                "Price timeline of %s %s has %d windows covering %s",
                self.label, entity_id, len(matches), timestamp,
            )
            raise DataIntegrityError(
                f"Overlapping price windows for {self.label} {entity_id} at {timestamp}"
            )
        if not matches:
            raise NotFoundError(f"No price for {self.label} {entity_id} at {timestamp}")
        return matches[0]

    def history(self, entity_id: UUID) -> List:
        """All windows, most recent ``valid_from`` first."""
        self._require_owner(entity_id)
        return self.store.find_history(entity_id)

    def set_new_price(self, entity_id: UUID, amount: Decimal, valid_from: datetime):
        self._require_owner(entity_id, lock=True)
        if amount is None or Decimal(amount) <= 0:
            raise InvalidRangeError("Price must be greater than 0")
        valid_from = to_local_naive(valid_from)

        open_price = self.store.find_open(entity_id)
        if open_price:
            if valid_from <= open_price.valid_from:
                raise InvalidRangeError(
                    f"New price valid_from {valid_from} must be after the current "
                    f"price valid_from {open_price.valid_from}"
                )
            open_price.valid_to = valid_from
            # Close before inserting so the single-open-window index never sees two
            self.store.save(open_price)
            logger.info("Closed %s price %s at %s", self.label, open_price.id, valid_from)

        price = self.store.save(
            self.store.build(entity_id, amount=amount, valid_from=valid_from, valid_to=None)
        )
        logger.info("Opened %s price %s for %s from %s", self.label, price.id, entity_id, valid_from)
        return price


def room_price_timeline(db: Session) -> PriceTimeline:
    return PriceTimeline(db, room_price_store(db), Room, "room")


def upgrade_price_timeline(db: Session) -> PriceTimeline:
    return PriceTimeline(db, upgrade_price_store(db), Upgrade, "upgrade")
