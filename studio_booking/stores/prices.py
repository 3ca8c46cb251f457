from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from studio_booking.models.price import RoomPrice, UpgradePrice


class PriceStore:
    """
    Validity-window price rows of one owner kind.

    ``model`` is ``RoomPrice`` or ``UpgradePrice``; ``owner_column`` names the
    foreign key pointing at the priced entity.
    """

    def __init__(self, db: Session, model, owner_column: str):
        self.db = db
        self.model = model
        self.owner = getattr(model, owner_column)
        self.owner_column = owner_column

    def find(self, price_id: UUID):
        return self.db.query(self.model).filter(self.model.id == price_id).first()

    def find_open(self, entity_id: UUID):
        return (
            self.db.query(self.model)
            .filter(self.owner == entity_id, self.model.valid_to.is_(None))
            .first()
        )

    def find_at(self, entity_id: UUID, timestamp: datetime) -> List:
        # Every match is returned so the caller can detect broken timelines
        return (
            self.db.query(self.model)
            .filter(
                self.owner == entity_id,
                self.model.valid_from <= timestamp,
                or_(self.model.valid_to.is_(None), self.model.valid_to > timestamp),
            )
            .all()
        )

    def find_history(self, entity_id: UUID) -> List:
        return (
            self.db.query(self.model)
            .filter(self.owner == entity_id)
            .order_by(self.model.valid_from.desc())
            .all()
        )

    def build(self, entity_id: UUID, **values):
        return self.model(**{self.owner_column: entity_id}, **values)

    def save(self, price):
        self.db.add(price)
        self.db.flush()
        return price

    def delete_all(self, entity_id: UUID) -> None:
        self.db.query(self.model).filter(self.owner == entity_id).delete(synchronize_session="fetch")


def room_price_store(db: Session) -> PriceStore:
    return PriceStore(db, RoomPrice, "room_id")


def upgrade_price_store(db: Session) -> PriceStore:
    return PriceStore(db, UpgradePrice, "upgrade_id")
