from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.models.price import RoomPriceTier


class TierStore:
    def __init__(self, db: Session):
        self.db = db

    def find(self, tier_id: UUID) -> Optional[RoomPriceTier]:
        return self.db.query(RoomPriceTier).filter(RoomPriceTier.id == tier_id).first()

    def find_by_price(self, room_price_id: UUID) -> List[RoomPriceTier]:
        return (
            self.db.query(RoomPriceTier)
            .filter(RoomPriceTier.room_price_id == room_price_id)
            .order_by(RoomPriceTier.from_minutes)
            .all()
        )

    def replace_all(self, room_price_id: UUID, tiers: Iterable) -> List[RoomPriceTier]:
        """Delete every tier of the price, then insert ``tiers`` (sorted) in their place."""
        self.db.query(RoomPriceTier).filter(
            RoomPriceTier.room_price_id == room_price_id
        ).delete(synchronize_session="fetch")

        created = [
            RoomPriceTier(
                room_price_id=room_price_id,
                from_minutes=tier.from_minutes,
                to_minutes=tier.to_minutes,
                price_type=tier.price_type,
                price=tier.price,
                sort_order=index,
            )
            for index, tier in enumerate(tiers)
        ]
        self.db.add_all(created)
        self.db.flush()
        return sorted(created, key=lambda t: t.from_minutes)

    def delete_for_prices(self, room_price_ids: List[UUID]) -> None:
        if room_price_ids:
            self.db.query(RoomPriceTier).filter(
                RoomPriceTier.room_price_id.in_(room_price_ids)
            ).delete(synchronize_session="fetch")
