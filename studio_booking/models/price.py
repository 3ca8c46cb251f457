import uuid
import enum
from sqlalchemy import Column, DateTime, DECIMAL, Integer, ForeignKey, Index, Uuid, func, Enum as SAEnum
from studio_booking.db.session import Base


class PriceType(str, enum.Enum):
    FIXED = "FIXED"    # flat amount once the tier is reached
    HOURLY = "HOURLY"  # per-hour rate for the minutes inside the tier


class RoomPrice(Base):
    __tablename__ = "room_prices"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    room_id = Column(Uuid, ForeignKey("rooms.id"), nullable=False, index=True)
    amount = Column(DECIMAL(10, 2), nullable=False)
    valid_from = Column(DateTime, nullable=False)
    valid_to = Column(DateTime, nullable=True) # NULL = currently open
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index(
            "uq_room_prices_open",
            "room_id",
            unique=True,
            postgresql_where=valid_to.is_(None),
            sqlite_where=valid_to.is_(None),
        ),
    )


class RoomPriceTier(Base):
    __tablename__ = "room_price_tiers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    room_price_id = Column(Uuid, ForeignKey("room_prices.id", ondelete="CASCADE"), nullable=False, index=True)
    from_minutes = Column(Integer, nullable=False)
    to_minutes = Column(Integer, nullable=True) # NULL = open-ended
    price_type = Column(SAEnum(PriceType, native_enum=False), nullable=False)
    price = Column(DECIMAL(10, 2), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.now())


class UpgradePrice(Base):
    __tablename__ = "upgrade_prices"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    upgrade_id = Column(Uuid, ForeignKey("upgrades.id"), nullable=False, index=True)
    amount = Column(DECIMAL(10, 2), nullable=False)
    valid_from = Column(DateTime, nullable=False)
    valid_to = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    __table_args__ = (
        Index(
            "uq_upgrade_prices_open",
            "upgrade_id",
            unique=True,
            postgresql_where=valid_to.is_(None),
            sqlite_where=valid_to.is_(None),
        ),
    )
