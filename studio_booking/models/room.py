import uuid
from sqlalchemy import Column, String, Boolean, DateTime, DECIMAL, Integer, ForeignKey, Uuid, func
from studio_booking.db.session import Base

class Room(Base):
    __tablename__ = "rooms"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    location_id = Column(Uuid, ForeignKey("locations.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    hourly_rate = Column(DECIMAL(10, 2), nullable=False) # legacy default, prices live in room_prices
    is_active = Column(Boolean, default=True)
    sort_order = Column(Integer, default=0)
    color = Column(String(7), default="#3B82F6")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now(), nullable=True)
