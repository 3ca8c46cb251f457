import uuid
from datetime import timedelta
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship
from studio_booking.db.session import Base
from studio_booking.utils.intervals import TimeInterval

class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    room_id = Column(Uuid, ForeignKey("rooms.id"), nullable=False, index=True)
    provider_id = Column(Uuid, ForeignKey("service_providers.id"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False) # location-local
    duration_minutes = Column(Integer, nullable=False)
    resting_time_minutes = Column(Integer, nullable=False, default=0)
    blocked_until = Column(DateTime, nullable=False) # start + duration + resting
    client_alias = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now(), nullable=True)

    upgrades = relationship("BookingUpgrade", back_populates="booking", cascade="all, delete-orphan")

    __table_args__ = (
        Index("ix_bookings_room_window", "room_id", "start_time", "blocked_until"),
    )

    @property
    def end_time(self):
        return self.start_time + timedelta(minutes=self.duration_minutes)

    @property
    def blocked_window(self) -> TimeInterval:
        return TimeInterval(self.start_time, self.blocked_until)

    def schedule(self, start_time, duration_minutes: int, resting_time_minutes: int = 0):
        self.start_time = start_time
        self.duration_minutes = duration_minutes
        self.resting_time_minutes = resting_time_minutes
        self.blocked_until = start_time + timedelta(minutes=duration_minutes + resting_time_minutes)

class BookingUpgrade(Base):
    __tablename__ = "booking_upgrades"

    booking_id = Column(Uuid, ForeignKey("bookings.id", ondelete="CASCADE"), primary_key=True)
    upgrade_id = Column(Uuid, ForeignKey("upgrades.id"), primary_key=True, index=True)
    quantity = Column(Integer, nullable=False, default=1)

    booking = relationship("Booking", back_populates="upgrades")
