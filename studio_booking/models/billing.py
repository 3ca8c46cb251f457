import uuid
from sqlalchemy import Column, String, DateTime, DECIMAL, Integer, ForeignKey, Text, Uuid, func
from sqlalchemy.orm import relationship
from studio_booking.db.session import Base

class Billing(Base):
    __tablename__ = "billings"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    service_provider_id = Column(Uuid, ForeignKey("service_providers.id"), nullable=False, index=True)
    period_start = Column(DateTime, nullable=False)
    period_end = Column(DateTime, nullable=False)
    total_amount = Column(DECIMAL(10, 2), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), index=True)

    items = relationship("BillingItem", back_populates="billing", cascade="all, delete-orphan")

class BillingItem(Base):
    __tablename__ = "billing_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    billing_id = Column(Uuid, ForeignKey("billings.id"), nullable=False, index=True)
    # Unique: a booking is billed at most once
    booking_id = Column(Uuid, ForeignKey("bookings.id"), nullable=False, unique=True)

    # Booking data frozen at billing time
    frozen_start_time = Column(DateTime, nullable=False)
    frozen_end_time = Column(DateTime, nullable=False)
    frozen_duration_minutes = Column(Integer, nullable=False)
    frozen_resting_time_minutes = Column(Integer, nullable=False)
    frozen_client_alias = Column(String(255), nullable=True)
    frozen_room_name = Column(String(100), nullable=False)

    room_price_id = Column(Uuid, ForeignKey("room_prices.id"), nullable=False)
    frozen_room_price_amount = Column(DECIMAL(10, 2), nullable=False)

    subtotal_room = Column(DECIMAL(10, 2), nullable=False)
    subtotal_upgrades = Column(DECIMAL(10, 2), nullable=False, default=0)
    total_amount = Column(DECIMAL(10, 2), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    billing = relationship("Billing", back_populates="items")
    upgrades = relationship("BillingItemUpgrade", back_populates="billing_item", cascade="all, delete-orphan")

class BillingItemUpgrade(Base):
    __tablename__ = "billing_item_upgrades"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    billing_item_id = Column(Uuid, ForeignKey("billing_items.id"), nullable=False, index=True)
    upgrade_id = Column(Uuid, ForeignKey("upgrades.id"), nullable=False)
    upgrade_price_id = Column(Uuid, ForeignKey("upgrade_prices.id"), nullable=False)
    frozen_upgrade_name = Column(String(100), nullable=False)
    frozen_quantity = Column(Integer, nullable=False)
    frozen_upgrade_price_amount = Column(DECIMAL(10, 2), nullable=False)
    total_amount = Column(DECIMAL(10, 2), nullable=False)

    billing_item = relationship("BillingItem", back_populates="upgrades")
