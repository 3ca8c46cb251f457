import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey, Uuid, func
from studio_booking.db.session import Base

class ServiceProvider(Base):
    __tablename__ = "service_providers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    location_id = Column(Uuid, ForeignKey("locations.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True)
    sort_order = Column(Integer, default=0)
    color = Column(String(7), default="#10B981")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now(), nullable=True)
