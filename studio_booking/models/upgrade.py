import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Uuid, func
from studio_booking.db.session import Base

class Upgrade(Base):
    __tablename__ = "upgrades"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, server_default=func.now())
