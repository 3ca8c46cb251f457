import uuid
from sqlalchemy import Column, String, DateTime, Uuid, func
from studio_booking.db.session import Base

class Location(Base):
    __tablename__ = "locations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
