import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey, Uuid, func
from studio_booking.db.session import Base

class DurationOption(Base):
    __tablename__ = "duration_options"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    location_id = Column(Uuid, ForeignKey("locations.id"), nullable=False, index=True)
    minutes = Column(Integer, nullable=False, default=0) # 0 for variable options
    label = Column(String(50), nullable=False)
    is_variable = Column(Boolean, default=False)
    min_minutes = Column(Integer, nullable=True)
    max_minutes = Column(Integer, nullable=True)
    step_minutes = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True)
    sort_order = Column(Integer, default=0)
    created_at = Column(DateTime, server_default=func.now())

    def allows(self, duration_minutes: int) -> bool:
        if not self.is_variable:
            return self.minutes == duration_minutes
        low = self.min_minutes or 0
        high = self.max_minutes if self.max_minutes is not None else duration_minutes
        step = self.step_minutes or 1
        return low <= duration_minutes <= high and (duration_minutes - low) % step == 0

    def describe(self) -> str:
        if self.is_variable:
            return f"{self.min_minutes}-{self.max_minutes} min (steps of {self.step_minutes})"
        return f"{self.minutes} min"
