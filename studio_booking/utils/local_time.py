from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from studio_booking.core.config import settings


def location_zone() -> ZoneInfo:
    return ZoneInfo(settings.TIMEZONE)


def local_now() -> datetime:
    """Current wall-clock time of the location, without tzinfo."""
    return datetime.now(location_zone()).replace(tzinfo=None)


def to_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """
    Bring an instant onto the location clock.

    Naive values are already location-local and pass through; aware values are
    converted into the location zone and stripped of their tzinfo.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(location_zone()).replace(tzinfo=None)
