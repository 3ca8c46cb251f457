import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from studio_booking.models.location import Location
from studio_booking.services.common import require_location

logger = logging.getLogger(__name__)


def list_locations(db: Session) -> List[Location]:
    return db.query(Location).order_by(Location.name).all()


def get_location(db: Session, location_id: UUID) -> Location:
    return require_location(db, location_id)


def create_location(db: Session, name: str) -> Location:
    location = Location(name=name.strip())
    db.add(location)
    db.flush()
    logger.info("Created location %s", location.id)
    return location
