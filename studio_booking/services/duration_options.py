import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from studio_booking.core.config import settings
from studio_booking.core.exceptions import ConflictError, InvalidRangeError, NotFoundError
from studio_booking.models.duration_option import DurationOption
from studio_booking.services.common import next_sort_order, require_location

logger = logging.getLogger(__name__)


def list_duration_options(
    db: Session, location_id: UUID, include_inactive: bool = False
) -> List[DurationOption]:
    query = db.query(DurationOption).filter(DurationOption.location_id == location_id)
    if not include_inactive:
        query = query.filter(DurationOption.is_active == True)  # noqa: E712
    return query.order_by(DurationOption.sort_order).all()


def get_duration_option(db: Session, option_id: UUID) -> DurationOption:
    option = db.query(DurationOption).filter(DurationOption.id == option_id).first()
    if not option:
        raise NotFoundError(f"Duration option not found: {option_id}")
    return option


def _validate_shape(
    is_variable: bool,
    minutes: Optional[int],
    min_minutes: Optional[int],
    max_minutes: Optional[int],
    step_minutes: Optional[int],
) -> None:
    limit = settings.MAX_DURATION_MINUTES
    if not is_variable:
        if minutes is None or minutes <= 0:
            raise InvalidRangeError("Duration must be greater than 0 minutes")
        if minutes > limit:
            raise InvalidRangeError(f"Duration must not exceed {limit} minutes")
        return

    if min_minutes is None or max_minutes is None or step_minutes is None:
        raise InvalidRangeError("Variable durations need minimum, maximum and step")
    if min_minutes <= 0:
        raise InvalidRangeError("Minimum must be greater than 0 minutes")
    if max_minutes <= min_minutes:
        raise InvalidRangeError("Maximum must be greater than minimum")
    if step_minutes <= 0:
        raise InvalidRangeError("Step must be greater than 0 minutes")
    if max_minutes > limit:
        raise InvalidRangeError(f"Maximum must not exceed {limit} minutes")


def _active_count(db: Session, location_id: UUID) -> int:
    return (
        db.query(func.count(DurationOption.id))
        .filter(DurationOption.location_id == location_id, DurationOption.is_active == True)  # noqa: E712
        .scalar()
    )


def create_duration_option(
    db: Session,
    location_id: UUID,
    label: str,
    minutes: Optional[int] = None,
    is_variable: bool = False,
    min_minutes: Optional[int] = None,
    max_minutes: Optional[int] = None,
    step_minutes: Optional[int] = None,
    sort_order: Optional[int] = None,
) -> DurationOption:
    _validate_shape(is_variable, minutes, min_minutes, max_minutes, step_minutes)
    require_location(db, location_id)

    option = DurationOption(
        location_id=location_id,
        label=label.strip(),
        minutes=0 if is_variable else minutes,
        is_variable=is_variable,
        min_minutes=min_minutes if is_variable else None,
        max_minutes=max_minutes if is_variable else None,
        step_minutes=step_minutes if is_variable else None,
        sort_order=(
            sort_order if sort_order is not None
            else next_sort_order(db, DurationOption, location_id)
        ),
        is_active=True,
    )
    db.add(option)
    db.flush()
    return option


def update_duration_option(
    db: Session,
    option_id: UUID,
    label: str,
    minutes: Optional[int],
    is_variable: bool,
    min_minutes: Optional[int],
    max_minutes: Optional[int],
    step_minutes: Optional[int],
    sort_order: int,
    is_active: bool,
) -> DurationOption:
    _validate_shape(is_variable, minutes, min_minutes, max_minutes, step_minutes)
    option = get_duration_option(db, option_id)

    if option.is_active and not is_active and _active_count(db, option.location_id) <= 1:
        raise ConflictError("At least one duration option must stay active")

    option.label = label.strip()
    option.minutes = 0 if is_variable else minutes
    option.is_variable = is_variable
    option.min_minutes = min_minutes if is_variable else None
    option.max_minutes = max_minutes if is_variable else None
    option.step_minutes = step_minutes if is_variable else None
    option.sort_order = sort_order
    option.is_active = is_active
    db.flush()
    return option


def delete_duration_option(db: Session, option_id: UUID) -> None:
    option = get_duration_option(db, option_id)
    if option.is_active and _active_count(db, option.location_id) <= 1:
        raise ConflictError("At least one duration option must stay active")
    db.delete(option)
    db.flush()


def validate_duration(db: Session, location_id: UUID, duration_minutes: int) -> None:
    """
    Check a booking duration against the location's active options.

    A location without any active option accepts every positive duration.
    """
    if duration_minutes is None or duration_minutes <= 0:
        raise InvalidRangeError("Duration must be greater than 0 minutes")

    options = list_duration_options(db, location_id)
    if not options or any(option.allows(duration_minutes) for option in options):
        return

    allowed = ", ".join(option.describe() for option in options)
    raise InvalidRangeError(f"Invalid duration of {duration_minutes} min. Allowed: {allowed}")
