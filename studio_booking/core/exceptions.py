"""
Error kinds raised by the booking core.

Services raise these; the exception handlers registered in ``main`` turn a
``StudioError`` into a JSON error body with the matching status code.
"""
from typing import Iterable, List, Optional


class StudioError(Exception):
    status_code = 400
    error = "bad_request"

    def __init__(self, message: str, booking_ids: Optional[Iterable] = None):
        super().__init__(message)
        self.message = message
        self.booking_ids: List[str] = [str(b) for b in booking_ids or []]


class NotFoundError(StudioError):
    """Unknown room, provider, booking, price, tier, upgrade, location or billing."""

    status_code = 404
    error = "not_found"


class ConflictError(StudioError):
    """Booking interval overlap, duplicate names, invalid price type."""

    status_code = 409
    error = "conflict"


class InvalidRangeError(StudioError):
    """Price validity, tier coverage, duration or period out of range."""

    status_code = 422
    error = "invalid_range"


class AlreadyBilledError(StudioError):
    status_code = 409
    error = "already_billed"


class PeriodMismatchError(StudioError):
    status_code = 422
    error = "period_mismatch"


class DataIntegrityError(RuntimeError):
    """Stored data violates an invariant the write paths are meant to keep."""
