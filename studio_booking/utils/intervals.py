from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from studio_booking.core.exceptions import InvalidRangeError


@dataclass(frozen=True)
class TimeInterval:
    """
    Half-open interval ``[start, end)``.

    Two intervals that only touch (one ends exactly where the other starts)
    do not overlap.
    """

    start: datetime
    end: datetime

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidRangeError(f"Interval end {self.end} lies before its start {self.start}")

    @classmethod
    def from_duration(cls, start: datetime, minutes: int) -> "TimeInterval":
        return cls(start, start + timedelta(minutes=minutes))

    def overlaps(self, other: "TimeInterval") -> bool:
        return self.start < other.end and other.start < self.end

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end


def minute_overlap(lower: int, upper: Optional[int], limit: int) -> int:
    """
    Minutes shared by ``[lower, upper)`` and ``[0, limit)``.

    ``upper=None`` is an open-ended range, cut off at ``limit``.
    """
    effective_upper = limit if upper is None else min(upper, limit)
    return max(0, effective_upper - max(lower, 0))
