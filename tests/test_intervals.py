from datetime import datetime, timedelta

import pytest

from studio_booking.core.exceptions import InvalidRangeError
from studio_booking.models.booking import Booking
from studio_booking.utils.intervals import TimeInterval, minute_overlap

NINE = datetime(2030, 3, 4, 9, 0)


def test_from_duration():
    interval = TimeInterval.from_duration(NINE, 75)
    assert interval.end == NINE + timedelta(minutes=75)


def test_touching_intervals_do_not_overlap():
    first = TimeInterval.from_duration(NINE, 60)
    second = TimeInterval.from_duration(NINE + timedelta(minutes=60), 30)
    assert not first.overlaps(second)
    assert not second.overlaps(first)


def test_partial_and_nested_overlap():
    first = TimeInterval.from_duration(NINE, 60)
    assert first.overlaps(TimeInterval.from_duration(NINE + timedelta(minutes=30), 60))
    assert first.overlaps(TimeInterval.from_duration(NINE + timedelta(minutes=10), 5))
    assert TimeInterval.from_duration(NINE - timedelta(minutes=10), 120).overlaps(first)


def test_contains_is_half_open():
    interval = TimeInterval.from_duration(NINE, 60)
    assert interval.contains(NINE)
    assert interval.contains(NINE + timedelta(minutes=59))
    assert not interval.contains(NINE + timedelta(minutes=60))


def test_end_before_start_is_rejected():
    with pytest.raises(InvalidRangeError):
        TimeInterval(NINE, NINE - timedelta(minutes=1))


@pytest.mark.parametrize(
    "lower, upper, limit, expected",
    [
        (0, 60, 30, 30),
        (0, 60, 90, 60),
        (60, None, 90, 30),
        (60, 120, 60, 0),
        (60, None, 45, 0),
    ],
)
def test_minute_overlap(lower, upper, limit, expected):
    assert minute_overlap(lower, upper, limit) == expected


def test_booking_blocked_window_includes_resting_time():
    booking = Booking()
    booking.schedule(NINE, 60, resting_time_minutes=15)
    window = booking.blocked_window
    assert window == TimeInterval(NINE, NINE + timedelta(minutes=75))
    assert window.overlaps(TimeInterval.from_duration(NINE + timedelta(minutes=70), 30))
    assert not window.overlaps(TimeInterval.from_duration(NINE + timedelta(minutes=75), 30))
