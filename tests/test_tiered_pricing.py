from decimal import Decimal
from types import SimpleNamespace

import pytest

from studio_booking.core.exceptions import ConflictError, InvalidRangeError
from studio_booking.models.price import PriceType
from studio_booking.services.tiered_pricing import (
    PriceTierSpec,
    calculate_hourly_price,
    calculate_room_price,
    calculate_tiered_price,
    parse_price_type,
    price_preview,
    validate_tiers,
)


def tier(from_minutes, to_minutes, price_type, price):
    return PriceTierSpec(from_minutes, to_minutes, price_type, Decimal(price))


FIXED_THEN_HOURLY = [
    tier(0, 60, PriceType.FIXED, "50"),
    tier(60, None, PriceType.HOURLY, "30"),
]


@pytest.mark.parametrize(
    "minutes, expected",
    [(30, "50.00"), (60, "50.00"), (90, "65.00"), (150, "95.00")],
)
def test_fixed_then_hourly(minutes, expected):
    assert calculate_tiered_price(minutes, FIXED_THEN_HOURLY) == Decimal(expected)


def test_zero_duration_is_free():
    assert calculate_tiered_price(0, FIXED_THEN_HOURLY) == Decimal("0.00")


def test_tier_order_does_not_matter():
    assert calculate_tiered_price(90, list(reversed(FIXED_THEN_HOURLY))) == Decimal("65.00")


def test_last_closed_tier_absorbs_remainder():
    tiers = [tier(0, 60, PriceType.HOURLY, "60"), tier(60, 120, PriceType.HOURLY, "40")]
    # 60 min at 60/h, the remaining 90 min at 40/h
    assert calculate_tiered_price(150, tiers) == Decimal("120.00")


def test_fixed_tiers_only_charge_once_reached():
    tiers = [
        tier(0, 30, PriceType.FIXED, "20"),
        tier(30, 60, PriceType.FIXED, "15"),
        tier(60, None, PriceType.FIXED, "10"),
    ]
    assert calculate_tiered_price(30, tiers) == Decimal("20.00")
    assert calculate_tiered_price(31, tiers) == Decimal("35.00")
    assert calculate_tiered_price(300, tiers) == Decimal("45.00")


def test_fractional_hours_round_half_up_on_total():
    tiers = [tier(0, None, PriceType.HOURLY, "10")]
    # 10 * 7 / 60 = 1.1666...
    assert calculate_tiered_price(7, tiers) == Decimal("1.17")
    # 10 * 3 / 60 = 0.5 exactly
    assert calculate_tiered_price(3, tiers) == Decimal("0.50")


def test_negative_duration_and_empty_tiers_rejected():
    with pytest.raises(InvalidRangeError):
        calculate_tiered_price(-1, FIXED_THEN_HOURLY)
    with pytest.raises(InvalidRangeError):
        calculate_tiered_price(60, [])


def test_hourly_fallback_without_tiers():
    price = SimpleNamespace(amount=Decimal("60.00"))
    assert calculate_room_price(price, [], 90) == Decimal("90.00")
    assert calculate_room_price(price, FIXED_THEN_HOURLY, 90) == Decimal("65.00")
    assert calculate_hourly_price(Decimal("45"), 20) == Decimal("15.00")


def test_price_preview_uses_configured_durations():
    preview = price_preview(SimpleNamespace(amount=Decimal("60")), FIXED_THEN_HOURLY)
    assert preview[60] == Decimal("50.00")
    assert preview[90] == Decimal("65.00")
    assert preview[15] == Decimal("50.00")


class TestValidateTiers:
    def test_valid_set_is_returned_sorted(self):
        ordered = validate_tiers(list(reversed(FIXED_THEN_HOURLY)))
        assert [t.from_minutes for t in ordered] == [0, 60]

    def test_empty_set_is_valid(self):
        assert validate_tiers([]) == []

    @pytest.mark.parametrize(
        "tiers",
        [
            # gap
            [tier(0, 60, PriceType.FIXED, "50"), tier(90, None, PriceType.HOURLY, "30")],
            # overlap
            [tier(0, 60, PriceType.FIXED, "50"), tier(30, None, PriceType.HOURLY, "30")],
            # not starting at zero
            [tier(15, None, PriceType.HOURLY, "30")],
            # from >= to
            [tier(0, 0, PriceType.FIXED, "50"), tier(0, None, PriceType.HOURLY, "30")],
            # two open-ended tiers
            [tier(0, None, PriceType.FIXED, "50"), tier(60, None, PriceType.HOURLY, "30")],
            # open-ended tier before a closed one
            [tier(0, None, PriceType.FIXED, "50"), tier(60, 120, PriceType.HOURLY, "30")],
            # non-positive price
            [tier(0, None, PriceType.HOURLY, "0")],
            # negative start
            [tier(-10, 60, PriceType.HOURLY, "30"), tier(60, None, PriceType.HOURLY, "30")],
        ],
    )
    def test_invalid_sets_are_rejected(self, tiers):
        with pytest.raises(InvalidRangeError):
            validate_tiers(tiers)


@pytest.mark.parametrize(
    "value, expected",
    [("FIXED", PriceType.FIXED), ("hourly", PriceType.HOURLY), (" Fixed ", PriceType.FIXED)],
)
def test_parse_price_type(value, expected):
    assert parse_price_type(value) is expected


@pytest.mark.parametrize("value", ["DAILY", "", None])
def test_parse_price_type_rejects_unknown(value):
    with pytest.raises(ConflictError):
        parse_price_type(value)
