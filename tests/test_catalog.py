import uuid
from datetime import timedelta
from decimal import Decimal

import pytest

from studio_booking.core.config import settings
from studio_booking.core.exceptions import ConflictError, InvalidRangeError, NotFoundError
from studio_booking.models.price import PriceType, RoomPrice, UpgradePrice
from studio_booking.services import (
    bookings,
    calendar,
    duration_options,
    locations,
    price_tiers,
    providers,
    rooms,
    upgrades,
)
from studio_booking.services.price_timeline import room_price_timeline
from studio_booking.services.tiered_pricing import PriceTierSpec
from studio_booking.utils.local_time import local_now


@pytest.fixture
def allow_past(monkeypatch):
    monkeypatch.setattr(settings, "ALLOW_PAST_BOOKINGS", True)


def book(db, room, provider, start, minutes=60, upgrades=None):
    return bookings.create_booking(
        db, provider_id=provider.id, room_id=room.id, start_time=start,
        duration_minutes=minutes, upgrades=upgrades,
    )


class TestLocations:
    def test_create_list_get(self, db):
        created = locations.create_location(db, "  Downtown ")
        assert created.name == "Downtown"
        assert [l.id for l in locations.list_locations(db)] == [created.id]
        assert locations.get_location(db, created.id).id == created.id
        with pytest.raises(NotFoundError):
            locations.get_location(db, uuid.uuid4())


class TestRooms:
    def test_defaults(self, db, location, room, other_room):
        assert room.color == settings.DEFAULT_ROOM_COLOR
        assert (room.sort_order, other_room.sort_order) == (1, 2)
        assert room_price_timeline(db).current(room.id).amount == Decimal("60.00")

    def test_names_unique_per_location_case_insensitive(self, db, location, room):
        with pytest.raises(ConflictError):
            rooms.create_room(db, location.id, "studio a ", Decimal("10"))
        other = locations.create_location(db, "Other")
        rooms.create_room(db, other.id, "Studio A", Decimal("10"))

    def test_rename_checks_other_rooms_only(self, db, room, other_room):
        rooms.update_room(db, room.id, name="STUDIO A")
        with pytest.raises(ConflictError):
            rooms.update_room(db, room.id, name="studio b")

    def test_list_hides_inactive(self, db, location, room, other_room):
        rooms.update_room(db, other_room.id, is_active=False)
        assert [r.id for r in rooms.list_rooms(db, location.id)] == [room.id]
        assert len(rooms.list_rooms(db, location.id, include_inactive=True)) == 2

    def test_unknown_location(self, db):
        with pytest.raises(NotFoundError):
            rooms.create_room(db, uuid.uuid4(), "Nowhere", Decimal("10"))

    def test_hard_delete_without_bookings(self, db, room):
        open_price = room_price_timeline(db).current(room.id)
        price_tiers.replace_tiers(db, room.id, open_price.id, [
            PriceTierSpec(0, None, PriceType.HOURLY, Decimal("55")),
        ])

        result = rooms.delete_room(db, room.id)

        assert result["deleted"] is True
        assert db.query(RoomPrice).filter(RoomPrice.room_id == room.id).count() == 0
        with pytest.raises(NotFoundError):
            rooms.get_room(db, room.id)

    def test_soft_delete_with_past_bookings(self, db, room, provider, allow_past):
        book(db, room, provider, local_now() - timedelta(days=2))

        result = rooms.delete_room(db, room.id)

        assert result == {"id": str(room.id), "is_active": False, "deleted": False}
        assert rooms.get_room(db, room.id).is_active is False
        assert rooms.get_booking_count(db, room.id) == 1

    def test_future_bookings_block_delete(self, db, room, provider, base_time):
        book(db, room, provider, base_time)
        with pytest.raises(ConflictError):
            rooms.delete_room(db, room.id)


class TestProviders:
    def test_create_and_unique_names(self, db, location, provider):
        assert provider.color == settings.DEFAULT_PROVIDER_COLOR
        with pytest.raises(ConflictError):
            providers.create_provider(db, location.id, "ANNA")

    def test_delete_rules(self, db, room, provider, other_provider, base_time, allow_past):
        assert providers.delete_provider(db, other_provider.id)["deleted"] is True

        book(db, room, provider, base_time)
        with pytest.raises(ConflictError):
            providers.delete_provider(db, provider.id)

    def test_soft_delete(self, db, room, provider, allow_past):
        book(db, room, provider, local_now() - timedelta(days=1))
        assert providers.delete_provider(db, provider.id)["deleted"] is False
        assert providers.get_provider(db, provider.id).is_active is False
        assert providers.get_booking_count(db, provider.id) == 1


class TestDurationOptions:
    def test_create_fixed_and_variable(self, db, location):
        fixed = duration_options.create_duration_option(db, location.id, "1 h", minutes=60)
        variable = duration_options.create_duration_option(
            db, location.id, "Flex", is_variable=True, min_minutes=30, max_minutes=180, step_minutes=15,
        )
        assert [o.id for o in duration_options.list_duration_options(db, location.id)] == [fixed.id, variable.id]
        assert variable.allows(45) and not variable.allows(50) and not variable.allows(195)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"minutes": 0},
            {"minutes": 481},
            {"is_variable": True, "min_minutes": 60, "max_minutes": 60, "step_minutes": 15},
            {"is_variable": True, "min_minutes": 30, "max_minutes": 600, "step_minutes": 15},
            {"is_variable": True, "min_minutes": 30, "max_minutes": 90, "step_minutes": 0},
            {"is_variable": True, "min_minutes": 30},
        ],
    )
    def test_invalid_shapes(self, db, location, kwargs):
        with pytest.raises(InvalidRangeError):
            duration_options.create_duration_option(db, location.id, "Bad", **kwargs)

    def test_last_active_option_stays(self, db, location):
        only = duration_options.create_duration_option(db, location.id, "1 h", minutes=60)
        with pytest.raises(ConflictError):
            duration_options.delete_duration_option(db, only.id)
        with pytest.raises(ConflictError):
            duration_options.update_duration_option(
                db, only.id, "1 h", 60, False, None, None, None, 1, False
            )

        second = duration_options.create_duration_option(db, location.id, "2 h", minutes=120)
        duration_options.delete_duration_option(db, only.id)
        assert [o.id for o in duration_options.list_duration_options(db, location.id)] == [second.id]

    def test_location_without_options_accepts_any_duration(self, db, location):
        duration_options.validate_duration(db, location.id, 37)
        with pytest.raises(InvalidRangeError):
            duration_options.validate_duration(db, location.id, 0)


class TestUpgrades:
    def test_create_opens_price(self, db, upgrade):
        assert upgrades.get_upgrade(db, upgrade.id).is_active
        assert [u.id for u in upgrades.list_upgrades(db)] == [upgrade.id]

    def test_soft_delete_when_booked(self, db, room, provider, upgrade, base_time):
        book(db, room, provider, base_time, upgrades={upgrade.id: 1})
        assert upgrades.delete_upgrade(db, upgrade.id)["deleted"] is False
        assert upgrades.list_upgrades(db) == []
        assert len(upgrades.list_upgrades(db, include_inactive=True)) == 1

    def test_hard_delete_when_unused(self, db, upgrade):
        assert upgrades.delete_upgrade(db, upgrade.id)["deleted"] is True
        assert db.query(UpgradePrice).filter(UpgradePrice.upgrade_id == upgrade.id).count() == 0
        with pytest.raises(NotFoundError):
            upgrades.get_upgrade(db, upgrade.id)


class TestPriceTiers:
    @pytest.fixture
    def open_price(self, db, room):
        return room_price_timeline(db).current(room.id)

    def test_replace_and_list(self, db, room, open_price):
        created = price_tiers.replace_tiers(db, room.id, open_price.id, [
            PriceTierSpec(60, None, PriceType.HOURLY, Decimal("30")),
            PriceTierSpec(0, 60, PriceType.FIXED, Decimal("50")),
        ])
        assert [(t.from_minutes, t.sort_order) for t in created] == [(0, 0), (60, 1)]
        listed = price_tiers.list_tiers(db, room.id, open_price.id)
        assert [t.price_type for t in listed] == [PriceType.FIXED, PriceType.HOURLY]

        preview = price_tiers.preview_room_price(db, room.id, open_price.id)
        assert preview[90] == Decimal("65.00")

    def test_create_update_delete(self, db, room, open_price):
        first_id = price_tiers.create_tier(
            db, room.id, open_price.id, PriceTierSpec(0, 60, PriceType.FIXED, Decimal("50"))
        ).id
        price_tiers.create_tier(
            db, room.id, open_price.id, PriceTierSpec(60, None, PriceType.HOURLY, Decimal("30"))
        )
        with pytest.raises(InvalidRangeError):
            price_tiers.create_tier(
                db, room.id, open_price.id, PriceTierSpec(30, 90, PriceType.HOURLY, Decimal("30"))
            )

        current = price_tiers.list_tiers(db, room.id, open_price.id)
        updated = price_tiers.update_tier(
            db, room.id, open_price.id, current[0].id,
            PriceTierSpec(0, 60, PriceType.FIXED, Decimal("55")),
        )
        assert updated.price == Decimal("55")
        assert updated.id != first_id

        with pytest.raises(InvalidRangeError):
            # Removing the first tier would leave a gap at minute 0
            price_tiers.delete_tier(db, room.id, open_price.id, updated.id)

        last = price_tiers.list_tiers(db, room.id, open_price.id)[1]
        price_tiers.delete_tier(db, room.id, open_price.id, last.id)
        assert [t.from_minutes for t in price_tiers.list_tiers(db, room.id, open_price.id)] == [0]

    def test_closed_price_rejects_edits(self, db, room, open_price, base_time):
        room_price_timeline(db).set_new_price(room.id, Decimal("70"), base_time)
        with pytest.raises(InvalidRangeError):
            price_tiers.replace_tiers(db, room.id, open_price.id, [])

    def test_price_of_other_room(self, db, room, other_room, open_price):
        with pytest.raises(NotFoundError):
            price_tiers.list_tiers(db, other_room.id, open_price.id)
        with pytest.raises(NotFoundError):
            price_tiers.delete_tier(db, room.id, open_price.id, uuid.uuid4())


class TestCalendar:
    def test_rooms_with_bookings_of_the_day(self, db, location, room, other_room, provider, base_time):
        late = book(db, room, provider, base_time + timedelta(hours=3))
        early = book(db, room, provider, base_time)
        book(db, other_room, provider, base_time + timedelta(days=1))

        day = calendar.get_calendar_for_date(db, location.id, base_time.date())

        assert day.day == base_time.date()
        assert [r.room.id for r in day.rooms] == [room.id, other_room.id]
        assert [b.id for b in day.rooms[0].bookings] == [early.id, late.id]
        assert day.rooms[1].bookings == []

    def test_unknown_location(self, db, base_time):
        with pytest.raises(NotFoundError):
            calendar.get_calendar_for_date(db, uuid.uuid4(), base_time.date())
