from sqlalchemy import inspect
from sqlalchemy.orm import configure_mappers

from studio_booking.db.base import Base


def test_orm_mappings_are_valid():
    configure_mappers()


def test_all_tables_are_registered():
    assert set(Base.metadata.tables) == {
        "locations",
        "rooms",
        "service_providers",
        "duration_options",
        "upgrades",
        "bookings",
        "booking_upgrades",
        "room_prices",
        "room_price_tiers",
        "upgrade_prices",
        "billings",
        "billing_items",
        "billing_item_upgrades",
    }


def test_backstop_indexes_exist(engine):
    inspector = inspect(engine)
    open_price_indexes = {ix["name"]: ix for ix in inspector.get_indexes("room_prices")}
    assert open_price_indexes["uq_room_prices_open"]["unique"]
    assert "uq_upgrade_prices_open" in {ix["name"] for ix in inspector.get_indexes("upgrade_prices")}

    unique_columns = [
        c["column_names"] for c in inspector.get_unique_constraints("billing_items")
    ] + [
        ix["column_names"] for ix in inspector.get_indexes("billing_items") if ix["unique"]
    ]
    assert ["booking_id"] in unique_columns
