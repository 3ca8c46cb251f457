import os

# Must be set before the settings object is created
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import timedelta
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from studio_booking.db.base import Base
from studio_booking.db.session import get_db
from studio_booking.main import app
from studio_booking.services import locations, providers, rooms, upgrades
from studio_booking.utils.local_time import local_now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Time helpers
# ---------------------------------------------------------------------------


@pytest.fixture
def base_time():
    """09:00 one week from now, on the location clock."""
    return (local_now() + timedelta(days=7)).replace(hour=9, minute=0, second=0, microsecond=0)


@pytest.fixture
def long_ago():
    return (local_now() - timedelta(days=60)).replace(hour=0, minute=0, second=0, microsecond=0)


# ---------------------------------------------------------------------------
# Catalog factories
# ---------------------------------------------------------------------------


@pytest.fixture
def location(db):
    return locations.create_location(db, "Main Studio")


@pytest.fixture
def room(db, location, long_ago):
    return rooms.create_room(db, location.id, "Studio A", Decimal("60.00"), price_valid_from=long_ago)


@pytest.fixture
def other_room(db, location, long_ago):
    return rooms.create_room(db, location.id, "Studio B", Decimal("40.00"), price_valid_from=long_ago)


@pytest.fixture
def provider(db, location):
    return providers.create_provider(db, location.id, "Anna")


@pytest.fixture
def other_provider(db, location):
    return providers.create_provider(db, location.id, "Ben")


@pytest.fixture
def upgrade(db, long_ago):
    return upgrades.create_upgrade(db, "Towels", Decimal("5.00"), price_valid_from=long_ago)
