"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read at import time: point them at SQLite before the app loads
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["AUTO_CREATE_SCHEMA"] = "false"

import itertools
import json

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import (
    Base,
    Tenant,
    Location,
    Table,
    MenuItem,
    MenuModifier,
    KitchenStation,
    MenuItemStation,
)
from shared.infrastructure.db import get_db
from shared.infrastructure.events import circuit_breaker, redis_pool
from shared.security.auth import sign_jwt


# ID counter for explicit ids in tests that build rows by hand
_id_counter = itertools.count(1000)


def next_id() -> int:
    """Get next unique ID for test entities."""
    return next(_id_counter)


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeRedis:
    """In-memory stand-in for the async Redis client; records publishes."""

    def __init__(self):
        self.published: list[tuple[str, dict]] = []
        self.closed = False

    async def publish(self, channel: str, message: str) -> int:
        self.published.append((channel, json.loads(message)))
        return 1

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self.closed = True

    def event_types(self, channel: str | None = None) -> list[str]:
        return [
            event["type"]
            for ch, event in self.published
            if channel is None or ch == channel
        ]


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    """Replace the Redis pool and reset the publish circuit breaker for every test."""
    fake = FakeRedis()
    monkeypatch.setattr(redis_pool, "_redis_pool", fake)
    monkeypatch.setattr(circuit_breaker, "_event_circuit_breaker", None)
    return fake


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_tenant(db_session):
    """Create a test tenant."""
    tenant = Tenant(name="Test Restaurant Group", slug="test")
    db_session.add(tenant)
    db_session.commit()
    db_session.refresh(tenant)
    return tenant


@pytest.fixture
def seed_location(db_session, seed_tenant):
    """Create a test location."""
    location = Location(
        tenant_id=seed_tenant.id,
        name="Downtown",
        address="123 Test St",
    )
    db_session.add(location)
    db_session.commit()
    db_session.refresh(location)
    return location


@pytest.fixture
def seed_tables(db_session, seed_location):
    """Three tables seating 2, 4 and 6."""
    tables = [
        Table(location_id=seed_location.id, number=number, capacity=capacity)
        for number, capacity in enumerate([2, 4, 6], start=1)
    ]
    db_session.add_all(tables)
    db_session.commit()
    for table in tables:
        db_session.refresh(table)
    return tables


@pytest.fixture
def other_location(db_session):
    """A location of a different tenant."""
    tenant = Tenant(name="Other Group", slug="other")
    db_session.add(tenant)
    db_session.flush()
    location = Location(tenant_id=tenant.id, name="Uptown")
    db_session.add(location)
    db_session.flush()
    db_session.add(Table(location_id=location.id, number=1, capacity=4))
    db_session.commit()
    db_session.refresh(location)
    return location


@pytest.fixture
def seed_menu(db_session, seed_location):
    """
    Menu of the test location.

    burger 1200 (+ cheese 300), fries 500, soda 250, soup (unavailable) 700.
    """
    burger = MenuItem(location_id=seed_location.id, name="Burger", price_cents=1200)
    fries = MenuItem(location_id=seed_location.id, name="Fries", price_cents=500)
    soda = MenuItem(location_id=seed_location.id, name="Soda", price_cents=250)
    soup = MenuItem(location_id=seed_location.id, name="Soup", price_cents=700, available=False)
    db_session.add_all([burger, fries, soda, soup])
    db_session.flush()

    cheese = MenuModifier(menu_item_id=burger.id, name="Extra cheese", price_cents=300)
    db_session.add(cheese)
    db_session.commit()

    return {
        "burger": burger,
        "fries": fries,
        "soda": soda,
        "soup": soup,
        "cheese": cheese,
    }


@pytest.fixture
def seed_stations(db_session, seed_location, seed_menu):
    """
    Grill prepares burgers, fryer prepares fries. Soda has no station.
    """
    grill = KitchenStation(location_id=seed_location.id, name="Grill", sort_order=1)
    fryer = KitchenStation(location_id=seed_location.id, name="Fryer", sort_order=2)
    db_session.add_all([grill, fryer])
    db_session.flush()
    db_session.add_all([
        MenuItemStation(menu_item_id=seed_menu["burger"].id, station_id=grill.id),
        MenuItemStation(menu_item_id=seed_menu["fries"].id, station_id=fryer.id),
    ])
    db_session.commit()
    return {"grill": grill, "fryer": fryer}


@pytest.fixture
def auth_headers(seed_tenant):
    """Bearer token for a staff member of the test tenant."""
    token = sign_jwt({"sub": "1", "tenant_id": seed_tenant.id, "email": "host@test.com"})
    return {"Authorization": f"Bearer {token}"}
