"""
Pytest fixtures for test database, client, and sample trips.

Each test gets a fresh in-memory SQLite database; request sessions and the
fixture session share its single connection. Redis is disabled.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["REDIS_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from rezervasyon.main import app
from rezervasyon.db.base import Base
from rezervasyon.db.session import build_engine, get_db, get_session_factory
from rezervasyon.models.trip import Trip
from rezervasyon.services.trip_feed import TripFeed, get_trip_feed

TEST_DATABASE_URL = "sqlite+aiosqlite://"

USER_HEADERS = {"X-User-Id": "1"}
OTHER_USER_HEADERS = {"X-User-Id": "2"}


def make_trip(**overrides) -> SimpleNamespace:
    """Plain trip stand-in for the pure domain functions."""
    fields = dict(
        id=1,
        type="BUS",
        company_name="Test",
        departure="A",
        destination="B",
        date="2025-01-01",
        time="10:00",
        arrival_time="12:00",
        price=750.0,
        total_seats=40,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.fixture
def sample_trips():
    return [
        make_trip(id=1, type="BUS", company_name="Metro Turizm", departure="İstanbul",
                  destination="Ankara", date="2025-01-15", time="10:00",
                  arrival_time="16:00", price=500.0, total_seats=40),
        make_trip(id=2, type="BUS", company_name="Kamil Koç", departure="Ankara",
                  destination="İzmir", date="2025-01-16", time="12:00",
                  arrival_time="20:00", price=600.0, total_seats=40),
        make_trip(id=3, type="FLIGHT", company_name="THY", departure="İstanbul",
                  destination="İzmir", date="2025-01-15", time="14:00",
                  arrival_time="15:00", price=1500.0, total_seats=180),
        make_trip(id=4, type="BUS", company_name="Metro Turizm", departure="İstanbul",
                  destination="Antalya", date="2025-01-17", time="22:00",
                  arrival_time="08:00", price=800.0, total_seats=40),
    ]


@pytest.fixture
def bus_trip_payload() -> dict:
    return {
        "type": "BUS",
        "company_name": "Metro Turizm",
        "departure": "İstanbul",
        "destination": "Ankara",
        "date": "2025-01-15",
        "time": "10:00",
        "arrival_time": "16:00",
        "price": 500.0,
        "total_seats": 40,
    }


@pytest_asyncio.fixture(scope="function")
async def session_factory() -> AsyncGenerator[async_sessionmaker, None]:
    """Create tables in a fresh in-memory database, dispose it afterwards."""
    engine = build_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def feed() -> TripFeed:
    return TripFeed()


@pytest_asyncio.fixture(scope="function")
async def client(session_factory, feed) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client with the DB session, session factory and trip feed overridden."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_trip_feed] = lambda: feed

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_trip(db_session: AsyncSession) -> Trip:
    """A 40-seat bus at 500.0 per seat."""
    trip = Trip(
        type="BUS",
        company_name="Metro Turizm",
        departure="İstanbul",
        destination="Ankara",
        date="2025-01-15",
        time="22:00",
        arrival_time="08:00",
        price=500.0,
        total_seats=40,
    )
    db_session.add(trip)
    await db_session.commit()
    await db_session.refresh(trip)
    return trip


@pytest_asyncio.fixture
async def test_flight(db_session: AsyncSession) -> Trip:
    """A 180-seat flight."""
    trip = Trip(
        type="FLIGHT",
        company_name="THY",
        departure="İstanbul",
        destination="İzmir",
        date="2025-01-16",
        time="14:00",
        arrival_time="15:10",
        price=1500.0,
        total_seats=180,
    )
    db_session.add(trip)
    await db_session.commit()
    await db_session.refresh(trip)
    return trip
