"""
Trip service: the trip half of the persistence collaborator plus the
facet/search views built on the pure trip filters.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rezervasyon.core.config import get_settings
from rezervasyon.core.exceptions import TripNotFound, TripValidationError
from rezervasyon.core.logging import get_logger
from rezervasyon.core.metrics import record_trip_operation
from rezervasyon.domain import trip_filter
from rezervasyon.domain.trip_validator import validate_trip
from rezervasyon.models.trip import Trip
from rezervasyon.schemas.trip import TripCreate, TripFacets
from rezervasyon.services.trip_feed import TripFeed, trip_feed

logger = get_logger(__name__)
settings = get_settings()


async def create_trip(db: AsyncSession, trip_data: TripCreate, feed: TripFeed = trip_feed) -> Trip:
    """Validate and insert a trip. Returns the stored trip with its new id."""
    try:
        cleaned = validate_trip(
            trip_data.type,
            trip_data.total_seats,
            trip_data.price,
            company_name=trip_data.company_name,
            departure=trip_data.departure,
            destination=trip_data.destination,
            date=trip_data.date,
            time=trip_data.time,
            arrival_time=trip_data.arrival_time,
        )
    except TripValidationError as e:
        record_trip_operation("create", ok=False)
        logger.warning("trip_rejected", error=e.code, **e.extra)
        raise

    trip = Trip(**cleaned)
    db.add(trip)
    await db.commit()
    await db.refresh(trip)
    feed.publish()

    record_trip_operation("create", ok=True)
    logger.info(
        "trip_created",
        trip_id=trip.id,
        type=trip.type,
        route=f"{trip.departure}->{trip.destination}",
        seats=trip.total_seats,
    )
    return trip


async def get_trip_by_id(db: AsyncSession, trip_id: int) -> Optional[Trip]:
    result = await db.execute(select(Trip).where(Trip.id == trip_id))
    return result.scalar_one_or_none()


async def get_trip(db: AsyncSession, trip_id: int) -> Trip:
    """Get a single trip by ID."""
    trip = await get_trip_by_id(db, trip_id)
    if not trip:
        raise TripNotFound(trip_id)
    return trip


async def delete_trip(db: AsyncSession, trip_id: int, feed: TripFeed = trip_feed) -> None:
    """Delete a trip together with its reservations."""
    trip = await get_trip(db, trip_id)
    reservation_count = len(trip.reservations)
    await db.delete(trip)
    await db.commit()
    feed.publish()

    record_trip_operation("delete", ok=True)
    logger.info("trip_deleted", trip_id=trip_id, reservations_removed=reservation_count)


async def list_trips(db: AsyncSession) -> list[Trip]:
    """All trips in schedule order."""
    result = await db.execute(select(Trip).order_by(Trip.date, Trip.time, Trip.id))
    return list(result.scalars().all())


def search_trips(
    trips: list[Trip],
    query: Optional[str] = None,
    company: Optional[str] = None,
    departure: Optional[str] = None,
    destination: Optional[str] = None,
    date: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> list[Trip]:
    matched = trip_filter.filter_by_query(trips, query)
    return trip_filter.filter_trips(
        matched,
        company=company,
        departure=departure,
        destination=destination,
        date=date,
        min_price=min_price,
        max_price=max_price,
    )


def build_facets(trips: list[Trip]) -> TripFacets:
    locale = settings.COLLATION_LOCALE
    min_price, max_price = trip_filter.price_range(trips)
    return TripFacets(
        companies=trip_filter.unique_companies(trips, locale),
        departures=trip_filter.unique_departures(trips, locale),
        destinations=trip_filter.unique_destinations(trips, locale),
        dates=trip_filter.unique_dates(trips, locale),
        min_price=min_price,
        max_price=max_price,
    )
