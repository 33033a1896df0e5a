"""
Trip endpoints: administration, listing with search and facets, live
stream, and seat maps.
"""

import json
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rezervasyon.core.config import get_settings
from rezervasyon.core.logging import get_logger
from rezervasyon.db.session import get_db, get_session_factory
from rezervasyon.domain.reservation_builder import parse_selected_seats
from rezervasyon.domain.seat_map import trip_duration_label
from rezervasyon.schemas.seat import SeatInfo, SeatMapResponse
from rezervasyon.schemas.trip import TripCreate, TripFacets, TripListResponse, TripResponse
from rezervasyon.services.cache_service import get_cached_trips, invalidate_trip_cache, set_cached_trips
from rezervasyon.services.reservation_service import build_seat_map
from rezervasyon.services.trip_feed import TripFeed, get_trip_feed, stream_trips
from rezervasyon.services.trip_service import (
    build_facets,
    create_trip,
    delete_trip,
    get_trip,
    list_trips,
    search_trips,
)

logger = get_logger(__name__)
settings = get_settings()
router = APIRouter(prefix="/trips", tags=["Trips"])


@router.post("/", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip_endpoint(
    trip_data: TripCreate,
    db: AsyncSession = Depends(get_db),
    feed: TripFeed = Depends(get_trip_feed),
):
    """Create a bus or flight trip. Seat count and price are bounded per type."""
    trip = await create_trip(db, trip_data, feed)
    await invalidate_trip_cache()
    return trip


@router.get("/", response_model=TripListResponse)
async def list_trips_endpoint(
    q: Optional[str] = Query(None, description="Matches company, departure or destination"),
    company: Optional[str] = Query(None),
    departure: Optional[str] = Query(None),
    destination: Optional[str] = Query(None),
    date: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """
    List trips in schedule order, narrowed by free-text query and facets.
    Results are cached in Redis when it is enabled.
    """
    params = {
        "q": q,
        "company": company,
        "departure": departure,
        "destination": destination,
        "date": date,
        "min_price": min_price,
        "max_price": max_price,
    }

    cached = await get_cached_trips(params)
    if cached:
        logger.info("trips_list_cache_hit")
        cached["cached"] = True
        return TripListResponse(**cached)

    trips = search_trips(
        await list_trips(db),
        query=q,
        company=company,
        departure=departure,
        destination=destination,
        date=date,
        min_price=min_price,
        max_price=max_price,
    )

    response_data = {
        "trips": [TripResponse.model_validate(t).model_dump(mode="json") for t in trips],
        "total": len(trips),
        "cached": False,
    }
    await set_cached_trips(params, response_data)

    return TripListResponse(**response_data)


@router.get("/facets", response_model=TripFacets)
async def trip_facets_endpoint(db: AsyncSession = Depends(get_db)):
    """Distinct companies, places and dates plus the price range, for filter UIs."""
    return build_facets(await list_trips(db))


@router.get("/stream")
async def stream_trips_endpoint(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    feed: TripFeed = Depends(get_trip_feed),
    limit: Optional[int] = Query(None, ge=1, description="Close after this many snapshots"),
):
    """
    Live trip list as newline-delimited JSON: one full snapshot per line,
    sent on connect and whenever trips are added or removed.
    """

    async def snapshots():
        sent = 0
        stream = stream_trips(session_factory, feed, settings.TRIP_STREAM_POLL_SECONDS)
        try:
            async for trips in stream:
                payload = [TripResponse.model_validate(t).model_dump(mode="json") for t in trips]
                yield json.dumps({"trips": payload, "total": len(payload)}, ensure_ascii=False) + "\n"
                sent += 1
                if limit is not None and sent >= limit:
                    break
        finally:
            await stream.aclose()

    return StreamingResponse(
        snapshots(),
        media_type="application/x-ndjson",
        headers={"Cache-Control": "no-cache"},
    )


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip_endpoint(trip_id: int, db: AsyncSession = Depends(get_db)):
    return await get_trip(db, trip_id)


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_trip_endpoint(
    trip_id: int,
    db: AsyncSession = Depends(get_db),
    feed: TripFeed = Depends(get_trip_feed),
):
    """Delete a trip and every reservation on it."""
    await delete_trip(db, trip_id, feed)
    await invalidate_trip_cache()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{trip_id}/seats", response_model=SeatMapResponse)
async def seat_map_endpoint(
    trip_id: int,
    selected: list[str] = Query(
        [], description="Seats the caller has picked so far, as 3,7 or repeated values"
    ),
    db: AsyncSession = Depends(get_db),
):
    """
    Seat map with each seat's state. Not cached: reserved seats must be live.
    Selected seats that are already reserved come back as RESERVED and are
    left out of the total.
    """
    trip, seat_map = await build_seat_map(db, trip_id, parse_selected_seats(selected))
    return SeatMapResponse(
        trip_id=trip.id,
        trip_type=seat_map.trip_type,
        columns=seat_map.columns,
        rows=seat_map.rows,
        total_seats=seat_map.total_seats,
        available_seats=seat_map.available_count,
        price=seat_map.price,
        seats=[SeatInfo(number=n, state=s) for n, s in seat_map.states().items()],
        selected_seats=seat_map.selected_seats,
        selected_label=seat_map.selected_label,
        total_price=seat_map.total_price,
        duration=trip_duration_label(trip),
    )
