"""
Tests for the live trip stream.
"""

import asyncio

import pytest

from rezervasyon.schemas.trip import TripCreate
from rezervasyon.services.trip_feed import TripFeed, stream_trips
from rezervasyon.services.trip_service import create_trip, delete_trip


@pytest.mark.asyncio
async def test_wait_for_change_times_out_without_publish():
    feed = TripFeed()
    assert await feed.wait_for_change(0, timeout=0.01) == 0


@pytest.mark.asyncio
async def test_wait_for_change_returns_immediately_when_behind():
    feed = TripFeed()
    feed.publish()
    assert await feed.wait_for_change(0, timeout=10) == 1


@pytest.mark.asyncio
async def test_publish_wakes_waiter():
    feed = TripFeed()
    waiter = asyncio.create_task(feed.wait_for_change(0, timeout=10))
    await asyncio.sleep(0)
    feed.publish()
    assert await asyncio.wait_for(waiter, timeout=1) == 1


@pytest.mark.asyncio
async def test_stream_yields_snapshot_per_change(session_factory, feed, bus_trip_payload):
    stream = stream_trips(session_factory, feed, poll_seconds=10)
    try:
        first = await asyncio.wait_for(stream.__anext__(), timeout=1)
        assert first == []

        async with session_factory() as db:
            trip = await create_trip(db, TripCreate(**bus_trip_payload), feed)

        second = await asyncio.wait_for(stream.__anext__(), timeout=1)
        assert [t.id for t in second] == [trip.id]

        async with session_factory() as db:
            await delete_trip(db, trip.id, feed)

        third = await asyncio.wait_for(stream.__anext__(), timeout=1)
        assert third == []
    finally:
        await stream.aclose()


@pytest.mark.asyncio
async def test_stream_ends_when_closed(session_factory, feed):
    stream = stream_trips(session_factory, feed, poll_seconds=10)
    await asyncio.wait_for(stream.__anext__(), timeout=1)
    await stream.aclose()

    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()
