"""
Live trip listing.

TripFeed is a process-wide change notifier: trip writes call publish(),
subscribers wait for the next change. stream_trips() turns that into an
async generator of full trip-list snapshots.

Writes made by other processes never reach the notifier, so subscribers
also re-read after `poll_seconds` without a notification. A snapshot is
only yielded when the set of trips actually changed.

A stream ends when its consumer closes the generator and cannot be
restarted; subscribe again for a new one.
"""

import asyncio
from typing import AsyncIterator, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rezervasyon.core.logging import get_logger
from rezervasyon.models.trip import Trip

logger = get_logger(__name__)


class TripFeed:
    def __init__(self):
        self._version = 0
        self._changed: Optional[asyncio.Event] = None

    @property
    def version(self) -> int:
        return self._version

    def publish(self) -> None:
        self._version += 1
        changed, self._changed = self._changed, None
        if changed is not None:
            changed.set()

    async def wait_for_change(self, seen_version: int, timeout: Optional[float] = None) -> int:
        """Wait until the version moves past `seen_version` or the timeout expires."""
        if self._version != seen_version:
            return self._version
        if self._changed is None:
            self._changed = asyncio.Event()
        try:
            await asyncio.wait_for(self._changed.wait(), timeout)
        except asyncio.TimeoutError:
            pass
        return self._version


trip_feed = TripFeed()


def get_trip_feed() -> TripFeed:
    return trip_feed


async def stream_trips(
    session_factory: async_sessionmaker[AsyncSession],
    feed: TripFeed,
    poll_seconds: float,
) -> AsyncIterator[List[Trip]]:
    # circular: trip_service imports this module
    from rezervasyon.services.trip_service import list_trips

    last_ids = None
    seen = feed.version
    while True:
        async with session_factory() as db:
            trips = await list_trips(db)

        ids = tuple(trip.id for trip in trips)
        if ids != last_ids:
            last_ids = ids
            logger.debug("trip_snapshot", trips=len(trips), feed_version=seen)
            yield trips

        seen = await feed.wait_for_change(seen, timeout=poll_seconds)
