"""
Reservation service with conflict-safe seat confirmation.

CONCURRENCY STRATEGY: Optimistic check at commit time
=====================================================

Problem:
  Two users open the same trip's seat map, both see seat 7 as available,
  both select it and confirm. Checking only at render time double-books.

Solution:
  1. Read the trip and its current `version`
  2. Re-read the RESERVED set (ACTIVE reservations) and intersect it with
     the requested seats; any overlap fails with SeatConflict
  3. UPDATE trips SET version = version + 1
     WHERE id = :trip_id AND version = :read_version
  4. If rows_affected == 0, another reservation committed between steps
     2 and 3, so roll back and start over from step 1

  The retry is bounded by RESERVATION_MAX_RETRIES. Seats are never held
  between render and confirm.
"""

import time
from dataclasses import asdict
from typing import Iterable, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from rezervasyon.core.config import get_settings
from rezervasyon.core.exceptions import (
    ReservationAlreadyCancelled,
    ReservationContention,
    ReservationError,
    ReservationNotFound,
    SeatConflict,
)
from rezervasyon.core.logging import get_logger
from rezervasyon.core import metrics
from rezervasyon.domain.enums import ReservationStatus
from rezervasyon.domain.reservation_builder import build_reservation, check_seat_conflict
from rezervasyon.domain.seat_map import SeatMap, collect_reserved_seats
from rezervasyon.models.reservation import Reservation
from rezervasyon.models.trip import Trip
from rezervasyon.services.trip_service import get_trip

logger = get_logger(__name__)
settings = get_settings()


async def get_reservations_by_trip(
    db: AsyncSession,
    trip_id: int,
    active_only: bool = False,
) -> list[Reservation]:
    query = select(Reservation).where(Reservation.trip_id == trip_id)
    if active_only:
        query = query.where(Reservation.status == ReservationStatus.ACTIVE.value)
    result = await db.execute(
        query.order_by(Reservation.id).execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def get_reserved_seats(db: AsyncSession, trip_id: int) -> set[int]:
    """Seats held by ACTIVE reservations of a trip, read fresh from the database."""
    reservations = await get_reservations_by_trip(db, trip_id, active_only=True)
    return collect_reserved_seats(reservations)


async def build_seat_map(
    db: AsyncSession,
    trip_id: int,
    selected: Iterable[int] = (),
) -> tuple[Trip, SeatMap]:
    """
    Render a trip's seat map with the caller's current selection applied.

    Each selected seat is toggled onto an empty selection, so reserved seats
    in the request are ignored and seats outside the trip raise
    SeatOutOfRange.
    """
    trip = await get_trip(db, trip_id)
    reservations = await get_reservations_by_trip(db, trip_id, active_only=True)
    seat_map = SeatMap.for_trip(trip, reservations)
    for seat in sorted(set(selected)):
        seat_map.toggle(seat)
    return trip, seat_map


async def insert_reservation(db: AsyncSession, reservation: Reservation) -> int:
    db.add(reservation)
    await db.flush()
    return reservation.id


async def confirm_reservation(
    db: AsyncSession,
    user_id: int,
    trip_id: int,
    seat_numbers: Iterable[int],
    max_retries: Optional[int] = None,
) -> Reservation:
    """
    Reserve seats on a trip for a user.

    Raises NoSeatsSelected / SeatOutOfRange for a bad request, SeatConflict
    when any seat is already reserved at commit time, and
    ReservationContention when the retry budget runs out.
    """
    if max_retries is None:
        max_retries = settings.RESERVATION_MAX_RETRIES
    seats = set(seat_numbers)
    started = time.perf_counter()

    try:
        for attempt in range(1, max_retries + 1):
            # Step 1: Read current trip state
            trip = await get_trip(db, trip_id)
            await db.refresh(trip, attribute_names=["version"])
            current_version = trip.version
            draft = build_reservation(trip, seats, user_id)

            # Step 2: Re-check against what is reserved right now
            reserved = await get_reserved_seats(db, trip_id)
            try:
                check_seat_conflict(seats, reserved)
            except SeatConflict as e:
                metrics.record_reservation_attempt("conflict")
                logger.warning(
                    "reservation_conflict",
                    trip_id=trip_id,
                    user_id=user_id,
                    seats=e.seats,
                )
                raise

            # Step 3: Optimistic lock - bump version only if unchanged
            update_result = await db.execute(
                update(Trip)
                .where(Trip.id == trip_id, Trip.version == current_version)
                .values(version=Trip.version + 1)
                .execution_options(synchronize_session=False)
            )

            if update_result.rowcount == 0:
                logger.info(
                    "reservation_retry",
                    trip_id=trip_id,
                    attempt=attempt,
                    reason="version_conflict",
                )
                metrics.reservation_retries.inc()
                await db.rollback()
                continue

            # Step 4: Create reservation record
            reservation = Reservation(**asdict(draft))
            await insert_reservation(db, reservation)
            await db.commit()
            await db.refresh(reservation)

            metrics.record_reservation_attempt("success")
            metrics.record_reserved_seats(trip.type, len(seats))
            logger.info(
                "reservation_created",
                reservation_id=reservation.id,
                user_id=user_id,
                trip_id=trip_id,
                seats=reservation.seat_numbers,
                total_price=reservation.total_price,
                attempt=attempt,
            )
            return reservation

        metrics.record_reservation_attempt("contention")
        raise ReservationContention(trip_id)
    except ReservationError as e:
        if not isinstance(e, (SeatConflict, ReservationContention)):
            metrics.record_reservation_attempt("invalid")
            logger.warning("reservation_rejected", trip_id=trip_id, user_id=user_id, error=e.code)
        raise
    finally:
        metrics.reservation_latency.observe(time.perf_counter() - started)


async def cancel_reservation(
    db: AsyncSession,
    reservation_id: int,
    user_id: int,
) -> Reservation:
    """
    Cancel a reservation and release its seats back to the trip.
    Bumps the trip version so in-flight confirmations re-read the seats.
    """
    result = await db.execute(
        select(Reservation).where(
            Reservation.id == reservation_id,
            Reservation.user_id == user_id,
        )
    )
    reservation = result.scalar_one_or_none()

    if not reservation:
        raise ReservationNotFound(reservation_id)

    if reservation.status == ReservationStatus.CANCELLED.value:
        raise ReservationAlreadyCancelled(reservation_id)

    await db.execute(
        update(Trip)
        .where(Trip.id == reservation.trip_id)
        .values(version=Trip.version + 1)
        .execution_options(synchronize_session=False)
    )

    reservation.status = ReservationStatus.CANCELLED.value
    await db.commit()
    await db.refresh(reservation)

    logger.info(
        "reservation_cancelled",
        reservation_id=reservation.id,
        user_id=user_id,
        trip_id=reservation.trip_id,
        seats_released=reservation.seat_numbers,
    )
    return reservation


async def get_user_reservations(db: AsyncSession, user_id: int) -> list[Reservation]:
    """Get all reservations for a user, newest first."""
    result = await db.execute(
        select(Reservation)
        .where(Reservation.user_id == user_id)
        .order_by(Reservation.created_at.desc(), Reservation.id.desc())
    )
    return list(result.scalars().all())
