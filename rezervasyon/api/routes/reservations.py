"""
Reservation endpoints with conflict-safe seat confirmation.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from rezervasyon.core.session import get_current_user_id
from rezervasyon.db.session import get_db
from rezervasyon.schemas.reservation import (
    ReservationCancelResponse,
    ReservationCreate,
    ReservationResponse,
)
from rezervasyon.services.reservation_service import (
    cancel_reservation,
    confirm_reservation,
    get_user_reservations,
)

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post("/", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    reservation_data: ReservationCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """
    Confirm the selected seats on a trip.

    The reserved seats are re-read at confirmation time. If any selected
    seat was taken since the seat map was shown, the request fails with 409
    and nothing is reserved.
    """
    return await confirm_reservation(
        db,
        user_id,
        reservation_data.trip_id,
        reservation_data.seat_numbers,
    )


@router.delete("/{reservation_id}", response_model=ReservationCancelResponse)
async def cancel_reservation_endpoint(
    reservation_id: int,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Cancel a reservation and release its seats."""
    reservation = await cancel_reservation(db, reservation_id, user_id)
    return ReservationCancelResponse(
        message="Reservation cancelled successfully",
        reservation_id=reservation.id,
        status=reservation.status,
    )


@router.get("/", response_model=list[ReservationResponse])
async def list_user_reservations(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Get all reservations of the calling user."""
    return await get_user_reservations(db, user_id)
