from rezervasyon.schemas.trip import TripCreate, TripResponse, TripListResponse, TripFacets
from rezervasyon.schemas.reservation import (
    ReservationCreate,
    ReservationResponse,
    ReservationCancelResponse,
)
from rezervasyon.schemas.seat import SeatInfo, SeatMapResponse

__all__ = [
    "TripCreate", "TripResponse", "TripListResponse", "TripFacets",
    "ReservationCreate", "ReservationResponse", "ReservationCancelResponse",
    "SeatInfo", "SeatMapResponse",
]
