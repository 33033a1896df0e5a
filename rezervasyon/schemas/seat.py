"""
Pydantic schemas for the seat map view.
"""

from pydantic import BaseModel

from rezervasyon.domain.enums import SeatState, TripType


class SeatInfo(BaseModel):
    number: int
    state: SeatState


class SeatMapResponse(BaseModel):
    trip_id: int
    trip_type: TripType
    columns: int
    rows: int
    total_seats: int
    available_seats: int
    price: float
    seats: list[SeatInfo]
    selected_seats: list[int]
    selected_label: str
    total_price: float
    duration: str
