"""
Pydantic schemas for reservation-related request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, computed_field

from rezervasyon.domain.enums import ReservationStatus
from rezervasyon.domain.reservation_builder import parse_seat_numbers


class ReservationCreate(BaseModel):
    trip_id: int
    seat_numbers: list[int] = []


class ReservationResponse(BaseModel):
    id: int
    user_id: int
    trip_id: int
    seat_numbers: str
    total_price: float
    status: ReservationStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def seats(self) -> list[int]:
        return parse_seat_numbers(self.seat_numbers)


class ReservationCancelResponse(BaseModel):
    message: str
    reservation_id: int
    status: ReservationStatus
