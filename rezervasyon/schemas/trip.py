"""
Pydantic schemas for trip-related request/response validation.

Seat and price bounds depend on the trip type and are enforced by the
domain validator, not here, so clients get the specific error kind.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, computed_field

from rezervasyon.domain.duration import format_duration
from rezervasyon.domain.enums import TripType


class TripCreate(BaseModel):
    type: TripType
    company_name: str = Field("", max_length=255)
    departure: str = Field("", max_length=255)
    destination: str = Field("", max_length=255)
    date: str = Field("", max_length=10, examples=["2025-01-15"])
    time: str = Field("", max_length=5, examples=["10:00"])
    arrival_time: str = Field("", max_length=5, examples=["16:00"])
    price: float
    total_seats: int


class TripResponse(BaseModel):
    id: int
    type: TripType
    company_name: str
    departure: str
    destination: str
    date: str
    time: str
    arrival_time: str
    price: float
    total_seats: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def duration(self) -> str:
        return format_duration(self.time, self.arrival_time)


class TripListResponse(BaseModel):
    trips: list[TripResponse]
    total: int
    cached: bool = False


class TripFacets(BaseModel):
    companies: list[str]
    departures: list[str]
    destinations: list[str]
    dates: list[str]
    min_price: float
    max_price: float
