"""
Seat-reservation core: validation, seat maps, reservation records and
trip facets. Nothing in here touches the database or the web layer.
"""

from rezervasyon.domain.enums import TripType, ReservationStatus, SeatState
from rezervasyon.domain.trip_validator import validate_trip, validate_seat_count, validate_price
from rezervasyon.domain.seat_map import SeatMap, collect_reserved_seats
from rezervasyon.domain.duration import trip_duration, format_duration
from rezervasyon.domain.reservation_builder import (
    ReservationDraft,
    build_reservation,
    check_seat_conflict,
    format_seat_numbers,
    parse_seat_numbers,
    parse_selected_seats,
)
from rezervasyon.domain import trip_filter

__all__ = [
    "TripType", "ReservationStatus", "SeatState",
    "validate_trip", "validate_seat_count", "validate_price",
    "SeatMap", "collect_reserved_seats",
    "trip_duration", "format_duration",
    "ReservationDraft", "build_reservation", "check_seat_conflict",
    "format_seat_numbers", "parse_seat_numbers", "parse_selected_seats",
    "trip_filter",
]
