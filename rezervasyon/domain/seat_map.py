"""
Seat map for a single trip.

Seats are numbered 1..total_seats and laid out row by row: buses have four
seats per row, aircraft six. Each seat is AVAILABLE, SELECTED (picked by the
current user, not yet confirmed) or RESERVED (held by an ACTIVE
reservation). RESERVED always wins over SELECTED.
"""

from typing import Dict, Iterable, List, Optional, Set

from rezervasyon.core.exceptions import SeatOutOfRange
from rezervasyon.domain.duration import format_duration
from rezervasyon.domain.enums import ReservationStatus, SeatState, TripType
from rezervasyon.domain.reservation_builder import parse_seat_numbers

COLUMNS = {
    TripType.BUS: 4,
    TripType.FLIGHT: 6,
}


def grid_columns(trip_type) -> int:
    return COLUMNS[TripType(trip_type)]


def grid_rows(trip_type, total_seats: int) -> int:
    return -(-total_seats // grid_columns(trip_type))


def collect_reserved_seats(reservations: Iterable) -> Set[int]:
    """Union of seat numbers over the ACTIVE reservations given."""
    reserved = set()
    for reservation in reservations:
        if reservation.status != ReservationStatus.ACTIVE.value:
            continue
        reserved.update(parse_seat_numbers(reservation.seat_numbers))
    return reserved


class SeatMap:
    def __init__(
        self,
        trip_type,
        total_seats: int,
        price: float,
        reserved: Iterable[int] = (),
        selected: Optional[Set[int]] = None,
    ):
        self.trip_type = TripType(trip_type)
        self.total_seats = total_seats
        self.price = price
        self.reserved = frozenset(reserved)
        # Caller-owned; toggle() mutates it in place.
        self.selected = selected if selected is not None else set()

    @classmethod
    def for_trip(cls, trip, reservations: Iterable = (), selected: Optional[Set[int]] = None) -> "SeatMap":
        return cls(
            trip.type,
            trip.total_seats,
            trip.price,
            reserved=collect_reserved_seats(reservations),
            selected=selected,
        )

    @property
    def columns(self) -> int:
        return grid_columns(self.trip_type)

    @property
    def rows(self) -> int:
        return grid_rows(self.trip_type, self.total_seats)

    def _check_seat(self, seat: int) -> None:
        if not 1 <= seat <= self.total_seats:
            raise SeatOutOfRange(seat, self.total_seats)

    def state(self, seat: int) -> SeatState:
        self._check_seat(seat)
        if seat in self.reserved:
            return SeatState.RESERVED
        if seat in self.selected:
            return SeatState.SELECTED
        return SeatState.AVAILABLE

    def states(self) -> Dict[int, SeatState]:
        return {seat: self.state(seat) for seat in range(1, self.total_seats + 1)}

    def toggle(self, seat: int) -> SeatState:
        """Flip selection of a seat. Reserved seats are left untouched."""
        self._check_seat(seat)
        if seat in self.reserved:
            return SeatState.RESERVED
        if seat in self.selected:
            self.selected.discard(seat)
        else:
            self.selected.add(seat)
        return self.state(seat)

    @property
    def selected_seats(self) -> List[int]:
        return sorted(
            seat for seat in self.selected
            if seat not in self.reserved and 1 <= seat <= self.total_seats
        )

    @property
    def available_count(self) -> int:
        return self.total_seats - len([s for s in self.reserved if 1 <= s <= self.total_seats])

    @property
    def total_price(self) -> float:
        return len(self.selected_seats) * self.price

    @property
    def selected_label(self) -> str:
        return ", ".join(str(seat) for seat in self.selected_seats)


def trip_duration_label(trip) -> str:
    return format_duration(trip.time, trip.arrival_time)
