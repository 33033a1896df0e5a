"""
Reservation records and the seat-number wire format.

Seat numbers are stored and exchanged as ascending, comma-separated decimal
integers without whitespace, e.g. "3,7,12".

Building a reservation does not look at other reservations. Callers must
run check_seat_conflict() against the reserved set read at commit time,
not the one shown when the seat map was rendered.
"""

from dataclasses import dataclass
from typing import Iterable, List

from rezervasyon.core.exceptions import InvalidSeatNumber, NoSeatsSelected, SeatConflict, SeatOutOfRange
from rezervasyon.core.logging import get_logger
from rezervasyon.domain.enums import ReservationStatus

logger = get_logger(__name__)

SEAT_SEPARATOR = ","


def format_seat_numbers(seats: Iterable[int]) -> str:
    return SEAT_SEPARATOR.join(str(seat) for seat in sorted(set(seats)))


def parse_seat_numbers(text: str) -> List[int]:
    """
    Parse a stored seat list. Tokens that are not positive integers are
    skipped and logged instead of failing the whole read.
    """
    seats = []
    for token in (text or "").split(SEAT_SEPARATOR):
        token = token.strip()
        if not token:
            continue
        if not token.isdecimal() or int(token) < 1:
            logger.warning("seat_token_skipped", token=token, seat_numbers=text)
            continue
        seats.append(int(token))
    return sorted(set(seats))


def parse_selected_seats(values: Iterable[str]) -> List[int]:
    """
    Parse seat selections sent by a client, either as one "3,7" list or as
    separate values. Unlike stored seat lists, a bad token is an error.
    """
    seats = set()
    for value in values:
        for token in value.split(SEAT_SEPARATOR):
            token = token.strip()
            if not token:
                continue
            if not token.isdecimal():
                raise InvalidSeatNumber(token)
            seats.add(int(token))
    return sorted(seats)


@dataclass(frozen=True)
class ReservationDraft:
    user_id: int
    trip_id: int
    seat_numbers: str
    total_price: float
    status: str = ReservationStatus.ACTIVE.value

    @property
    def seats(self) -> List[int]:
        return parse_seat_numbers(self.seat_numbers)


def check_seat_conflict(candidate: Iterable[int], reserved: Iterable[int]) -> None:
    conflict = set(candidate) & set(reserved)
    if conflict:
        raise SeatConflict(conflict)


def build_reservation(trip, seats: Iterable[int], user_id: int) -> ReservationDraft:
    seats = set(seats)
    if not seats:
        raise NoSeatsSelected()

    for seat in sorted(seats):
        if not 1 <= seat <= trip.total_seats:
            raise SeatOutOfRange(seat, trip.total_seats)

    return ReservationDraft(
        user_id=user_id,
        trip_id=trip.id,
        seat_numbers=format_seat_numbers(seats),
        total_price=len(seats) * trip.price,
    )
