"""
Tests for reservation construction, the seat wire format and conflict checks.
"""

import pytest

from rezervasyon.core.exceptions import InvalidSeatNumber, NoSeatsSelected, SeatConflict, SeatOutOfRange
from rezervasyon.domain.reservation_builder import (
    build_reservation,
    check_seat_conflict,
    format_seat_numbers,
    parse_seat_numbers,
    parse_selected_seats,
)
from tests.conftest import make_trip


def test_build_reservation_prices_and_serializes_seats():
    trip = make_trip(id=5, price=500.0, total_seats=40)
    draft = build_reservation(trip, {7, 3}, user_id=42)

    assert draft.total_price == 1000.0
    assert draft.seat_numbers == "3,7"
    assert draft.status == "ACTIVE"
    assert draft.user_id == 42
    assert draft.trip_id == 5
    assert draft.seats == [3, 7]


def test_build_reservation_requires_seats():
    with pytest.raises(NoSeatsSelected):
        build_reservation(make_trip(), set(), user_id=1)


def test_build_reservation_rejects_unknown_seat():
    with pytest.raises(SeatOutOfRange) as exc:
        build_reservation(make_trip(total_seats=20), {3, 21}, user_id=1)
    assert exc.value.seat == 21


def test_build_reservation_collapses_duplicates():
    draft = build_reservation(make_trip(price=100.0), [4, 4, 2], user_id=1)
    assert draft.seat_numbers == "2,4"
    assert draft.total_price == 200.0


def test_format_seat_numbers_is_ascending_without_spaces():
    assert format_seat_numbers([12, 3, 7]) == "3,7,12"
    assert format_seat_numbers([]) == ""


def test_parse_seat_numbers():
    assert parse_seat_numbers("3,7,12") == [3, 7, 12]
    assert parse_seat_numbers(" 12, 3 ") == [3, 12]
    assert parse_seat_numbers("") == []
    assert parse_seat_numbers(None) == []


def test_conflict_reports_overlapping_seats():
    with pytest.raises(SeatConflict) as exc:
        check_seat_conflict({3, 7, 9}, {7, 9, 20})
    assert exc.value.seats == [7, 9]
    assert exc.value.status_code == 409


def test_no_conflict_when_disjoint():
    check_seat_conflict({3, 4}, {7, 9})
    check_seat_conflict({3}, set())


def test_parse_selected_seats_accepts_list_and_repeated_values():
    assert parse_selected_seats(["7,3", "12", " 3 "]) == [3, 7, 12]
    assert parse_selected_seats([]) == []
    assert parse_selected_seats([""]) == []


@pytest.mark.parametrize("value", ["3,x", "-1", "2.5"])
def test_parse_selected_seats_rejects_bad_tokens(value):
    with pytest.raises(InvalidSeatNumber):
        parse_selected_seats([value])
