"""
Tests for trip creation rules: required fields, seat and price bounds.
"""

import math

import pytest

from rezervasyon.core.exceptions import InvalidPrice, InvalidSeatCount, MissingField
from rezervasyon.domain.enums import TripType
from rezervasyon.domain.trip_validator import validate_price, validate_seat_count, validate_trip

TEXT_FIELDS = dict(
    company_name="Metro Turizm",
    departure="İstanbul",
    destination="Ankara",
    date="2025-01-15",
    time="10:00",
    arrival_time="16:00",
)


@pytest.mark.parametrize("seats", [20, 35, 50])
def test_bus_seat_count_within_bounds(seats):
    validate_seat_count(TripType.BUS, seats)


@pytest.mark.parametrize("seats", [19, 51, 0, -1])
def test_bus_seat_count_out_of_bounds(seats):
    with pytest.raises(InvalidSeatCount) as exc:
        validate_seat_count(TripType.BUS, seats)
    assert (exc.value.minimum, exc.value.maximum) == (20, 50)
    assert exc.value.extra["field"] == "total_seats"


def test_flight_seat_count_bounds():
    validate_seat_count("FLIGHT", 100)
    validate_seat_count("FLIGHT", 200)
    with pytest.raises(InvalidSeatCount) as exc:
        validate_seat_count("FLIGHT", 50)
    assert (exc.value.minimum, exc.value.maximum) == (100, 200)
    with pytest.raises(InvalidSeatCount):
        validate_seat_count("FLIGHT", 201)


def test_flight_price_bounds():
    validate_price(TripType.FLIGHT, 10000.0)
    validate_price(TripType.FLIGHT, 0.01)
    with pytest.raises(InvalidPrice) as exc:
        validate_price(TripType.FLIGHT, 10000.01)
    assert exc.value.maximum == 10000.0


@pytest.mark.parametrize("price", [0, 0.0, -10.0, 5000.01, math.nan])
def test_bus_price_rejected(price):
    with pytest.raises(InvalidPrice) as exc:
        validate_price(TripType.BUS, price)
    assert exc.value.maximum == 5000.0


def test_bus_price_upper_bound_inclusive():
    validate_price(TripType.BUS, 5000.0)


def test_validate_trip_returns_trimmed_values():
    fields = dict(TEXT_FIELDS, company_name="  Kamil Koç ", destination="İzmir\n")
    cleaned = validate_trip("BUS", 40, 650.0, **fields)

    assert cleaned["company_name"] == "Kamil Koç"
    assert cleaned["destination"] == "İzmir"
    assert cleaned["type"] == "BUS"
    assert cleaned["total_seats"] == 40
    assert cleaned["price"] == 650.0


@pytest.mark.parametrize("field", list(TEXT_FIELDS))
def test_blank_text_field_is_missing(field):
    fields = dict(TEXT_FIELDS, **{field: "   "})
    with pytest.raises(MissingField) as exc:
        validate_trip("BUS", 40, 500.0, **fields)
    assert exc.value.field == field


def test_absent_text_field_is_missing():
    fields = dict(TEXT_FIELDS)
    del fields["arrival_time"]
    with pytest.raises(MissingField) as exc:
        validate_trip("BUS", 40, 500.0, **fields)
    assert exc.value.field == "arrival_time"


def test_missing_field_reported_before_bounds():
    """Form order: text fields first, then seats, then price."""
    fields = dict(TEXT_FIELDS, company_name="")
    with pytest.raises(MissingField):
        validate_trip("BUS", 5, -1.0, **fields)

    with pytest.raises(InvalidSeatCount):
        validate_trip("BUS", 5, -1.0, **TEXT_FIELDS)


def test_error_payload_carries_range():
    with pytest.raises(InvalidSeatCount) as exc:
        validate_trip("FLIGHT", 99, 1000.0, **TEXT_FIELDS)
    payload = exc.value.to_dict()
    assert payload["code"] == "InvalidSeatCount"
    assert payload["min"] == 100
    assert payload["max"] == 200
    assert exc.value.status_code == 400
