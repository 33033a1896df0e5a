"""
Trip creation rules.

Seat inventory and ticket price are bounded per trip type:

    BUS     20-50 seats     0 < price <= 5000
    FLIGHT  100-200 seats   0 < price <= 10000

Required text fields are checked first, then seats, then price, so the
caller always gets the first problem in form order.
"""

from rezervasyon.core.exceptions import InvalidPrice, InvalidSeatCount, MissingField
from rezervasyon.domain.enums import TripType

SEAT_LIMITS = {
    TripType.BUS: (20, 50),
    TripType.FLIGHT: (100, 200),
}

MAX_PRICES = {
    TripType.BUS: 5000.0,
    TripType.FLIGHT: 10000.0,
}

REQUIRED_TEXT_FIELDS = (
    "company_name",
    "departure",
    "destination",
    "date",
    "time",
    "arrival_time",
)


def validate_seat_count(trip_type, seat_count: int) -> None:
    trip_type = TripType(trip_type)
    minimum, maximum = SEAT_LIMITS[trip_type]
    if not minimum <= seat_count <= maximum:
        raise InvalidSeatCount(trip_type.value, seat_count, minimum, maximum)


def validate_price(trip_type, price: float) -> None:
    trip_type = TripType(trip_type)
    maximum = MAX_PRICES[trip_type]
    # Written as a single chained comparison so NaN is rejected too.
    if not 0 < price <= maximum:
        raise InvalidPrice(trip_type.value, price, maximum)


def validate_trip(trip_type, total_seats: int, price: float, **text_fields: str) -> dict:
    """
    Validate a trip draft and return the cleaned values.

    The returned dict has the text fields trimmed and holds the same price
    value that was validated, ready to be passed to the Trip model.
    """
    cleaned = {}
    for field in REQUIRED_TEXT_FIELDS:
        value = (text_fields.get(field) or "").strip()
        if not value:
            raise MissingField(field)
        cleaned[field] = value

    trip_type = TripType(trip_type)
    validate_seat_count(trip_type, total_seats)
    validate_price(trip_type, price)

    cleaned.update(type=trip_type.value, total_seats=total_seats, price=price)
    return cleaned
