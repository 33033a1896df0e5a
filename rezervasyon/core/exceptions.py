"""
Domain errors raised by the reservation core and services.

Every error carries the HTTP status it maps to and a machine-readable code
(the class name). Extra keyword context is rendered next to the message so
clients can point at the offending field or seats.
"""

from typing import Any, Optional


class DomainError(Exception):
    status_code: int = 400

    def __init__(self, message: str, status_code: Optional[int] = None, **extra: Any):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra
        super().__init__(message)

    @property
    def code(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code, **self.extra}


# --- Trip creation ---------------------------------------------------------

class TripValidationError(DomainError):
    pass


class MissingField(TripValidationError):
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Field '{field}' is required", field=field)


class InvalidSeatCount(TripValidationError):
    def __init__(self, trip_type: str, seat_count: int, minimum: int, maximum: int):
        self.seat_count = seat_count
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Seat count for {trip_type} must be between {minimum}-{maximum}",
            field="total_seats",
            min=minimum,
            max=maximum,
        )


class InvalidPrice(TripValidationError):
    def __init__(self, trip_type: str, price: float, maximum: float):
        self.price = price
        self.maximum = maximum
        super().__init__(
            f"Price for {trip_type} must be greater than 0 and at most {maximum}",
            field="price",
            max=maximum,
        )


# --- Seat selection and reservations ---------------------------------------

class ReservationError(DomainError):
    pass


class NoSeatsSelected(ReservationError):
    def __init__(self):
        super().__init__("Select at least one seat")


class SeatOutOfRange(ReservationError):
    def __init__(self, seat: int, total_seats: int):
        self.seat = seat
        self.total_seats = total_seats
        super().__init__(
            f"Seat {seat} does not exist (valid seats are 1-{total_seats})",
            seat=seat,
            total_seats=total_seats,
        )


class InvalidSeatNumber(ReservationError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"'{token}' is not a seat number", token=token)


class SeatConflict(ReservationError):
    status_code = 409

    def __init__(self, seats):
        self.seats = sorted(seats)
        joined = ", ".join(str(seat) for seat in self.seats)
        super().__init__(f"Seats already reserved: {joined}", seats=self.seats)


class ReservationContention(ReservationError):
    status_code = 409

    def __init__(self, trip_id: int):
        super().__init__("Reservation failed due to high demand. Please try again.", trip_id=trip_id)


class ReservationAlreadyCancelled(ReservationError):
    def __init__(self, reservation_id: int):
        super().__init__("Reservation is already cancelled", reservation_id=reservation_id)


class MalformedTime(DomainError):
    """Only used for duration display; callers recover and show '-'."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Malformed time '{value}', expected HH:MM", value=value)


# --- Lookups and session ---------------------------------------------------

class NotFoundError(DomainError):
    status_code = 404


class TripNotFound(NotFoundError):
    def __init__(self, trip_id: int):
        super().__init__(f"Trip {trip_id} not found", trip_id=trip_id)


class ReservationNotFound(NotFoundError):
    def __init__(self, reservation_id: int):
        super().__init__("Reservation not found", reservation_id=reservation_id)


class MissingUserId(DomainError):
    status_code = 401

    def __init__(self):
        super().__init__("Missing or invalid X-User-Id header")
