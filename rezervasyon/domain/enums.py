"""Domain enums"""

from enum import Enum


class TripType(str, Enum):
    BUS = "BUS"
    FLIGHT = "FLIGHT"


class ReservationStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"


class SeatState(str, Enum):
    """Derived per-seat state on a seat map, never persisted."""
    AVAILABLE = "AVAILABLE"
    SELECTED = "SELECTED"
    RESERVED = "RESERVED"
