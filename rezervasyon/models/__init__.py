from rezervasyon.models.trip import Trip
from rezervasyon.models.reservation import Reservation

__all__ = ["Trip", "Reservation"]
