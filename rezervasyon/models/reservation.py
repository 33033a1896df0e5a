"""
Reservation model: a user's claim on one or more seats of a trip.

Key design decisions:
- Seat numbers are stored in their canonical text form ("3,7,12")
- Status allows cancellation without deleting records
- user_id comes from the session holder; there is no users table
"""

from sqlalchemy import Column, Integer, String, Float, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from rezervasyon.db.base import Base, TimestampMixin


class Reservation(Base, TimestampMixin):
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    seat_numbers = Column(String(1000), nullable=False)
    total_price = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default="ACTIVE")  # ACTIVE, CANCELLED

    trip = relationship("Trip", back_populates="reservations")

    __table_args__ = (
        CheckConstraint("total_price > 0", name="check_reservation_total_price_positive"),
        CheckConstraint("status IN ('ACTIVE', 'CANCELLED')", name="check_reservation_status"),
        Index("ix_reservations_trip_status", "trip_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Reservation(id={self.id}, user={self.user_id}, trip={self.trip_id}, seats={self.seat_numbers}, status={self.status})>"
