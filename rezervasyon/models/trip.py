"""
Trip model: a bus or flight journey with fixed seat inventory and price.

Key design decisions:
- Trips are immutable after creation; only deletion is supported
- Deleting a trip deletes its reservations
- `version` is bumped by every confirmed reservation and is used for
  optimistic concurrency on seat commits
"""

from sqlalchemy import Column, Integer, String, Float, Index, CheckConstraint
from sqlalchemy.orm import relationship

from rezervasyon.db.base import Base, TimestampMixin


class Trip(Base, TimestampMixin):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(10), nullable=False)  # BUS, FLIGHT
    company_name = Column(String(255), nullable=False)
    departure = Column(String(255), nullable=False)
    destination = Column(String(255), nullable=False)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    time = Column(String(5), nullable=False)  # HH:MM departure
    arrival_time = Column(String(5), nullable=False)  # HH:MM
    price = Column(Float, nullable=False)
    total_seats = Column(Integer, nullable=False)

    # Optimistic locking version counter
    version = Column(Integer, nullable=False, default=1)

    reservations = relationship(
        "Reservation",
        back_populates="trip",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("type IN ('BUS', 'FLIGHT')", name="check_trip_type"),
        CheckConstraint("price > 0", name="check_trip_price_positive"),
        CheckConstraint("total_seats > 0", name="check_trip_total_seats_positive"),
        Index("ix_trips_date", "date"),
        Index("ix_trips_route", "departure", "destination"),
    )

    def __repr__(self) -> str:
        return f"<Trip(id={self.id}, type={self.type}, {self.departure}->{self.destination}, date={self.date})>"
