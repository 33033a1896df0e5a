"""Initial schema: trips and reservations with indexes and constraints.

Revision ID: 001
Revises: None
Create Date: 2025-01-10
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Trips table
    op.create_table(
        "trips",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("type", sa.String(10), nullable=False),
        sa.Column("company_name", sa.String(255), nullable=False),
        sa.Column("departure", sa.String(255), nullable=False),
        sa.Column("destination", sa.String(255), nullable=False),
        sa.Column("date", sa.String(10), nullable=False),
        sa.Column("time", sa.String(5), nullable=False),
        sa.Column("arrival_time", sa.String(5), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("total_seats", sa.Integer(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("type IN ('BUS', 'FLIGHT')", name="check_trip_type"),
        sa.CheckConstraint("price > 0", name="check_trip_price_positive"),
        sa.CheckConstraint("total_seats > 0", name="check_trip_total_seats_positive"),
    )
    op.create_index("ix_trips_id", "trips", ["id"])
    # Listings are ordered and filtered by date
    op.create_index("ix_trips_date", "trips", ["date"])
    op.create_index("ix_trips_route", "trips", ["departure", "destination"])

    # Reservations table
    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("trip_id", sa.Integer(), sa.ForeignKey("trips.id", ondelete="CASCADE"), nullable=False),
        sa.Column("seat_numbers", sa.String(1000), nullable=False),
        sa.Column("total_price", sa.Float(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'ACTIVE'")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("total_price > 0", name="check_reservation_total_price_positive"),
        sa.CheckConstraint("status IN ('ACTIVE', 'CANCELLED')", name="check_reservation_status"),
    )
    op.create_index("ix_reservations_id", "reservations", ["id"])
    op.create_index("ix_reservations_user_id", "reservations", ["user_id"])
    op.create_index("ix_reservations_trip_id", "reservations", ["trip_id"])
    # Seat maps read the ACTIVE reservations of one trip on every render and confirm
    op.create_index("ix_reservations_trip_status", "reservations", ["trip_id", "status"])


def downgrade() -> None:
    op.drop_table("reservations")
    op.drop_table("trips")
