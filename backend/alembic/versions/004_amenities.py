"""Amenities — rooms, events and bookings (room slot XOR event seat).

Revision ID: 004_amenities
Revises: 003_fees_paid
Create Date: 2026-09-22

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "004_amenities"
down_revision: Union[str, None] = "003_fees_paid"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "rooms",
        sa.Column("room_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("capacity", sa.Integer, nullable=False),
        sa.CheckConstraint("capacity > 0", name="ck_rooms_capacity_positive"),
    )

    op.create_table(
        "events",
        sa.Column("event_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("event_date", sa.Date, nullable=False),
        sa.Column("room_id", sa.Integer, sa.ForeignKey("rooms.room_id"), nullable=True),
        sa.Column("capacity", sa.Integer, nullable=False),
        sa.CheckConstraint("capacity > 0", name="ck_events_capacity_positive"),
    )

    op.create_table(
        "bookings",
        sa.Column("booking_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("room_id", sa.Integer, sa.ForeignKey("rooms.room_id"), nullable=True),
        sa.Column("event_id", sa.Integer, sa.ForeignKey("events.event_id"), nullable=True),
        sa.Column("booking_date", sa.Date, nullable=False),
        sa.Column("start_time", sa.Time, nullable=True),
        sa.Column("end_time", sa.Time, nullable=True),
        sa.Column("token_uri", sa.Text, nullable=True),
        sa.Column("transaction_hash", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "(room_id IS NULL) <> (event_id IS NULL)",
            name="ck_bookings_room_xor_event",
        ),
    )
    op.create_index("idx_bookings_room_date", "bookings", ["room_id", "booking_date"])
    op.create_index("idx_bookings_event", "bookings", ["event_id"])


def downgrade() -> None:
    op.drop_index("idx_bookings_event")
    op.drop_index("idx_bookings_room_date")
    op.drop_table("bookings")
    op.drop_table("events")
    op.drop_table("rooms")
