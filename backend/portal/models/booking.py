"""Booking ORM — either a room reservation or an event join, never both.

Invariants:
    - Exactly one of room_id / event_id is set (CHECK)
    - Room bookings carry start_time/end_time; event joins carry neither
    - booking_date is the reserved day (event joins copy the event date)
"""

from datetime import date, datetime, time, timezone

from sqlalchemy import (
    CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text, Time,
)
from sqlalchemy.orm import Mapped, mapped_column

from portal.db.base import Base


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint(
            "(room_id IS NULL) <> (event_id IS NULL)",
            name="ck_bookings_room_xor_event",
        ),
    )

    booking_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id"), nullable=False,
    )
    room_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("rooms.room_id"), nullable=True,
    )
    event_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("events.event_id"), nullable=True,
    )
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    start_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    end_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    token_uri: Mapped[str | None] = mapped_column(Text, nullable=True)
    transaction_hash: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
