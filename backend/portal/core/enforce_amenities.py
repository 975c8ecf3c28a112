"""Amenity Rules — room slot overlap, event capacity, no bookings in the past.

Invariants:
    - Slots are half-open [start, end): back-to-back bookings do not overlap
    - Capacity check happens before the join is recorded (joined < capacity)
"""

from datetime import date, time
from typing import Iterable

from portal.core.errors import (
    BookingConflictError, BusinessRuleError, CapacityExceededError,
)


def slots_overlap(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    return a_start < b_end and b_start < a_end


def check_slot_free(
    room_id: int,
    start: time,
    end: time,
    existing: Iterable[tuple[time, time]],
) -> None:
    """Raise BookingConflictError if [start, end) touches any existing slot."""
    for other_start, other_end in existing:
        if slots_overlap(start, end, other_start, other_end):
            raise BookingConflictError(room_id)


def check_not_in_past(day: date, today: date, what: str) -> None:
    if day < today:
        raise BusinessRuleError(
            f"{what} date {day.isoformat()} is in the past",
            "DATE_IN_PAST",
        )


def check_event_capacity(event_id: int, joined: int, capacity: int) -> None:
    if joined >= capacity:
        raise CapacityExceededError(event_id, capacity)
