"""Token Metadata — token URIs handed to contracts and the ERC-721 JSON they resolve to.

Invariants:
    - Every URI points at a /api/metadata/* route of this service
    - Metadata payloads have name, description, attributes[{trait_type, value}]
    - Dates are rendered ISO-8601; missing values render as None

Design Decisions:
    - Builders take plain values, not ORM rows, so they stay pure
"""

from datetime import date, time
from decimal import Decimal

from portal.core.domain_types import TokenUri


METADATA_PREFIX = "/api/metadata"


def identity_token_uri(base_url: str, user_id: int) -> TokenUri:
    return TokenUri(f"{base_url}{METADATA_PREFIX}/identity/{user_id}")


def faculty_token_uri(base_url: str, faculty_id: int) -> TokenUri:
    return TokenUri(f"{base_url}{METADATA_PREFIX}/faculty/{faculty_id}")


def certificate_token_uri(base_url: str, user_id: int, course_id: int) -> TokenUri:
    return TokenUri(
        f"{base_url}{METADATA_PREFIX}/certificates/{user_id}-{course_id}.json"
    )


def fee_token_uri(base_url: str, user_id: int, semester_id: int) -> TokenUri:
    return TokenUri(
        f"{base_url}{METADATA_PREFIX}/fees/{user_id}-{semester_id}.json"
    )


def booking_token_uri(base_url: str, booking_id: int) -> TokenUri:
    return TokenUri(f"{base_url}{METADATA_PREFIX}/bookings/{booking_id}.json")


def _iso(value: date | time | None) -> str | None:
    return value.isoformat() if value is not None else None


def _attr(trait_type: str, value) -> dict:
    return {"trait_type": trait_type, "value": value}


def identity_metadata(name: str, roll_number: str, dob: date | None) -> dict:
    return {
        "name": name,
        "description": f"Digital identity for {name}.",
        "attributes": [
            _attr("Roll Number", roll_number),
            _attr("Date of Birth", _iso(dob)),
        ],
    }


def faculty_metadata(name: str, department: str | None) -> dict:
    return {
        "name": name,
        "description": f"Faculty identity for {name}.",
        "attributes": [
            _attr("Role", "Faculty"),
            _attr("Department", department),
        ],
    }


def certificate_metadata(
    student_name: str, course_name: str, issued_on: date | None,
    grade: int | None,
) -> dict:
    return {
        "name": f"{course_name} Certificate",
        "description": f"Certificate of completion of {course_name} awarded to {student_name}.",
        "attributes": [
            _attr("Student", student_name),
            _attr("Course", course_name),
            _attr("Issued", _iso(issued_on)),
            _attr("Grade", grade),
        ],
    }


def fee_receipt_metadata(
    student_name: str, semester_name: str, amount: Decimal, tx_hash: str | None,
) -> dict:
    return {
        "name": f"Fee Receipt — {semester_name}",
        "description": f"Semester fee paid by {student_name}.",
        "attributes": [
            _attr("Semester", semester_name),
            _attr("Amount (ETH)", str(amount)),
            _attr("Transaction", tx_hash),
        ],
    }


def booking_metadata(
    holder_name: str, *, room_name: str | None = None,
    event_title: str | None = None, booking_date: date | None = None,
    start_time: time | None = None, end_time: time | None = None,
) -> dict:
    if event_title is not None:
        return {
            "name": f"Event Pass — {event_title}",
            "description": f"Admission to {event_title} for {holder_name}.",
            "attributes": [
                _attr("Event", event_title),
                _attr("Date", _iso(booking_date)),
            ],
        }
    return {
        "name": f"Room Booking — {room_name}",
        "description": f"Reservation of {room_name} by {holder_name}.",
        "attributes": [
            _attr("Room", room_name),
            _attr("Date", _iso(booking_date)),
            _attr("From", _iso(start_time)),
            _attr("To", _iso(end_time)),
        ],
    }
