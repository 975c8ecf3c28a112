"""Token metadata — URI formats and ERC-721 JSON payloads.

Tests:
    - each URI builder points at the service's /api/metadata routes
    - payloads always carry name, description, attributes
    - missing dates render as None
    - booking metadata switches on event vs room
"""

from datetime import date, time
from decimal import Decimal

from portal.core import token_metadata as tm

BASE = "https://portal.uni.edu"


def test_token_uris():
    assert tm.identity_token_uri(BASE, 3) == f"{BASE}/api/metadata/identity/3"
    assert tm.faculty_token_uri(BASE, 4) == f"{BASE}/api/metadata/faculty/4"
    assert tm.certificate_token_uri(BASE, 3, 9) == f"{BASE}/api/metadata/certificates/3-9.json"
    assert tm.fee_token_uri(BASE, 3, 2) == f"{BASE}/api/metadata/fees/3-2.json"
    assert tm.booking_token_uri(BASE, 11) == f"{BASE}/api/metadata/bookings/11.json"


def test_identity_metadata_without_dob():
    data = tm.identity_metadata("Ada", "CS-1", None)
    assert data["name"] == "Ada"
    assert data["attributes"] == [
        {"trait_type": "Roll Number", "value": "CS-1"},
        {"trait_type": "Date of Birth", "value": None},
    ]


def test_certificate_metadata():
    data = tm.certificate_metadata("Ada", "Compilers", date(2026, 7, 2), 91)
    assert data["name"] == "Compilers Certificate"
    values = {a["trait_type"]: a["value"] for a in data["attributes"]}
    assert values["Issued"] == "2026-07-02"
    assert values["Grade"] == 91


def test_fee_receipt_amount_is_string():
    data = tm.fee_receipt_metadata("Ada", "Fall", Decimal("0.05"), "0xabc")
    values = {a["trait_type"]: a["value"] for a in data["attributes"]}
    assert values["Amount (ETH)"] == "0.05"
    assert values["Transaction"] == "0xabc"


def test_booking_metadata_event_vs_room():
    event = tm.booking_metadata("Ada", event_title="Meetup", booking_date=date(2026, 11, 1))
    room = tm.booking_metadata(
        "Ada", room_name="Lab 1", booking_date=date(2026, 11, 1),
        start_time=time(9), end_time=time(10, 30),
    )

    assert [a["trait_type"] for a in event["attributes"]] == ["Event", "Date"]
    assert {a["trait_type"]: a["value"] for a in room["attributes"]}["To"] == "10:30:00"
