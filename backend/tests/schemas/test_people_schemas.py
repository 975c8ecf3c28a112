"""Request schemas — normalization and boundary validation.

Tests:
    - email lower-cased, names stripped
    - whitespace-only name rejected
    - wallet shape enforced (checksumming happens later)
    - room booking requires end after start
    - semester end before start rejected
"""

from datetime import date, time

import pytest
from pydantic import ValidationError

from portal.schemas.actions import RoomBookingRequest
from portal.schemas.catalog import SemesterCreate
from portal.schemas.people import GradeAssign, UserCreate

WALLET = "0x90f8bf6a479f320ead074411a4b0e7944ea8c9c1"


def _user(**overrides):
    data = {
        "roll_number": " CS-9 ", "name": " Ada ", "email": " Ada@Uni.EDU ",
        "password": "longenough", "wallet_address": WALLET,
    }
    data.update(overrides)
    return UserCreate(**data)


def test_user_create_normalizes():
    user = _user()
    assert user.email == "ada@uni.edu"
    assert user.name == "Ada"
    assert user.roll_number == "CS-9"


def test_whitespace_name_rejected():
    with pytest.raises(ValidationError):
        _user(name="   ")


def test_wallet_shape_enforced():
    with pytest.raises(ValidationError):
        _user(wallet_address="90f8bf6a479f320ead074411a4b0e7944ea8c9c1")


def test_grade_bounds():
    with pytest.raises(ValidationError):
        GradeAssign(registration_id=1, grade=-5)


def test_booking_slot_must_be_positive():
    with pytest.raises(ValidationError):
        RoomBookingRequest(
            user_id=1, room_id=1, booking_date=date(2027, 1, 1),
            start_time=time(10), end_time=time(10),
        )


def test_semester_dates_ordered():
    with pytest.raises(ValidationError):
        SemesterCreate(name="S", start_date=date(2027, 2, 1), end_date=date(2027, 1, 1))
