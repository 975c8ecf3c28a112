"""Action Schemas — request bodies of the on-chain mutations.

Invariants:
    - Every body names the acting user_id; wallet_address defaults to the one on file
    - RoomBookingRequest: end_time strictly after start_time
"""

from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from portal.schemas.people import WALLET_PATTERN


class CourseRegistrationRequest(BaseModel):
    user_id: int = Field(ge=1)
    course_id: int = Field(ge=1)
    wallet_address: str | None = Field(None, pattern=WALLET_PATTERN)


class CertificateRequest(BaseModel):
    user_id: int = Field(ge=1)
    course_id: int = Field(ge=1)
    student_address: str | None = Field(None, pattern=WALLET_PATTERN)


class FeePaymentRequest(BaseModel):
    user_id: int = Field(ge=1)
    semester_id: int = Field(ge=1)
    amount: Decimal | None = Field(None, ge=0)


class RoomBookingRequest(BaseModel):
    user_id: int = Field(ge=1)
    room_id: int = Field(ge=1)
    booking_date: date
    start_time: time
    end_time: time
    wallet_address: str | None = Field(None, pattern=WALLET_PATTERN)

    @model_validator(mode="after")
    def check_slot(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class EventJoinRequest(BaseModel):
    user_id: int = Field(ge=1)
    wallet_address: str | None = Field(None, pattern=WALLET_PATTERN)
