"""Catalog Schemas — reference data: semesters, courses, rooms, events."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from portal.core.domain_types import DEFAULT_SEMESTER_FEE


class SemesterCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    start_date: date
    end_date: date
    fee_amount: Decimal = Field(DEFAULT_SEMESTER_FEE, ge=0, max_digits=18, decimal_places=8)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class SemesterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    semester_id: int
    name: str
    start_date: date
    end_date: date
    fee_amount: Decimal


class CourseCreate(BaseModel):
    course_name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(None, max_length=5000)
    end_date: date
    semester_id: int | None = Field(None, ge=1)
    faculty_id: int | None = Field(None, ge=1)


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    course_id: int
    course_name: str
    description: str | None
    end_date: date
    semester_id: int | None
    faculty_id: int | None


class RoomCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    location: str | None = Field(None, max_length=200)
    capacity: int = Field(gt=0)


class RoomResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    room_id: int
    name: str
    location: str | None
    capacity: int


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    event_date: date
    room_id: int | None = Field(None, ge=1)
    capacity: int = Field(gt=0)


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    event_id: int
    title: str
    description: str | None
    event_date: date
    room_id: int | None
    capacity: int
    joined: int = 0
