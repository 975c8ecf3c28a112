"""Catalog Handlers — create and list reference data (semesters, courses, rooms, events).

Invariants:
    - Reference data is create-once/read-many: no update or delete operations
    - Foreign keys pre-checked (404) so SQLite and PostgreSQL behave alike
    - Semester and room names are unique (409)
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import DuplicateRecordError
from portal.models.booking import Booking
from portal.models.course import Course
from portal.models.event import Event
from portal.models.faculty import Faculty
from portal.models.room import Room
from portal.models.semester import Semester
from portal.schemas.catalog import (
    CourseCreate, EventCreate, RoomCreate, SemesterCreate,
)
from portal.services.lookups import get_or_404

logger = logging.getLogger(__name__)


class CatalogHandlers:
    """Reference data. No contract calls."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_semester(self, body: SemesterCreate) -> Semester:
        await self._ensure_unique(Semester, Semester.name, body.name, "Semester")
        semester = Semester(**body.model_dump())
        return await self._save(semester)

    async def create_course(self, body: CourseCreate) -> Course:
        if body.semester_id is not None:
            await get_or_404(self.db, Semester, body.semester_id, "Semester")
        if body.faculty_id is not None:
            await get_or_404(self.db, Faculty, body.faculty_id, "Faculty")
        course = Course(**body.model_dump())
        return await self._save(course)

    async def create_room(self, body: RoomCreate) -> Room:
        await self._ensure_unique(Room, Room.name, body.name, "Room")
        return await self._save(Room(**body.model_dump()))

    async def create_event(self, body: EventCreate) -> Event:
        if body.room_id is not None:
            await get_or_404(self.db, Room, body.room_id, "Room")
        return await self._save(Event(**body.model_dump()))

    async def list_semesters(self) -> list[Semester]:
        result = await self.db.execute(select(Semester).order_by(Semester.start_date))
        return list(result.scalars().all())

    async def list_courses(self, semester_id: int | None = None) -> list[Course]:
        query = select(Course).order_by(Course.course_id)
        if semester_id is not None:
            query = query.where(Course.semester_id == semester_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_rooms(self) -> list[Room]:
        result = await self.db.execute(select(Room).order_by(Room.name))
        return list(result.scalars().all())

    async def list_events_with_counts(self) -> list[tuple[Event, int]]:
        joined = (
            select(Booking.event_id, func.count(Booking.booking_id).label("joined"))
            .where(Booking.event_id.isnot(None))
            .group_by(Booking.event_id)
            .subquery()
        )
        result = await self.db.execute(
            select(Event, func.coalesce(joined.c.joined, 0))
            .outerjoin(joined, joined.c.event_id == Event.event_id)
            .order_by(Event.event_date, Event.event_id)
        )
        return [(event, int(count)) for event, count in result.all()]

    async def room_bookings(self, room_id: int, day=None) -> list[Booking]:
        await get_or_404(self.db, Room, room_id, "Room")
        query = select(Booking).where(Booking.room_id == room_id)
        if day is not None:
            query = query.where(Booking.booking_date == day)
        result = await self.db.execute(
            query.order_by(Booking.booking_date, Booking.start_time),
        )
        return list(result.scalars().all())

    async def _ensure_unique(self, model, column, value, label: str) -> None:
        result = await self.db.execute(select(model).where(column == value))
        if result.scalars().first() is not None:
            raise DuplicateRecordError(f"{label} '{value}' already exists")

    async def _save(self, row):
        self.db.add(row)
        await self.db.commit()
        logger.info(f"Created {row.__tablename__} row")
        return row
