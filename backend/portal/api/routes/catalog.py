"""Catalog Routes — semesters, courses, rooms, events (reference data, DB only)."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.infrastructure.database import get_db
from portal.models.course import Course
from portal.schemas.catalog import (
    CourseCreate, CourseResponse, EventCreate, EventResponse,
    RoomCreate, RoomResponse, SemesterCreate, SemesterResponse,
)
from portal.services.handle_catalog import CatalogHandlers
from portal.services.lookups import get_or_404

router = APIRouter(prefix="/api/v1", tags=["catalog"])


def _dump(schema, row) -> dict:
    return schema.model_validate(row).model_dump(mode="json")


# ─── Semesters ──────────────────────────────────────────────────

@router.post("/semesters", status_code=status.HTTP_201_CREATED)
async def create_semester(body: SemesterCreate, db: AsyncSession = Depends(get_db)):
    semester = await CatalogHandlers(db).create_semester(body)
    return _dump(SemesterResponse, semester)


@router.get("/semesters")
async def list_semesters(db: AsyncSession = Depends(get_db)):
    semesters = await CatalogHandlers(db).list_semesters()
    return {"semesters": [_dump(SemesterResponse, s) for s in semesters]}


# ─── Courses ────────────────────────────────────────────────────

@router.post("/courses", status_code=status.HTTP_201_CREATED)
async def create_course(body: CourseCreate, db: AsyncSession = Depends(get_db)):
    course = await CatalogHandlers(db).create_course(body)
    return _dump(CourseResponse, course)


@router.get("/courses")
async def list_courses(
    semester_id: int | None = Query(None, ge=1),
    db: AsyncSession = Depends(get_db),
):
    """Course registration dropdown."""
    courses = await CatalogHandlers(db).list_courses(semester_id)
    return {"courses": [_dump(CourseResponse, c) for c in courses]}


@router.get("/courses/{course_id}")
async def get_course(course_id: int, db: AsyncSession = Depends(get_db)):
    course = await get_or_404(db, Course, course_id, "Course")
    return _dump(CourseResponse, course)


# ─── Rooms ──────────────────────────────────────────────────────

@router.post("/rooms", status_code=status.HTTP_201_CREATED)
async def create_room(body: RoomCreate, db: AsyncSession = Depends(get_db)):
    room = await CatalogHandlers(db).create_room(body)
    return _dump(RoomResponse, room)


@router.get("/rooms")
async def list_rooms(db: AsyncSession = Depends(get_db)):
    rooms = await CatalogHandlers(db).list_rooms()
    return {"rooms": [_dump(RoomResponse, r) for r in rooms]}


@router.get("/rooms/{room_id}/bookings")
async def list_room_bookings(
    room_id: int,
    day: date | None = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
):
    bookings = await CatalogHandlers(db).room_bookings(room_id, day)
    return {
        "room_id": room_id,
        "bookings": [
            {
                "booking_id": b.booking_id,
                "user_id": b.user_id,
                "booking_date": b.booking_date.isoformat(),
                "start_time": b.start_time.isoformat() if b.start_time else None,
                "end_time": b.end_time.isoformat() if b.end_time else None,
            }
            for b in bookings
        ],
    }


# ─── Events ─────────────────────────────────────────────────────

@router.post("/events", status_code=status.HTTP_201_CREATED)
async def create_event(body: EventCreate, db: AsyncSession = Depends(get_db)):
    event = await CatalogHandlers(db).create_event(body)
    return _dump(EventResponse, event)


@router.get("/events")
async def list_events(db: AsyncSession = Depends(get_db)):
    rows = await CatalogHandlers(db).list_events_with_counts()
    return {
        "events": [
            {**_dump(EventResponse, event), "joined": joined}
            for event, joined in rows
        ],
    }
