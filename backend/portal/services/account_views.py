"""Account Views — read-only dashboards for users and faculty.

Invariants:
    - No writes, no chain calls
    - Every view 404s on an unknown account id
"""

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.enforce_enrollment import course_has_ended
from portal.models.booking import Booking
from portal.models.certificate import Certificate
from portal.models.course import Course
from portal.models.event import Event
from portal.models.faculty import Faculty
from portal.models.fee_paid import FeePaid
from portal.models.registration import Registration
from portal.models.room import Room
from portal.models.semester import Semester
from portal.models.user import User
from portal.services.lookups import get_or_404


class AccountViews:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def user_courses(self, user_id: int) -> list[dict]:
        """Courses the user registered for (dashboard list)."""
        await get_or_404(self.db, User, user_id, "User")
        result = await self.db.execute(
            select(Registration, Course)
            .join(Course, Registration.course_id == Course.course_id)
            .where(Registration.user_id == user_id)
            .order_by(Registration.registration_date)
        )
        return [
            {
                "registration_id": reg.registration_id,
                "course_id": course.course_id,
                "course_name": course.course_name,
                "end_date": course.end_date.isoformat(),
                "grade": reg.grade,
                "transaction_hash": reg.transaction_hash,
            }
            for reg, course in result.all()
        ]

    async def certificate_status(self, user_id: int, today: date | None = None) -> list[dict]:
        """Registered courses with their certificate eligibility and issue state."""
        await get_or_404(self.db, User, user_id, "User")
        today = today or date.today()
        result = await self.db.execute(
            select(Course, Certificate.certificate_id)
            .join(Registration, Registration.course_id == Course.course_id)
            .outerjoin(
                Certificate,
                (Certificate.course_id == Course.course_id)
                & (Certificate.user_id == user_id),
            )
            .where(Registration.user_id == user_id)
            .order_by(Course.end_date)
        )
        return [
            {
                "course_id": course.course_id,
                "course_name": course.course_name,
                "end_date": course.end_date.isoformat(),
                "eligible": course_has_ended(course.end_date, today),
                "issued": certificate_id is not None,
            }
            for course, certificate_id in result.all()
        ]

    async def fee_summary(self, user_id: int) -> dict:
        """User details plus each semester's fee and whether it is paid."""
        user = await get_or_404(self.db, User, user_id, "User")
        semesters = (
            await self.db.execute(select(Semester).order_by(Semester.start_date))
        ).scalars().all()
        payments = (
            await self.db.execute(select(FeePaid).where(FeePaid.user_id == user_id))
        ).scalars().all()
        paid = {p.semester_id: p for p in payments}
        return {
            "user": {
                "user_id": user.user_id,
                "name": user.name,
                "roll_number": user.roll_number,
                "email": user.email,
                "wallet_address": user.wallet_address,
            },
            "semesters": [
                {
                    "semester_id": s.semester_id,
                    "name": s.name,
                    "fee_amount": str(s.fee_amount),
                    "paid": s.semester_id in paid,
                    "transaction_hash": (
                        paid[s.semester_id].transaction.transaction_hash
                        if s.semester_id in paid and paid[s.semester_id].transaction
                        else None
                    ),
                }
                for s in semesters
            ],
        }

    async def user_bookings(self, user_id: int) -> dict:
        await get_or_404(self.db, User, user_id, "User")
        rooms = await self.db.execute(
            select(Booking, Room.name)
            .join(Room, Booking.room_id == Room.room_id)
            .where(Booking.user_id == user_id)
            .order_by(Booking.booking_date, Booking.start_time)
        )
        events = await self.db.execute(
            select(Booking, Event.title)
            .join(Event, Booking.event_id == Event.event_id)
            .where(Booking.user_id == user_id)
            .order_by(Booking.booking_date)
        )
        return {
            "rooms": [
                {
                    "booking_id": b.booking_id,
                    "room_id": b.room_id,
                    "room_name": name,
                    "booking_date": b.booking_date.isoformat(),
                    "start_time": b.start_time.isoformat() if b.start_time else None,
                    "end_time": b.end_time.isoformat() if b.end_time else None,
                    "transaction_hash": b.transaction_hash,
                }
                for b, name in rooms.all()
            ],
            "events": [
                {
                    "booking_id": b.booking_id,
                    "event_id": b.event_id,
                    "title": title,
                    "event_date": b.booking_date.isoformat(),
                    "transaction_hash": b.transaction_hash,
                }
                for b, title in events.all()
            ],
        }

    async def faculty_courses(self, faculty_id: int) -> list[dict]:
        """Courses taught by the faculty member, with enrolled student counts."""
        await get_or_404(self.db, Faculty, faculty_id, "Faculty")
        result = await self.db.execute(
            select(Course, func.count(Registration.registration_id))
            .outerjoin(Registration, Registration.course_id == Course.course_id)
            .where(Course.faculty_id == faculty_id)
            .group_by(Course.course_id)
            .order_by(Course.course_id)
        )
        return [
            {
                "course_id": course.course_id,
                "course_name": course.course_name,
                "end_date": course.end_date.isoformat(),
                "enrolled": int(count),
            }
            for course, count in result.all()
        ]
