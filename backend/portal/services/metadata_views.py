"""Metadata Views — resolve token URIs to ERC-721 JSON.

Invariants:
    - One lookup per token kind; a missing row raises ResourceNotFoundError
    - Payload shape comes from core/token_metadata.py
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core import token_metadata
from portal.core.errors import ResourceNotFoundError
from portal.models.booking import Booking
from portal.models.course import Course
from portal.models.event import Event
from portal.models.faculty import Faculty
from portal.models.room import Room
from portal.models.semester import Semester
from portal.models.user import User
from portal.services.handle_certificates import find_certificate
from portal.services.handle_enrollment import find_registration
from portal.services.handle_fees import find_fee_payment
from portal.services.lookups import get_or_404


class MetadataViews:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def identity(self, user_id: int) -> dict:
        user = await get_or_404(self.db, User, user_id, "User")
        return token_metadata.identity_metadata(user.name, user.roll_number, user.dob)

    async def faculty(self, faculty_id: int) -> dict:
        faculty = await get_or_404(self.db, Faculty, faculty_id, "Faculty")
        return token_metadata.faculty_metadata(faculty.name, faculty.department)

    async def certificate(self, user_id: int, course_id: int) -> dict:
        certificate = await find_certificate(self.db, user_id, course_id)
        if certificate is None:
            raise ResourceNotFoundError("Certificate", f"{user_id}-{course_id}")
        user = await get_or_404(self.db, User, user_id, "User")
        course = await get_or_404(self.db, Course, course_id, "Course")
        registration = await find_registration(self.db, user_id, course_id)
        return token_metadata.certificate_metadata(
            user.name,
            course.course_name,
            certificate.issued_date.date(),
            registration.grade if registration else None,
        )

    async def fee_receipt(self, user_id: int, semester_id: int) -> dict:
        fee = await find_fee_payment(self.db, user_id, semester_id)
        if fee is None:
            raise ResourceNotFoundError("Fee payment", f"{user_id}-{semester_id}")
        user = await get_or_404(self.db, User, user_id, "User")
        semester = await get_or_404(self.db, Semester, semester_id, "Semester")
        tx_hash = fee.transaction.transaction_hash if fee.transaction else None
        return token_metadata.fee_receipt_metadata(
            user.name, semester.name, fee.amount, tx_hash,
        )

    async def booking(self, booking_id: int) -> dict:
        booking = await get_or_404(self.db, Booking, booking_id, "Booking")
        user = await get_or_404(self.db, User, booking.user_id, "User")
        if booking.event_id is not None:
            title = (
                await self.db.execute(
                    select(Event.title).where(Event.event_id == booking.event_id)
                )
            ).scalar_one()
            return token_metadata.booking_metadata(
                user.name, event_title=title, booking_date=booking.booking_date,
            )
        room_name = (
            await self.db.execute(select(Room.name).where(Room.room_id == booking.room_id))
        ).scalar_one()
        return token_metadata.booking_metadata(
            user.name,
            room_name=room_name,
            booking_date=booking.booking_date,
            start_time=booking.start_time,
            end_time=booking.end_time,
        )
