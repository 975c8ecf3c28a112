"""Enrollment Handlers — register_course (on chain) and assign_grade (DB only).

Invariants:
    - register_course: user holds identity, course open, not already registered
    - The course contract records (student wallet, course_id); the DB row stores the tx hash
    - assign_grade: only the course's own faculty member may grade, grade 0-100
"""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import Settings
from portal.core.domain_types import ContractName
from portal.core.enforce_enrollment import (
    check_grade_in_range, check_registration_open,
)
from portal.core.errors import (
    DuplicateRecordError, ErrorContext, NotCourseFacultyError,
)
from portal.infrastructure.chain_client import ChainClient, ChainReceipt
from portal.models.course import Course
from portal.models.registration import Registration
from portal.schemas.actions import CourseRegistrationRequest
from portal.schemas.people import GradeAssign
from portal.services.dual_write import record_dual_write
from portal.services.lookups import (
    get_faculty_with_identity, get_or_404, get_user_with_identity, resolve_wallet,
)

logger = logging.getLogger(__name__)


async def find_registration(
    db: AsyncSession, user_id: int, course_id: int,
) -> Registration | None:
    result = await db.execute(
        select(Registration)
        .where(Registration.user_id == user_id)
        .where(Registration.course_id == course_id)
    )
    return result.scalars().first()


class EnrollmentHandlers:
    """Course registration and grading."""

    def __init__(self, db: AsyncSession, chain: ChainClient | None, settings: Settings):
        self.db = db
        self.chain = chain
        self.settings = settings

    async def register_course(
        self, body: CourseRegistrationRequest,
    ) -> tuple[Registration, ChainReceipt]:
        user = await get_user_with_identity(self.db, body.user_id)
        course = await get_or_404(self.db, Course, body.course_id, "Course")
        check_registration_open(course.course_id, course.end_date, date.today())
        if await find_registration(self.db, user.user_id, course.course_id):
            raise DuplicateRecordError(
                f"User {user.user_id} is already registered for course {course.course_id}",
            )
        wallet = resolve_wallet(body.wallet_address, user.wallet_address)

        registration = Registration(user_id=user.user_id, course_id=course.course_id)
        self.db.add(registration)
        await self.db.flush()

        def apply(receipt: ChainReceipt) -> None:
            registration.transaction_hash = receipt.tx_hash

        receipt = await record_dual_write(
            self.db,
            self.chain.transact(
                ContractName.COURSE, "registerCourse", wallet, course.course_id,
                context=ErrorContext(user_id=user.user_id),
            ),
            apply,
            action="register_course",
            log_extra={"user_id": user.user_id, "course_id": course.course_id},
        )
        return registration, receipt

    async def assign_grade(self, faculty_id: int, body: GradeAssign) -> Registration:
        faculty = await get_faculty_with_identity(self.db, faculty_id)
        registration = await get_or_404(
            self.db, Registration, body.registration_id, "Registration",
        )
        course = await get_or_404(self.db, Course, registration.course_id, "Course")
        if course.faculty_id != faculty.faculty_id:
            raise NotCourseFacultyError(faculty.faculty_id, course.course_id)
        check_grade_in_range(body.grade)

        registration.grade = body.grade
        await self.db.commit()
        logger.info(
            f"Grade {body.grade} set on registration {registration.registration_id}",
            extra={"faculty_id": faculty.faculty_id, "course_id": course.course_id},
        )
        return registration
