"""Enrollment Rules — course registration, certificate eligibility, grading, fees.

Invariants:
    - A course is "ended" when end_date < today (the end date itself is still a course day)
    - Registration is only open while the course has not ended
    - A certificate requires an ended course
    - The fee charged is always the semester's fee_amount

Design Decisions:
    - Checks raise core errors instead of returning flags: services call them
      inline between the precondition read and the contract call
"""

from datetime import date
from decimal import Decimal

from portal.core.domain_types import GRADE_MAX, GRADE_MIN
from portal.core.errors import BusinessRuleError


def course_has_ended(end_date: date, today: date) -> bool:
    return end_date < today


def check_registration_open(course_id: int, end_date: date, today: date) -> None:
    """Reject registering for a course that already finished."""
    if course_has_ended(end_date, today):
        raise BusinessRuleError(
            f"Course {course_id} ended on {end_date.isoformat()}",
            "COURSE_ENDED",
        )


def check_certificate_eligible(course_id: int, end_date: date, today: date) -> None:
    """Certificates are issued only after the course end date has passed."""
    if not course_has_ended(end_date, today):
        raise BusinessRuleError(
            f"Course {course_id} ends on {end_date.isoformat()}; "
            "certificates are issued after that date",
            "COURSE_NOT_ENDED",
        )


def check_grade_in_range(grade: int) -> None:
    if not GRADE_MIN <= grade <= GRADE_MAX:
        raise BusinessRuleError(
            f"Grade {grade} outside {GRADE_MIN}-{GRADE_MAX}",
            "GRADE_OUT_OF_RANGE",
        )


def resolve_fee_amount(semester_fee: Decimal, requested: Decimal | None) -> Decimal:
    """Return the amount to charge; a client-supplied amount must match exactly."""
    if requested is not None and Decimal(requested) != Decimal(semester_fee):
        raise BusinessRuleError(
            f"Fee for this semester is {semester_fee}, got {requested}",
            "FEE_AMOUNT_MISMATCH",
        )
    return Decimal(semester_fee)
