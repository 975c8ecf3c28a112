"""Semester ORM — reference data carrying the fee charged for the term."""

from datetime import date
from decimal import Decimal

from sqlalchemy import CheckConstraint, Date, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from portal.core.domain_types import DEFAULT_SEMESTER_FEE
from portal.db.base import Base


class Semester(Base):
    __tablename__ = "semesters"
    __table_args__ = (
        CheckConstraint("fee_amount >= 0", name="ck_semesters_fee_non_negative"),
        CheckConstraint("end_date >= start_date", name="ck_semesters_dates_ordered"),
    )

    semester_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    fee_amount: Mapped[Decimal] = mapped_column(
        Numeric(18, 8), nullable=False, default=DEFAULT_SEMESTER_FEE,
    )
