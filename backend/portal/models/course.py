"""Course ORM — catalog entry, optionally tied to a semester and a teaching faculty member.

Invariants:
    - end_date is required: it gates registration (before) and certificates (after)
"""

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portal.db.base import Base


class Course(Base):
    __tablename__ = "courses"

    course_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    semester_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("semesters.semester_id"), nullable=True,
    )
    faculty_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("faculty.faculty_id"), nullable=True,
    )
