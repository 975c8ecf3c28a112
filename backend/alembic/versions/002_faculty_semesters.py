"""Faculty and semesters — faculty accounts, semester fees, course ownership.

Revision ID: 002_faculty_semesters
Revises: 001_portal_initial
Create Date: 2026-09-08

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_faculty_semesters"
down_revision: Union[str, None] = "001_portal_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "faculty",
        sa.Column("faculty_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False, unique=True),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("wallet_address", sa.String(42), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "semesters",
        sa.Column("semester_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("fee_amount", sa.Numeric(18, 8), nullable=False, server_default="0.05"),
        sa.CheckConstraint("fee_amount >= 0", name="ck_semesters_fee_non_negative"),
        sa.CheckConstraint("end_date >= start_date", name="ck_semesters_dates_ordered"),
    )

    op.add_column("courses", sa.Column("semester_id", sa.Integer, nullable=True))
    op.add_column("courses", sa.Column("faculty_id", sa.Integer, nullable=True))
    op.create_foreign_key(
        "fk_courses_semester", "courses", "semesters",
        ["semester_id"], ["semester_id"],
    )
    op.create_foreign_key(
        "fk_courses_faculty", "courses", "faculty",
        ["faculty_id"], ["faculty_id"],
    )


def downgrade() -> None:
    op.drop_constraint("fk_courses_faculty", "courses", type_="foreignkey")
    op.drop_constraint("fk_courses_semester", "courses", type_="foreignkey")
    op.drop_column("courses", "faculty_id")
    op.drop_column("courses", "semester_id")
    op.drop_table("semesters")
    op.drop_table("faculty")
