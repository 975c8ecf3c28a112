"""Initial schema — users, courses, registrations, certificates, transactions.

Revision ID: 001_portal_initial
Revises: None
Create Date: 2026-09-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_portal_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("roll_number", sa.String(50), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(100), nullable=False),
        sa.Column("dob", sa.Date, nullable=True),
        sa.Column("wallet_address", sa.String(42), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "courses",
        sa.Column("course_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("course_name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("end_date", sa.Date, nullable=False),
    )

    op.create_table(
        "registrations",
        sa.Column("registration_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("course_id", sa.Integer, sa.ForeignKey("courses.course_id"), nullable=False),
        sa.Column("grade", sa.Integer, nullable=True),
        sa.Column("transaction_hash", sa.String(100), nullable=True),
        sa.Column("registration_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "grade IS NULL OR (grade >= 0 AND grade <= 100)",
            name="ck_registrations_grade_range",
        ),
    )

    op.create_table(
        "certificates",
        sa.Column("certificate_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("course_id", sa.Integer, sa.ForeignKey("courses.course_id"), nullable=False),
        sa.Column("nft_certificate_uri", sa.Text, nullable=False),
        sa.Column("token_id", sa.Integer, nullable=True),
        sa.Column("transaction_hash", sa.String(100), nullable=True),
        sa.Column("issued_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "transactions",
        sa.Column("transaction_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("amount", sa.Numeric(18, 8), nullable=False),
        sa.Column("transaction_hash", sa.String(100), nullable=True),
        sa.Column("transaction_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("amount >= 0", name="ck_transactions_amount_non_negative"),
    )

    op.create_index("idx_registrations_user", "registrations", ["user_id"])
    op.create_index("idx_certificates_user_course", "certificates", ["user_id", "course_id"])
    op.create_index("idx_transactions_user", "transactions", ["user_id"])


def downgrade() -> None:
    op.drop_index("idx_transactions_user")
    op.drop_index("idx_certificates_user_course")
    op.drop_index("idx_registrations_user")
    op.drop_table("transactions")
    op.drop_table("certificates")
    op.drop_table("registrations")
    op.drop_table("courses")
    op.drop_table("users")
