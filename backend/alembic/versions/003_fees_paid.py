"""Fee payments — fees_paid rows linked to their ledger transaction.

Revision ID: 003_fees_paid
Revises: 002_faculty_semesters
Create Date: 2026-09-15

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "003_fees_paid"
down_revision: Union[str, None] = "002_faculty_semesters"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "fees_paid",
        sa.Column("fee_id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("semester_id", sa.Integer, sa.ForeignKey("semesters.semester_id"), nullable=False),
        sa.Column("amount", sa.Numeric(18, 8), nullable=False),
        sa.Column("transaction_id", sa.Integer, sa.ForeignKey("transactions.transaction_id"), nullable=True),
        sa.Column("paid_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("amount >= 0", name="ck_fees_paid_amount_non_negative"),
    )
    op.create_index("idx_fees_paid_user_semester", "fees_paid", ["user_id", "semester_id"])


def downgrade() -> None:
    op.drop_index("idx_fees_paid_user_semester")
    op.drop_table("fees_paid")
