"""FeePaid ORM — one settled semester fee per (user, semester).

Invariants:
    - Points at the Transaction that carried the payment
    - amount >= 0 (CHECK)
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, Numeric
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portal.db.base import Base


class FeePaid(Base):
    __tablename__ = "fees_paid"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_fees_paid_amount_non_negative"),
    )

    fee_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id"), nullable=False,
    )
    semester_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("semesters.semester_id"), nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(18, 8), nullable=False)
    transaction_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("transactions.transaction_id"), nullable=True,
    )
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    transaction: Mapped[Optional["Transaction"]] = relationship("Transaction", lazy="selectin")
