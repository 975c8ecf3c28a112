"""User ORM — a student account plus its on-chain identity token.

Invariants:
    - email is unique
    - identity_token_id / identity_tx_hash are written in the same request that
      creates the row (NULL only if the mint produced no Transfer event)
    - password_hash never leaves the service
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from portal.db.base import Base


class User(Base):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    roll_number: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    dob: Mapped[date | None] = mapped_column(Date, nullable=True)
    wallet_address: Mapped[str | None] = mapped_column(String(42), nullable=True)
    identity_token_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    identity_tx_hash: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def has_identity(self) -> bool:
        return self.identity_tx_hash is not None
