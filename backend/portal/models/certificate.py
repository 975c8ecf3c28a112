"""Certificate ORM — completion certificate minted as an NFT."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from portal.db.base import Base


class Certificate(Base):
    __tablename__ = "certificates"

    certificate_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.user_id"), nullable=False,
    )
    course_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("courses.course_id"), nullable=False,
    )
    nft_certificate_uri: Mapped[str] = mapped_column(Text, nullable=False)
    token_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    transaction_hash: Mapped[str | None] = mapped_column(String(100), nullable=True)
    issued_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
