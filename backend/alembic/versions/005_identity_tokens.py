"""Identity tokens — record the minted identity NFT per account.

Revision ID: 005_identity_tokens
Revises: 004_amenities
Create Date: 2026-10-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "005_identity_tokens"
down_revision: Union[str, None] = "004_amenities"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    for table in ("users", "faculty"):
        op.add_column(table, sa.Column("identity_token_id", sa.Integer, nullable=True))
        op.add_column(table, sa.Column("identity_tx_hash", sa.String(100), nullable=True))


def downgrade() -> None:
    for table in ("faculty", "users"):
        op.drop_column(table, "identity_tx_hash")
        op.drop_column(table, "identity_token_id")
