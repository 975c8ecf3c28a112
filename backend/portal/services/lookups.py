"""Precondition Reads — fetch-or-404 helpers shared by every handler.

Invariants:
    - Missing rows raise ResourceNotFoundError (404), never return None
    - get_*_with_identity additionally require the identity token (403)
    - resolve_wallet prefers the request's wallet, falls back to the one on file
"""

from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.domain_types import WalletAddress
from portal.core.errors import (
    BusinessRuleError, IdentityRequiredError, ResourceNotFoundError,
)
from portal.infrastructure.chain_client import normalize_wallet
from portal.models.faculty import Faculty
from portal.models.user import User


async def get_or_404(db: AsyncSession, model, pk: int, label: str):
    row = await db.get(model, pk)
    if row is None:
        raise ResourceNotFoundError(label, pk)
    return row


async def get_user_with_identity(db: AsyncSession, user_id: int) -> User:
    user = await get_or_404(db, User, user_id, "User")
    if not user.has_identity:
        raise IdentityRequiredError("User", user_id)
    return user


async def get_faculty_with_identity(db: AsyncSession, faculty_id: int) -> Faculty:
    faculty = await get_or_404(db, Faculty, faculty_id, "Faculty")
    if not faculty.has_identity:
        raise IdentityRequiredError("Faculty", faculty_id)
    return faculty


def resolve_wallet(requested: str | None, on_file: str | None) -> WalletAddress:
    address = requested or on_file
    if not address:
        raise BusinessRuleError(
            "No wallet address supplied and none on file",
            "WALLET_REQUIRED",
        )
    return normalize_wallet(address)
