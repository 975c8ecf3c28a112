"""Identity Handlers — register_user, register_faculty, login_user, login_faculty.

Invariants:
    - Email uniqueness pre-checked per table (racy; the UNIQUE index is the backstop)
    - The identity NFT is minted to the portal account with the row's email as owner label
    - identity_token_id / identity_tx_hash written in the same commit as the row
    - Login is a bare credential comparison: no session or token is issued

Design Decisions:
    - bcrypt runs in a worker thread so hashing does not stall the event loop
"""

import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import Settings
from portal.core.domain_types import ContractName
from portal.core.errors import (
    DuplicateRecordError, ErrorContext, InvalidCredentialsError,
)
from portal.core.token_metadata import faculty_token_uri, identity_token_uri
from portal.infrastructure.chain_client import (
    ChainClient, ChainReceipt, normalize_wallet,
)
from portal.infrastructure.passwords import hash_password, verify_password
from portal.models.faculty import Faculty
from portal.models.user import User
from portal.schemas.people import FacultyCreate, LoginRequest, UserCreate
from portal.services.dual_write import record_dual_write

logger = logging.getLogger(__name__)

MINT_METHOD = "mintNFT"


class IdentityHandlers:
    """Account creation (DB row + identity NFT) and credential checks."""

    def __init__(self, db: AsyncSession, chain: ChainClient | None, settings: Settings):
        self.db = db
        self.chain = chain
        self.settings = settings

    async def register_user(self, body: UserCreate) -> tuple[User, ChainReceipt]:
        await self._ensure_email_free(User, body.email)
        wallet = normalize_wallet(body.wallet_address)
        password_hash = await asyncio.to_thread(
            hash_password, body.password, self.settings.bcrypt_rounds,
        )
        user = User(
            roll_number=body.roll_number,
            name=body.name,
            email=body.email,
            password_hash=password_hash,
            dob=body.dob,
            wallet_address=wallet,
        )
        self.db.add(user)
        await self.db.flush()

        token_uri = identity_token_uri(self.settings.public_base_url, user.user_id)

        def apply(receipt: ChainReceipt) -> None:
            user.identity_token_id = receipt.token_id
            user.identity_tx_hash = receipt.tx_hash

        receipt = await record_dual_write(
            self.db,
            self.chain.transact(
                ContractName.IDENTITY, MINT_METHOD, user.email, token_uri,
                context=ErrorContext(user_id=user.user_id),
            ),
            apply,
            action="register_user",
            log_extra={"user_id": user.user_id},
        )
        return user, receipt

    async def register_faculty(self, body: FacultyCreate) -> tuple[Faculty, ChainReceipt]:
        await self._ensure_email_free(Faculty, body.email)
        wallet = normalize_wallet(body.wallet_address)
        password_hash = await asyncio.to_thread(
            hash_password, body.password, self.settings.bcrypt_rounds,
        )
        faculty = Faculty(
            name=body.name,
            email=body.email,
            department=body.department,
            password_hash=password_hash,
            wallet_address=wallet,
        )
        self.db.add(faculty)
        await self.db.flush()

        token_uri = faculty_token_uri(self.settings.public_base_url, faculty.faculty_id)

        def apply(receipt: ChainReceipt) -> None:
            faculty.identity_token_id = receipt.token_id
            faculty.identity_tx_hash = receipt.tx_hash

        receipt = await record_dual_write(
            self.db,
            self.chain.transact(
                ContractName.IDENTITY, MINT_METHOD, faculty.email, token_uri,
                context=ErrorContext(debug_info={"faculty_id": faculty.faculty_id}),
            ),
            apply,
            action="register_faculty",
            log_extra={"faculty_id": faculty.faculty_id},
        )
        return faculty, receipt

    async def login_user(self, body: LoginRequest) -> User:
        return await self._check_credentials(User, body)

    async def login_faculty(self, body: LoginRequest) -> Faculty:
        return await self._check_credentials(Faculty, body)

    async def _ensure_email_free(self, model, email: str) -> None:
        result = await self.db.execute(select(model).where(model.email == email))
        if result.scalar_one_or_none() is not None:
            raise DuplicateRecordError(f"Email {email} is already registered")

    async def _check_credentials(self, model, body: LoginRequest):
        result = await self.db.execute(select(model).where(model.email == body.email))
        account = result.scalar_one_or_none()
        if account is None:
            raise InvalidCredentialsError()
        ok = await asyncio.to_thread(verify_password, body.password, account.password_hash)
        if not ok:
            logger.warning(f"Failed login for {model.__tablename__} account")
            raise InvalidCredentialsError()
        return account
