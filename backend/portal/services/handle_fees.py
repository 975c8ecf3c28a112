"""Fee Handlers — pay_fees.

Invariants:
    - One payment per (user, semester); the amount is the semester's fee_amount
    - The payable payFees call carries the fee in wei, sent from the portal account
    - A transactions row (type=fee_payment) and a fees_paid row are written together
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import Settings
from portal.core.domain_types import ContractName, TransactionType
from portal.core.enforce_enrollment import resolve_fee_amount
from portal.core.errors import DuplicateRecordError, ErrorContext
from portal.core.token_metadata import fee_token_uri
from portal.infrastructure.chain_client import ChainClient, ChainReceipt, ether_to_wei
from portal.models.fee_paid import FeePaid
from portal.models.semester import Semester
from portal.models.transaction import Transaction
from portal.schemas.actions import FeePaymentRequest
from portal.services.dual_write import record_dual_write
from portal.services.lookups import get_or_404, get_user_with_identity


async def find_fee_payment(
    db: AsyncSession, user_id: int, semester_id: int,
) -> FeePaid | None:
    result = await db.execute(
        select(FeePaid)
        .where(FeePaid.user_id == user_id)
        .where(FeePaid.semester_id == semester_id)
    )
    return result.scalars().first()


class FeeHandlers:
    """Semester fee payments (DB flag + FeePaymentNFT payment)."""

    def __init__(self, db: AsyncSession, chain: ChainClient, settings: Settings):
        self.db = db
        self.chain = chain
        self.settings = settings

    async def pay_fees(
        self, body: FeePaymentRequest,
    ) -> tuple[FeePaid, Transaction, ChainReceipt]:
        user = await get_user_with_identity(self.db, body.user_id)
        semester = await get_or_404(self.db, Semester, body.semester_id, "Semester")
        if await find_fee_payment(self.db, user.user_id, semester.semester_id):
            raise DuplicateRecordError(
                f"User {user.user_id} already paid fees for semester {semester.name}",
            )
        amount = resolve_fee_amount(semester.fee_amount, body.amount)
        token_uri = fee_token_uri(
            self.settings.public_base_url, user.user_id, semester.semester_id,
        )

        transaction = Transaction(
            user_id=user.user_id,
            type=TransactionType.FEE_PAYMENT.value,
            amount=amount,
        )
        self.db.add(transaction)
        await self.db.flush()
        fee = FeePaid(
            user_id=user.user_id,
            semester_id=semester.semester_id,
            amount=amount,
            transaction_id=transaction.transaction_id,
        )
        self.db.add(fee)
        await self.db.flush()

        def apply(receipt: ChainReceipt) -> None:
            transaction.transaction_hash = receipt.tx_hash

        receipt = await record_dual_write(
            self.db,
            self.chain.transact(
                ContractName.FEE, "payFees", token_uri,
                value_wei=ether_to_wei(amount),
                context=ErrorContext(user_id=user.user_id),
            ),
            apply,
            action="pay_fees",
            log_extra={"user_id": user.user_id, "semester_id": semester.semester_id},
        )
        return fee, transaction, receipt
