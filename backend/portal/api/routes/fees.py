"""Fee Payment Route — transactions + fees_paid rows + FeePaymentNFT.payFees."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from portal.config import get_settings
from portal.infrastructure.chain_client import ChainClient, get_chain
from portal.infrastructure.database import get_db
from portal.schemas.actions import FeePaymentRequest
from portal.services.handle_fees import FeeHandlers

router = APIRouter(prefix="/api/v1/fees", tags=["fees"])


@router.post("/payments", status_code=status.HTTP_201_CREATED)
async def pay_fees(
    body: FeePaymentRequest,
    db: AsyncSession = Depends(get_db),
    chain: ChainClient = Depends(get_chain),
):
    fee, transaction, receipt = await FeeHandlers(
        db, chain, get_settings(),
    ).pay_fees(body)
    return {
        "success": True,
        "transaction": {
            "transaction_id": transaction.transaction_id,
            "user_id": transaction.user_id,
            "type": transaction.type,
            "amount": str(transaction.amount),
            "transaction_hash": transaction.transaction_hash,
            "transaction_date": transaction.transaction_date.isoformat(),
        },
        "fee": {
            "fee_id": fee.fee_id,
            "semester_id": fee.semester_id,
            "amount": str(fee.amount),
        },
        "receipt": receipt.to_response(),
    }
