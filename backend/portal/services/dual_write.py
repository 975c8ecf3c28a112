"""Dual Write — pairs one contract transaction with the DB rows that describe it.

Invariants:
    - Rows are added and flushed by the caller before the contract call
      (their ids go into token URIs)
    - Contract failure: session rolled back, nothing persisted, error re-raised
    - Receipt applied to the rows, then committed
    - Commit failure after a mined transaction is NOT compensated: logged at ERROR
      with tx_hash and raised as DatabaseError

Design Decisions:
    - No retry and no idempotency key; a failed commit leaves the chain ahead
      of the DB and the log line is the only reconciliation trail
"""

import logging
from typing import Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import DatabaseError, ErrorContext, PortalError
from portal.infrastructure.chain_client import ChainReceipt

logger = logging.getLogger(__name__)


async def record_dual_write(
    db: AsyncSession,
    send: Awaitable[ChainReceipt],
    apply: Callable[[ChainReceipt], None],
    *,
    action: str,
    log_extra: dict | None = None,
) -> ChainReceipt:
    """Await the contract call, apply its receipt to pending rows, commit."""
    extra = dict(log_extra or {})
    try:
        receipt = await send
    except PortalError:
        await db.rollback()
        raise

    apply(receipt)
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"{action}: DB commit failed after mined transaction: {e}",
            extra={**extra, "tx_hash": receipt.tx_hash, "error_code": "DUAL_WRITE_DIVERGED"},
        )
        raise DatabaseError(
            "Transaction mined but not recorded", "commit",
            context=ErrorContext(tx_hash=receipt.tx_hash),
        )

    logger.info(f"{action} recorded", extra={**extra, "tx_hash": receipt.tx_hash})
    return receipt
