"""Fake chain client for service tests.

FakeChain mirrors ChainClient.transact/is_connected without a node:
every call (and the error context it carried) is recorded, receipts carry sequential tx hashes and token ids,
and setting fail_with makes the next calls raise that error.
"""

from itertools import count

from portal.core.domain_types import ContractName
from portal.infrastructure.chain_client import ChainReceipt

WALLET = "0x90f8bf6a479f320ead074411a4b0e7944ea8c9c1"
CHECKSUM_WALLET = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"
PASSWORD = "correct-horse-9"


class FakeChain:
    """Stands in for ChainClient: records calls, returns sequential receipts."""

    def __init__(self):
        self.calls: list[dict] = []
        self.contexts: list = []
        self.fail_with: Exception | None = None
        self.connected = True
        self._ids = count(1)

    async def transact(self, name: ContractName, method: str, *args, value_wei=0, context=None):
        self.calls.append({
            "contract": name.value, "method": method,
            "args": args, "value_wei": value_wei,
        })
        self.contexts.append(context)
        if self.fail_with is not None:
            raise self.fail_with
        n = next(self._ids)
        return ChainReceipt(
            tx_hash=f"0x{n:064x}",
            block_number=100 + n,
            contract=name.value,
            method=method,
            token_id=n,
        )

    async def is_connected(self) -> bool:
        return self.connected
