"""Blockchain Client — async web3 handle bound to the pre-deployed portal contracts.

Invariants:
    - Contract bindings come from Truffle artifacts: {contracts_dir}/{ContractName}.json,
      abi + address of the configured network (or the first one listed)
    - Transactions are sent from the node's first account and awaited until mined
    - A receipt with status != 1 is a failure, never a result
    - All web3 / transport failures mapped to ContractCallError or ChainUnavailableError:
      connection-level aiohttp errors → ChainUnavailableError, other HTTP errors → ContractCallError
    - Once a transaction is sent its hash is kept on every later failure (timeout, bad status)
    - State-changing calls are never retried (a retry could mint twice)

Design Decisions:
    - Artifacts load lazily on first use: the API boots without a chain node and
      reports it through /health/ready instead of failing at import
    - Token id read from the ERC-721 Transfer event when the ABI declares one
"""

import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any

import aiohttp
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3Exception
from web3.logs import DISCARD

from portal.core.domain_types import ContractName, WalletAddress
from portal.core.errors import (
    ChainUnavailableError, ContractCallError, ErrorContext, InvalidWalletError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChainReceipt:
    """The parts of a mined transaction the portal keeps."""
    tx_hash: str
    block_number: int
    contract: str
    method: str
    token_id: int | None = None

    def to_response(self) -> dict:
        return {
            "transaction_hash": self.tx_hash,
            "block_number": self.block_number,
            "contract": self.contract,
            "method": self.method,
            "token_id": self.token_id,
        }


def normalize_wallet(address: str) -> WalletAddress:
    """Return the EIP-55 checksummed form or raise InvalidWalletError."""
    if not isinstance(address, str) or not Web3.is_address(address):
        raise InvalidWalletError(str(address))
    return WalletAddress(Web3.to_checksum_address(address))


def ether_to_wei(amount: Decimal) -> int:
    return int(Web3.to_wei(Decimal(amount), "ether"))


def load_artifact(
    contracts_dir: Path, name: ContractName, network_id: str | None = None,
) -> tuple[list, str]:
    """Read (abi, address) from a Truffle build artifact."""
    path = Path(contracts_dir) / f"{name.value}.json"
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ChainUnavailableError(f"Contract artifact {path} not found")
    except json.JSONDecodeError as e:
        raise ChainUnavailableError(f"Contract artifact {path} is not valid JSON: {e}")

    networks = data.get("networks") or {}
    if not networks:
        raise ChainUnavailableError(f"{name.value} has not been deployed to any network")
    key = network_id if network_id is not None else next(iter(networks))
    entry = networks.get(key)
    if not entry or not entry.get("address"):
        raise ChainUnavailableError(
            f"{name.value} has no deployment for network {key}",
        )
    return data["abi"], entry["address"]


def _declares_transfer_event(abi: list) -> bool:
    return any(
        item.get("type") == "event" and item.get("name") == "Transfer"
        for item in abi
    )


class ChainClient:
    """Sends contract transactions and maps every failure to a portal error."""

    def __init__(
        self,
        rpc_url: str,
        contracts_dir: str | Path,
        network_id: str | None = None,
        tx_timeout_seconds: int = 120,
        web3: Any = None,
    ):
        self.w3 = web3 if web3 is not None else AsyncWeb3(AsyncHTTPProvider(rpc_url))
        self.contracts_dir = Path(contracts_dir)
        self.network_id = network_id
        self.tx_timeout_seconds = tx_timeout_seconds
        self._contracts: dict[ContractName, Any] = {}

    def contract(self, name: ContractName):
        """Contract binding for `name`, loading the artifact on first use."""
        if name not in self._contracts:
            abi, address = load_artifact(self.contracts_dir, name, self.network_id)
            try:
                checksummed = Web3.to_checksum_address(address)
            except ValueError:
                raise ChainUnavailableError(
                    f"{name.value} artifact has an invalid address: {address!r}",
                )
            self._contracts[name] = self.w3.eth.contract(address=checksummed, abi=abi)
        return self._contracts[name]

    async def transact(
        self,
        name: ContractName,
        method: str,
        *args,
        value_wei: int = 0,
        context: ErrorContext | None = None,
    ) -> ChainReceipt:
        """Send `name.method(*args)` and wait for the receipt."""
        ctx = context or ErrorContext()
        tx_hash = None
        try:
            contract = self.contract(name)
            accounts = await self.w3.eth.accounts
            if not accounts:
                raise ChainUnavailableError(
                    "Node exposes no unlocked accounts", context=ctx,
                )
            tx_params: dict[str, Any] = {"from": accounts[0]}
            if value_wei:
                tx_params["value"] = value_wei
            tx_hash = await contract.functions[method](*args).transact(tx_params)
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.tx_timeout_seconds,
            )
        except ContractLogicError as e:
            raise self._call_failed(f"reverted: {e}", name, method, ctx)
        except TimeExhausted:
            # sent but unconfirmed: it may still be mined
            ctx.tx_hash = Web3.to_hex(tx_hash) if tx_hash is not None else None
            raise self._call_failed(
                f"not mined within {self.tx_timeout_seconds}s", name, method, ctx,
            )
        except (OSError, aiohttp.ClientConnectionError) as e:
            logger.error(
                f"Chain node unreachable: {e!r}",
                extra={"contract": name.value, "method": method},
            )
            raise ChainUnavailableError(
                f"Blockchain node unreachable: {e!r}", context=ctx,
            )
        except (Web3Exception, ValueError, aiohttp.ClientError) as e:
            raise self._call_failed(str(e) or repr(e), name, method, ctx)

        tx_hex = Web3.to_hex(receipt["transactionHash"])
        if receipt.get("status", 1) != 1:
            ctx.tx_hash = tx_hex
            raise self._call_failed("transaction reverted", name, method, ctx)

        result = ChainReceipt(
            tx_hash=tx_hex,
            block_number=int(receipt["blockNumber"]),
            contract=name.value,
            method=method,
            token_id=self._minted_token_id(contract, receipt),
        )
        logger.info(
            f"{name.value}.{method} mined in block {result.block_number}",
            extra={
                "contract": name.value, "method": method,
                "tx_hash": result.tx_hash, "token_id": result.token_id,
            },
        )
        return result

    async def is_connected(self) -> bool:
        """Node reachability (for the readiness check)."""
        try:
            return bool(await self.w3.is_connected())
        except Exception as e:
            logger.error(f"Chain health check failed: {e}")
            return False

    def _minted_token_id(self, contract, receipt) -> int | None:
        if not _declares_transfer_event(contract.abi):
            return None
        for event in contract.events.Transfer().process_receipt(receipt, errors=DISCARD):
            return int(event["args"]["tokenId"])
        return None

    def _call_failed(
        self, message: str, name: ContractName, method: str,
        context: ErrorContext | None,
    ) -> ContractCallError:
        logger.error(
            f"Contract call failed: {name.value}.{method}: {message}",
            extra={
                "contract": name.value, "method": method,
                "tx_hash": context.tx_hash if context else None,
                "error_code": "CONTRACT_CALL_FAILED",
            },
        )
        return ContractCallError(message, name.value, method, context)


# Singleton (initialized on startup)
chain_client: ChainClient | None = None


def init_chain(rpc_url: str, contracts_dir: str | Path, **kwargs) -> ChainClient:
    global chain_client
    chain_client = ChainClient(rpc_url, contracts_dir, **kwargs)
    return chain_client


def get_chain() -> ChainClient:
    """FastAPI dependency for the blockchain client."""
    if not chain_client:
        raise RuntimeError("Blockchain client not initialized")
    return chain_client
