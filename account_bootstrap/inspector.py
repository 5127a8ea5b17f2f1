"""Report the status of a transaction from the latest block."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import aiohttp
from starknet_py.net.client_errors import ClientError
from starknet_py.net.full_node_client import FullNodeClient

from account_bootstrap.errors import BlockStructureError, EmptyBlockError, NetworkError
from account_bootstrap.poller import status_name

logger = logging.getLogger(__name__)

FINALIZED_BLOCK = "finalized"
PRE_CONFIRMED_BLOCK = "pre-confirmed"


@dataclass(frozen=True)
class TransactionStatusReport:
    transaction_hash: int
    finality_status: str
    execution_status: str
    failure_reason: Optional[str] = None
    block_kind: Optional[str] = None


def _block_transactions(block) -> Tuple[str, List[int]]:
    if block is None:
        raise BlockStructureError("Unexpected block output: empty payload")
    transactions = getattr(block, "transactions", None)
    if not isinstance(transactions, list):
        raise BlockStructureError(f"Unexpected block output: {type(block).__name__}")
    # Only finalized blocks carry a hash
    kind = FINALIZED_BLOCK if getattr(block, "block_hash", None) is not None else PRE_CONFIRMED_BLOCK
    return kind, transactions


async def latest_block_transactions(client: FullNodeClient) -> Tuple[str, List[int]]:
    """Return the kind of the latest block and its transaction hashes"""
    try:
        block = await client.get_block_with_tx_hashes(block_number="latest")
    except (ClientError, aiohttp.ClientError) as e:
        raise NetworkError(f"Failed to fetch latest block: {e}") from e
    return _block_transactions(block)


async def inspect_transaction(client: FullNodeClient, tx_hash: int, block_kind: Optional[str] = None) -> TransactionStatusReport:
    try:
        status = await client.get_transaction_status(tx_hash=tx_hash)
    except (ClientError, aiohttp.ClientError) as e:
        raise NetworkError(f"Failed to fetch status of {hex(tx_hash)}: {e}") from e

    return TransactionStatusReport(
        transaction_hash=tx_hash,
        finality_status=status_name(status.finality_status),
        execution_status=status_name(getattr(status, "execution_status", None)),
        failure_reason=getattr(status, "failure_reason", None) or None,
        block_kind=block_kind,
    )


async def inspect_latest_transaction(client: FullNodeClient) -> TransactionStatusReport:
    """Fetch the latest block and report the status of its first transaction."""
    kind, transactions = await latest_block_transactions(client)
    if not transactions:
        raise EmptyBlockError("No transaction in latest block")

    logger.debug("Latest %s block has %d transactions", kind, len(transactions))
    return await inspect_transaction(client, transactions[0], block_kind=kind)


def print_report(report: TransactionStatusReport):
    print(f"Transaction Hash: {hex(report.transaction_hash)}")
    if report.block_kind:
        print(f"Block: latest ({report.block_kind})")
    print(f"Finality Status: {report.finality_status}")
    print(f"Execution Status: {report.execution_status or 'UNKNOWN'}")
    if report.failure_reason:
        print(f"Failure Reason: {report.failure_reason}")
