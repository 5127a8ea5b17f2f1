"""Poll the node until a transaction reaches a final state."""

import asyncio
import logging
from typing import Callable, Optional

import aiohttp
from starknet_py.net.client_errors import ClientError
from starknet_py.net.client_models import TransactionReceipt
from starknet_py.net.full_node_client import FullNodeClient

from account_bootstrap.errors import ConfirmationTimeout, TransactionRejectedError

logger = logging.getLogger(__name__)

ACCEPTED_STATUSES = ("ACCEPTED_ON_L2", "ACCEPTED_ON_L1")
REJECTED_STATUSES = ("REJECTED",)

# Errors that mean "not known yet" rather than "failed"
LOOKUP_ERRORS = (ClientError, aiohttp.ClientError, asyncio.TimeoutError)


def status_name(status) -> str:
    """Return the wire name of a status enum (or plain string)."""
    if status is None:
        return ""
    return str(getattr(status, "value", status)).upper()


async def wait_for_confirmation(
    client: FullNodeClient,
    tx_hash: int,
    poll_interval: float = 5.0,
    max_attempts: int = 60,
    on_attempt: Optional[Callable[[int], None]] = None,
) -> TransactionReceipt:
    """Return the receipt once the transaction is accepted on L2 or L1.

    Makes at most ``max_attempts`` receipt lookups ``poll_interval`` seconds
    apart. Lookup errors are retried. ``on_attempt`` is called with the attempt
    number after every attempt that did not end the wait.

    Raises TransactionRejectedError as soon as the node reports a rejection and
    ConfirmationTimeout when the attempts run out.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be positive, got {max_attempts}")

    for attempt in range(1, max_attempts + 1):
        try:
            receipt = await client.get_transaction_receipt(tx_hash=tx_hash)
        except LOOKUP_ERRORS as e:
            logger.debug("Receipt for %s not available (attempt %d): %s", hex(tx_hash), attempt, e)
        else:
            finality = status_name(receipt.finality_status)
            if finality in ACCEPTED_STATUSES:
                return receipt
            if finality in REJECTED_STATUSES:
                raise TransactionRejectedError(tx_hash, getattr(receipt, "revert_reason", None) or "")
            logger.debug("Transaction %s is %s (attempt %d)", hex(tx_hash), finality, attempt)

        if on_attempt is not None:
            on_attempt(attempt)
        if attempt < max_attempts:
            await asyncio.sleep(poll_interval)

    raise ConfirmationTimeout(tx_hash, max_attempts)
