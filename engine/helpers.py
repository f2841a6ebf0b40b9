"""
Helper functions for scenario execution
"""
import logging
from typing import Callable, Optional

from core.config import ExecutionSettings
from core.errors import TransactionReverted
from core.transactions import PendingTransaction, TxReceipt

logger = logging.getLogger(__name__)


def confirm(pending: PendingTransaction, execution: ExecutionSettings) -> TxReceipt:
    """Apply the confirmation policy: fixed delay, then wait for confirmations."""
    receipt = pending.wait(
        confirmations=execution.confirmations,
        delay=execution.post_submit_delay,
        timeout=execution.tx_timeout,
        poll_interval=execution.poll_interval
    )
    logger.info(f"{pending.description} confirmed in block {receipt.block_number}")
    return receipt


def expect_revert(action: Callable[[], Optional[PendingTransaction]], execution: ExecutionSettings) -> TransactionReverted:
    """
    Assert that a remote call reverts.

    The revert may surface at gas estimation, at submission or in the
    receipt. Anything other than a revert propagates unchanged.

    Args:
        action: Submits the call and returns its pending transaction
        execution: Confirmation policy used when the call got submitted

    Returns:
        The TransactionReverted that was raised
    """
    try:
        pending = action()
        if pending is not None:
            confirm(pending, execution)
    except TransactionReverted as e:
        logger.info(f"Reverted as expected: {e.reason or 'no reason'}")
        return e

    raise AssertionError("Expected the call to revert, but it succeeded")


def expect_equal(actual, expected, what: str):
    if actual != expected:
        raise AssertionError(f"{what}: expected {expected}, got {actual}")
