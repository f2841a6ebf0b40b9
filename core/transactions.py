"""
Pending transaction handle
"""

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, List, Optional

from web3.logs import DISCARD

from core.constants import TIMEOUTS

if TYPE_CHECKING:
    from core.rpc_client import RpcClient

logger = logging.getLogger(__name__)


@dataclass
class TxReceipt:
    """Confirmed transaction outcome"""
    tx_hash: str
    block_number: int
    status: int
    gas_used: int
    raw: Any = None
    events: List[Any] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    def events_named(self, name: str) -> List[Any]:
        return [e for e in self.events if e['event'] == name]


def decode_events(contract, receipt) -> List[Any]:
    """Decode every event in the contract ABI found in a web3 receipt, in log order"""
    events = []
    for entry in contract.abi:
        if entry.get('type') != 'event':
            continue
        events.extend(contract.events[entry['name']]().process_receipt(receipt, errors=DISCARD))
    return sorted(events, key=lambda e: e['logIndex'])


class PendingTransaction:
    """Submitted transaction that has not been waited on yet"""

    def __init__(
        self,
        client: 'RpcClient',
        tx_hash: str,
        description: str = "",
        contract=None
    ):
        self.client = client
        self.hash = tx_hash
        self.description = description
        self.contract = contract
        self._receipt: Optional[TxReceipt] = None

    def wait(
        self,
        confirmations: int = 1,
        delay: float = 0,
        timeout: float = TIMEOUTS['WAIT'],
        poll_interval: float = 1.0
    ) -> TxReceipt:
        """
        Wait for the transaction to be confirmed

        Args:
            confirmations: Required confirmation depth
            delay: Fixed sleep before polling starts
            timeout: Seconds before giving up
            poll_interval: Seconds between receipt polls

        Returns:
            TxReceipt with decoded events

        Raises:
            TransactionReverted: the transaction was mined with status 0
            TimeoutError: not confirmed in time
        """
        if self._receipt is not None:
            return self._receipt

        if delay > 0:
            time.sleep(delay)

        raw = self.client.wait_for_transaction(
            self.hash,
            confirmations=confirmations,
            timeout=timeout,
            poll_interval=poll_interval
        )
        self._receipt = TxReceipt(
            tx_hash=self.hash,
            block_number=raw['blockNumber'],
            status=raw['status'],
            gas_used=raw.get('gasUsed', 0),
            raw=raw,
            events=decode_events(self.contract, raw) if self.contract is not None else [],
        )
        return self._receipt

    def __repr__(self) -> str:
        return f"PendingTransaction(hash='{self.hash}', description='{self.description}')"
