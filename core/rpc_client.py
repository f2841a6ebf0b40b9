"""
EVM node client built on web3.py
"""

import logging
import time
from typing import List, Optional

import requests
from web3 import Web3
from web3.exceptions import ContractLogicError, TimeExhausted, Web3RPCError

from core.constants import GAS_HEADROOM_PCT, TIMEOUTS
from core.errors import TransactionReverted, reverted_from_logic_error, revert_reason
from core.signers import Signer

logger = logging.getLogger(__name__)


def make_provider(rpc_url: str) -> Web3.HTTPProvider:
    """
    HTTP provider for the node

    Retries are disabled: a transport error fails the run instead of
    being retried.
    """
    session = requests.Session()
    session.headers.update({'Content-Type': 'application/json'})
    return Web3.HTTPProvider(
        rpc_url,
        request_kwargs={'timeout': TIMEOUTS['SUBMIT']},
        session=session,
        exception_retry_configuration=None
    )


class RpcClient:
    """web3 client wrapper for an EVM node"""

    def __init__(self, rpc_url: str, chain_id: Optional[int] = None):
        """
        Initialize RPC client

        Args:
            rpc_url: HTTP endpoint of the node
            chain_id: Expected chain id (queried from the node when omitted)
        """
        if not rpc_url:
            raise ValueError("rpc_url is required")
        self.rpc_url = rpc_url
        self.w3 = Web3(make_provider(rpc_url))
        self._chain_id = chain_id

    def is_connected(self) -> bool:
        return self.w3.is_connected()

    def chain_id(self) -> int:
        if self._chain_id is None:
            self._chain_id = self.w3.eth.chain_id
        return self._chain_id

    def block_number(self) -> int:
        return self.w3.eth.block_number

    def accounts(self) -> List[str]:
        return [Web3.to_checksum_address(a) for a in self.w3.eth.accounts]

    def contract(self, address: str, abi: list):
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    def send_transaction(self, fn, signer: Signer) -> str:
        """
        Send a contract function call from the given signer

        Gas is estimated by build_transaction (a reverting call raises
        TransactionReverted here). Signers with a private key sign locally,
        others go through eth_sendTransaction on node-managed accounts.

        Args:
            fn: Bound contract function, e.g. contract.functions.mint(to, amount)
            signer: Sending identity

        Returns:
            Transaction hash
        """
        try:
            tx = fn.build_transaction({
                'from': signer.address,
                'gasPrice': self.w3.eth.gas_price,
                'chainId': self.chain_id(),
            })
            tx['gas'] = tx['gas'] + tx['gas'] * GAS_HEADROOM_PCT // 100

            if signer.signs_locally:
                tx['nonce'] = self.w3.eth.get_transaction_count(signer.address, 'pending')
                signed = self.w3.eth.account.sign_transaction(tx, signer.private_key)
                tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
            else:
                tx_hash = self.w3.eth.send_transaction(tx)

        except ContractLogicError as e:
            raise reverted_from_logic_error(e)
        except Web3RPCError as e:
            logger.error(f"Transaction submission failed: {e}")
            raise

        tx_hash = Web3.to_hex(tx_hash)
        logger.info(f"Transaction sent: {tx_hash} from {signer}")
        return tx_hash

    def wait_for_transaction(
        self,
        tx_hash: str,
        confirmations: int = 1,
        timeout: float = TIMEOUTS['WAIT'],
        poll_interval: float = 1.0
    ):
        """
        Wait until a transaction has the requested number of confirmations

        Args:
            tx_hash: Transaction hash
            confirmations: Required depth; the inclusion block counts as one
            timeout: Seconds before giving up
            poll_interval: Seconds between polls

        Returns:
            web3 transaction receipt

        Raises:
            TransactionReverted: receipt status is 0
            TimeoutError: not confirmed in time
        """
        deadline = time.time() + timeout

        try:
            receipt = self.w3.eth.wait_for_transaction_receipt(tx_hash, timeout=timeout, poll_latency=poll_interval)
        except TimeExhausted as e:
            raise TimeoutError(f"Transaction {tx_hash} not mined after {timeout} seconds") from e

        if receipt['status'] == 0:
            logger.info(f"Transaction reverted: {tx_hash}")
            raise TransactionReverted(tx_hash=tx_hash, reason=self._replay_revert_reason(tx_hash, receipt))

        while self.block_number() - receipt['blockNumber'] + 1 < confirmations:
            if time.time() >= deadline:
                raise TimeoutError(f"Transaction {tx_hash} not confirmed {confirmations} times after {timeout} seconds")
            logger.debug(f"Transaction {tx_hash} waiting for {confirmations} confirmations")
            time.sleep(poll_interval)

        logger.info(f"Transaction confirmed: {tx_hash} (block {receipt['blockNumber']})")
        return receipt

    def _replay_revert_reason(self, tx_hash: str, receipt) -> Optional[str]:
        """Re-run a reverted transaction as eth_call to recover its revert reason"""
        tx = self.w3.eth.get_transaction(tx_hash)
        call = {'from': tx['from'], 'to': tx['to'], 'data': tx['input']}
        try:
            self.w3.eth.call(call, block_identifier=receipt['blockNumber'])
        except ContractLogicError as e:
            return revert_reason(e)
        except Web3RPCError as e:
            logger.warning(f"Could not replay reverted transaction {tx_hash}: {e}")
        return None


# Singleton instance
_rpc_client: Optional[RpcClient] = None


def configure_client(rpc_url: str, chain_id: Optional[int] = None) -> RpcClient:
    """Create the shared client instance"""
    global _rpc_client
    _rpc_client = RpcClient(rpc_url, chain_id=chain_id)
    return _rpc_client


def rpc_client() -> RpcClient:
    """Get singleton RPC client instance"""
    if _rpc_client is None:
        raise RuntimeError("RPC client not configured, call configure_client() first")
    return _rpc_client
