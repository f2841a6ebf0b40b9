"""
ERC20 precompile contract handle
"""

import logging
from typing import Any, List, Optional

from web3.exceptions import ContractLogicError

from core.constants import ERC20_PRECOMPILE_ADDRESS
from core.errors import reverted_from_logic_error
from core.rpc_client import RpcClient, rpc_client
from core.signers import Signer
from core.transactions import PendingTransaction, TxReceipt, decode_events

logger = logging.getLogger(__name__)


def _function(name, inputs, outputs=(), mutability='nonpayable'):
    return {
        'type': 'function',
        'name': name,
        'inputs': [{'name': n, 'type': t} for n, t in inputs],
        'outputs': [{'name': '', 'type': t} for t in outputs],
        'stateMutability': mutability,
    }


def _event(name, inputs):
    return {
        'type': 'event',
        'name': name,
        'anonymous': False,
        'inputs': [{'name': n, 'type': t, 'indexed': indexed} for n, t, indexed in inputs],
    }


_COMMON_ABI = [
    _function('mint', [('to', 'address'), ('amount', 'uint256')], ['bool']),
    _function('burnFrom', [('account', 'address'), ('amount', 'uint256')]),
    _function('balanceOf', [('account', 'address')], ['uint256'], 'view'),
    _function('transfer', [('to', 'address'), ('amount', 'uint256')], ['bool']),
    _function('approve', [('spender', 'address'), ('amount', 'uint256')], ['bool']),
    _function('allowance', [('owner', 'address'), ('spender', 'address')], ['uint256'], 'view'),
    _function('increaseAllowance', [('spender', 'address'), ('addedValue', 'uint256')], ['bool']),
    _function('owner', [], ['address'], 'view'),
    _function('transferOwnership', [('newOwner', 'address')]),
    _function('name', [], ['string'], 'view'),
    _function('symbol', [], ['string'], 'view'),
    _function('decimals', [], ['uint8'], 'view'),
    _function('totalSupply', [], ['uint256'], 'view'),
    _event('Transfer', [('from', 'address', True), ('to', 'address', True), ('value', 'uint256', False)]),
    _event('OwnershipTransferred', [('previousOwner', 'address', True), ('newOwner', 'address', True)]),
]

# Caller burns from its own balance
ERC20_ABI = [_function('burn', [('amount', 'uint256')])] + _COMMON_ABI

# Owner burns from an arbitrary account ("burn0")
ERC20_BURN0_ABI = [_function('burn', [('from', 'address'), ('amount', 'uint256')])] + _COMMON_ABI


class Erc20Precompile:
    """ERC20 precompile handle bound to one ABI variant and one signer"""

    def __init__(
        self,
        signer: Signer,
        abi: Optional[list] = None,
        address: str = ERC20_PRECOMPILE_ADDRESS,
        client: Optional[RpcClient] = None
    ):
        """
        Initialize precompile handle

        Args:
            signer: Signer used for mutating calls and as `from` for reads
            abi: ABI variant (default: burn(uint256) variant)
            address: Precompile address
            client: RpcClient (default: shared client)
        """
        self.signer = signer
        self.abi = abi or ERC20_ABI
        self.client = client or rpc_client()
        self.contract = self.client.contract(address, self.abi)
        self.address = self.contract.address

    def connect(self, signer: Signer) -> 'Erc20Precompile':
        """Same address and ABI, different signer"""
        return Erc20Precompile(signer, abi=self.abi, address=self.address, client=self.client)

    def _read(self, name: str, *args) -> Any:
        try:
            return self.contract.functions[name](*args).call({'from': self.signer.address})
        except ContractLogicError as e:
            raise reverted_from_logic_error(e)

    def _send(self, name: str, *args) -> PendingTransaction:
        description = f"{name}({', '.join(str(a) for a in args)})"

        logger.info(f"{self.signer} -> {description}")
        tx_hash = self.client.send_transaction(self.contract.functions[name](*args), self.signer)
        return PendingTransaction(self.client, tx_hash, description=description, contract=self.contract)

    # Mutating calls

    def mint(self, to: str, amount: int) -> PendingTransaction:
        return self._send('mint', to, amount)

    def burn(self, *args) -> PendingTransaction:
        """
        Burn tokens

        With the default ABI this is burn(amount) from the caller's own
        balance; with the burn0 ABI it is burn(from, amount), owner only.
        """
        return self._send('burn', *args)

    def burn_from(self, account: str, amount: int) -> PendingTransaction:
        return self._send('burnFrom', account, amount)

    def transfer(self, to: str, amount: int) -> PendingTransaction:
        return self._send('transfer', to, amount)

    def approve(self, spender: str, amount: int) -> PendingTransaction:
        return self._send('approve', spender, amount)

    def increase_allowance(self, spender: str, added_value: int) -> PendingTransaction:
        return self._send('increaseAllowance', spender, added_value)

    def transfer_ownership(self, new_owner: str) -> PendingTransaction:
        return self._send('transferOwnership', new_owner)

    # Read-only accessors

    def balance_of(self, account: str) -> int:
        return self._read('balanceOf', account)

    def allowance(self, owner: str, spender: str) -> int:
        return self._read('allowance', owner, spender)

    def owner(self) -> str:
        return self._read('owner')

    def name(self) -> str:
        return self._read('name')

    def symbol(self) -> str:
        return self._read('symbol')

    def decimals(self) -> int:
        return self._read('decimals')

    def total_supply(self) -> int:
        return self._read('totalSupply')

    def parse_events(self, receipt: TxReceipt) -> List[Any]:
        """Decoded Transfer / OwnershipTransferred events emitted by this precompile"""
        return [e for e in decode_events(self.contract, receipt.raw) if e['address'] == self.address]

    def __str__(self) -> str:
        return f"Erc20Precompile({self.address}, signer={self.signer})"

    def __repr__(self) -> str:
        return f"Erc20Precompile(address='{self.address}', signer='{self.signer.address}')"
