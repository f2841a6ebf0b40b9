"""
Signer provisioning for the harness
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from eth_account import Account
from eth_utils import to_checksum_address

logger = logging.getLogger(__name__)


@dataclass
class Signer:
    """
    Identity that sends transactions

    Signers with a private key sign locally; signers without one rely on
    the node holding the key (unlocked dev accounts).
    """
    address: str
    private_key: Optional[str] = field(default=None, repr=False)
    label: str = ""

    def __post_init__(self):
        self.address = to_checksum_address(self.address)

    @property
    def signs_locally(self) -> bool:
        return self.private_key is not None

    def __str__(self) -> str:
        if self.label:
            return f"{self.label}({self.address})"
        return self.address


def load_signers(client, private_keys: Optional[List[str]] = None) -> List[Signer]:
    """
    Provision the ordered signer list

    Args:
        client: RpcClient used to list node-managed accounts when no keys are given
        private_keys: Hex private keys, in signer order

    Returns:
        List of signers, index-addressable like the node's account list
    """
    if private_keys:
        signers = []
        for key in private_keys:
            acct = Account.from_key(key)
            signers.append(Signer(address=acct.address, private_key=key))
        logger.info(f"Loaded {len(signers)} signers from private keys")
        return signers

    addresses = client.accounts()
    if not addresses:
        raise ValueError("Node exposes no accounts and no SIGNER_PRIVATE_KEYS were given")

    logger.info(f"Using {len(addresses)} node-managed accounts")
    return [Signer(address=addr) for addr in addresses]


def resolve_roles(signers: List[Signer], roles: Dict[str, int]) -> Dict[str, Signer]:
    """Map role names (owner, user1, user2) to signers by index"""
    resolved = {}
    for role, index in roles.items():
        if index < 0 or index >= len(signers):
            raise ValueError(
                f"Role {role} needs signer index {index}, but only {len(signers)} signers are available"
            )
        signer = signers[index]
        resolved[role] = Signer(address=signer.address, private_key=signer.private_key, label=role)
    return resolved
