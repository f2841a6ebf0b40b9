"""
Error types for node interactions
"""

from typing import Optional

REVERT_PREFIX = 'execution reverted: '


class TransactionReverted(Exception):
    """The remote call reverted (authorization or balance failure)"""

    def __init__(self, tx_hash: Optional[str] = None, reason: Optional[str] = None):
        self.tx_hash = tx_hash
        self.reason = reason

        msg = "Transaction reverted"
        if tx_hash:
            msg += f" ({tx_hash})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


def revert_reason(error: Exception) -> Optional[str]:
    """
    Revert reason carried by a web3 ContractLogicError

    web3 decodes Error(string) payloads into "execution reverted: <reason>";
    the prefix is stripped so only the reason remains.
    """
    message = getattr(error, 'message', None) or (error.args[0] if error.args else '')
    if not isinstance(message, str) or not message:
        return None
    if message.startswith(REVERT_PREFIX):
        return message[len(REVERT_PREFIX):] or None
    return message


def reverted_from_logic_error(error: Exception, tx_hash: Optional[str] = None) -> TransactionReverted:
    """Build a TransactionReverted from a web3 ContractLogicError"""
    return TransactionReverted(tx_hash=tx_hash, reason=revert_reason(error))
