"""
Constants and defaults for the ERC20 precompile harness
"""

from decimal import Decimal, InvalidOperation

# Fixed address the node exposes the ERC20 precompile at
ERC20_PRECOMPILE_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Wei scale (10^18) for token precision
WEI_SCALE = 10**18
TOKEN_DECIMALS = 18

# Every mutating call sleeps this long after submission, then waits for confirmations
DEFAULT_POST_SUBMIT_DELAY = 1.0
DEFAULT_CONFIRMATIONS = 1

# Signer index per role, as handed out by the signer provider
DEFAULT_ROLES = {
    'owner': 2,
    'user1': 0,
    'user2': 1,
}

# Timeout configurations (seconds)
TIMEOUTS = {
    'SUBMIT': 30,
    'WAIT': 120,
    'STATUS': 10,
}

# Headroom applied on top of eth_estimateGas
GAS_HEADROOM_PCT = 20


def parse_ether(amount, decimals: int = TOKEN_DECIMALS) -> int:
    """
    Convert a decimal token amount to base units

    Args:
        amount: Amount as str, int or Decimal (e.g. "100", "0.5")
        decimals: Token decimals

    Returns:
        Amount in base units
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Invalid token amount: {amount!r}")

    if value < 0:
        raise ValueError(f"Token amount must not be negative: {amount!r}")

    scaled = value * (Decimal(10) ** decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Too many decimal places for {decimals} decimals: {amount!r}")
    return int(scaled)
