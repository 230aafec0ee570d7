"""Fixed-point unit helpers.

On-ledger quantities are plain ints: wei for the native asset and
18-decimal fixed point for USD values. Human-facing values (settings,
API display) are Decimal. Never use float for amounts or prices.
"""

from decimal import ROUND_DOWN, Decimal

#: Decimals used by both wei amounts and normalized USD values
PRECISION_DECIMALS = 18

#: 1 ETH expressed in wei, also 1 USD in 18-decimal fixed point
WEI_PER_ETH = 10**PRECISION_DECIMALS


def to_fixed(value: Decimal, decimals: int = PRECISION_DECIMALS) -> int:
    """Convert a Decimal to an integer with the given implicit decimals.

    Rounds DOWN so a configured amount is never inflated by conversion.

    Args:
        value: Human-readable value (e.g., Decimal("0.1") ETH).
        decimals: Number of implicit decimal places in the result.

    Returns:
        The scaled integer (e.g., 100000000000000000 for 0.1 at 18 decimals).
    """
    scaled = (value * (Decimal(10) ** decimals)).to_integral_value(rounding=ROUND_DOWN)
    return int(scaled)


def from_fixed(value: int, decimals: int = PRECISION_DECIMALS) -> Decimal:
    """Convert a scaled integer back to a Decimal for display."""
    return Decimal(value).scaleb(-decimals)
