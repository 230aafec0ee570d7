"""Shared data models for the funding ledger.

Amounts are ints in wei; USD values are ints in 18-decimal fixed point.
"""

import time
from dataclasses import dataclass, field
from enum import Enum


class Operation(str, Enum):
    """Selectors the ledger recognizes on its raw-transfer entry point."""

    FUND = "fund"
    WITHDRAW = "withdraw"
    GET_VERSION = "getVersion"
    GET_OWNER = "getOwner"
    GET_FUNDER = "getFunder"
    GET_ADDRESS_TO_AMOUNT_FUNDED = "getAddressToAmountFunded"
    MINIMUM_USD = "MINIMUM_USD"


@dataclass(frozen=True)
class PriceReading:
    """One oracle round, shaped like an aggregator's latestRoundData().

    answer is signed and scaled by the feed's own decimals (typically 8).
    Only answer is consumed by the ledger.
    """

    round_id: int
    answer: int
    started_at: int  # Unix seconds
    updated_at: int  # Unix seconds
    answered_in_round: int


@dataclass
class DepositReceipt:
    """Result of an accepted deposit."""

    funder: str
    amount: int
    usd_value: int
    timestamp: float = field(default_factory=time.time)


@dataclass
class WithdrawalReceipt:
    """Result of a completed owner withdrawal.

    funders_cleared counts funder-list entries processed, including
    repeat deposits from the same address.
    """

    owner: str
    amount: int
    funders_cleared: int
    timestamp: float = field(default_factory=time.time)


@dataclass
class LedgerSnapshot:
    """Staged copy of mutable ledger state, restored when an operation fails."""

    amounts: dict[str, int]
    funders: list[str]
