"""Native asset transfer primitive.

AssetTransfer is the contract the ledger depends on for moving wei
between accounts. InMemoryAssetBank keeps virtual balances and can be
told to reject incoming transfers for an account, which is how a
failing payout is simulated.
"""

import asyncio
from abc import ABC, abstractmethod

from fundme.logging import get_logger

logger = get_logger(__name__)


class AssetTransfer(ABC):
    """Abstract base class for native asset transfer backends."""

    @abstractmethod
    async def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        """Move amount wei from sender to recipient.

        Returns:
            True if the transfer happened, False if it was refused.
            A refused transfer leaves both balances unchanged.
        """
        ...

    @abstractmethod
    async def balance_of(self, account: str) -> int:
        """Return the account's balance in wei."""
        ...


class InMemoryAssetBank(AssetTransfer):
    """Virtual wei balances for local deployments and tests.

    Uses asyncio.Lock so concurrent transfers never interleave a
    debit with another transfer's credit.
    """

    def __init__(self) -> None:
        self._balances: dict[str, int] = {}
        self._rejecting: set[str] = set()
        self._lock = asyncio.Lock()

    def credit(self, account: str, amount: int) -> None:
        """Mint amount wei into account (setup helper, bypasses rejection)."""
        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")
        self._balances[account] = self._balances.get(account, 0) + amount

    def reject_incoming(self, account: str) -> None:
        """Make every future transfer to account fail."""
        self._rejecting.add(account)

    def accept_incoming(self, account: str) -> None:
        """Undo reject_incoming()."""
        self._rejecting.discard(account)

    async def transfer(self, sender: str, recipient: str, amount: int) -> bool:
        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")

        async with self._lock:
            if recipient in self._rejecting:
                logger.warning(
                    "transfer_rejected_by_recipient",
                    sender=sender,
                    recipient=recipient,
                    amount=amount,
                )
                return False

            available = self._balances.get(sender, 0)
            if available < amount:
                logger.warning(
                    "transfer_insufficient_balance",
                    sender=sender,
                    recipient=recipient,
                    amount=amount,
                    available=available,
                )
                return False

            self._balances[sender] = available - amount
            self._balances[recipient] = self._balances.get(recipient, 0) + amount

        logger.debug(
            "transfer_completed",
            sender=sender,
            recipient=recipient,
            amount=amount,
        )
        return True

    async def balance_of(self, account: str) -> int:
        async with self._lock:
            return self._balances.get(account, 0)
