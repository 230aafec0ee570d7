"""Abstract price feed interface.

Defines the contract for all oracle implementations, shaped after a
Chainlink AggregatorV3 feed. The ledger and PriceConverter depend only
on this interface.
"""

from abc import ABC, abstractmethod

from fundme.models import PriceReading


class PriceFeed(ABC):
    """Abstract base class for USD price feeds."""

    @abstractmethod
    async def latest_round_data(self) -> PriceReading:
        """Return the most recent round."""
        ...

    @abstractmethod
    async def get_round_data(self, round_id: int) -> PriceReading:
        """Return a specific historical round.

        Raises:
            LookupError: If the feed has no data for round_id.
        """
        ...

    @abstractmethod
    async def decimals(self) -> int:
        """Number of implicit decimals in PriceReading.answer."""
        ...

    @abstractmethod
    async def description(self) -> str:
        """Human-readable feed description (e.g., "ETH / USD")."""
        ...

    @abstractmethod
    async def version(self) -> int:
        """Aggregator version identifier."""
        ...
