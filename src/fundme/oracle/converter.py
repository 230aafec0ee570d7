"""Oracle price normalization and ETH -> USD conversion.

All arithmetic is integer fixed point:
  - get_price(): USD per ETH with 18 decimals
  - get_conversion_rate(wei): USD value with 18 decimals

Division truncates toward zero; nothing is rounded up.
"""

from fundme.exceptions import InvalidPriceReading
from fundme.logging import get_logger
from fundme.oracle.feed import PriceFeed
from fundme.units import PRECISION_DECIMALS, WEI_PER_ETH

logger = get_logger(__name__)


class PriceConverter:
    """Converts raw wei amounts to 18-decimal USD using a PriceFeed.

    Isolates callers from the feed's native decimal scale.

    Args:
        feed: Oracle to read the latest answer from.
        feed_decimals: Decimals of feed answers (8 for ETH / USD).

    Raises:
        ValueError: If feed_decimals is outside 0..18.
    """

    def __init__(self, feed: PriceFeed, feed_decimals: int = 8) -> None:
        if not 0 <= feed_decimals <= PRECISION_DECIMALS:
            raise ValueError(
                f"feed_decimals must be between 0 and {PRECISION_DECIMALS}, "
                f"got {feed_decimals}"
            )
        self._feed = feed
        self._scale = 10 ** (PRECISION_DECIMALS - feed_decimals)

    @property
    def feed(self) -> PriceFeed:
        return self._feed

    async def get_price(self) -> int:
        """Return the latest ETH price in USD, rescaled to 18 decimals.

        Only the answer of the latest round is used; round id and
        timestamps are ignored.

        Raises:
            InvalidPriceReading: If the feed's answer is negative.
        """
        reading = await self._feed.latest_round_data()
        if reading.answer < 0:
            logger.error(
                "negative_price_reading",
                round_id=reading.round_id,
                answer=reading.answer,
            )
            raise InvalidPriceReading(
                f"Oracle returned negative price {reading.answer} "
                f"in round {reading.round_id}"
            )
        return reading.answer * self._scale

    async def get_conversion_rate(self, amount: int) -> int:
        """Convert a wei amount to its USD value (18 decimals).

        Formula: price * amount // 1e18

        Args:
            amount: Native asset amount in wei.

        Returns:
            USD value in 18-decimal fixed point, truncated.

        Raises:
            ValueError: If amount is negative.
            InvalidPriceReading: If the feed's answer is negative.
        """
        if amount < 0:
            raise ValueError(f"amount must be non-negative, got {amount}")
        price = await self.get_price()
        return (price * amount) // WEI_PER_ETH

    async def get_version(self) -> int:
        """Pass-through to the feed's version identifier."""
        return await self._feed.version()
