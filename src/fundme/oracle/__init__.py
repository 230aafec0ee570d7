"""Oracle layer -- price feed interface, mock aggregator, and USD conversion."""

from fundme.oracle.converter import PriceConverter
from fundme.oracle.feed import PriceFeed
from fundme.oracle.mock_feed import MockPriceFeed

__all__ = ["MockPriceFeed", "PriceConverter", "PriceFeed"]
