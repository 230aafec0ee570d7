"""Local deployment of a funding ledger with its collaborators.

Wiring order:
1. MockPriceFeed seeded with OracleSettings.initial_price
2. PriceConverter over the feed
3. InMemoryAssetBank (deployer credited with ChainSettings.genesis_balance)
4. FundingLedger owned by the deployer
"""

from dataclasses import dataclass

from fundme.assets import AssetTransfer, InMemoryAssetBank
from fundme.config import AppSettings
from fundme.ledger import FundingLedger
from fundme.logging import get_logger
from fundme.oracle.converter import PriceConverter
from fundme.oracle.mock_feed import MockPriceFeed
from fundme.units import to_fixed

logger = get_logger(__name__)


@dataclass
class Deployment:
    """Everything a running ledger needs, kept together for the API and tests."""

    feed: MockPriceFeed
    converter: PriceConverter
    assets: AssetTransfer
    ledger: FundingLedger


def deploy(settings: AppSettings, assets: AssetTransfer | None = None) -> Deployment:
    """Deploy a ledger against a mock feed.

    Args:
        settings: Application settings (oracle, ledger, chain sections).
        assets: Existing transfer backend. When omitted a fresh
            InMemoryAssetBank is created and the deployer is credited
            with the genesis balance.

    Returns:
        The wired Deployment.
    """
    feed = MockPriceFeed(
        decimals=settings.oracle.decimals,
        initial_answer=to_fixed(settings.oracle.initial_price, settings.oracle.decimals),
    )
    converter = PriceConverter(feed, feed_decimals=settings.oracle.decimals)

    if assets is None:
        bank = InMemoryAssetBank()
        bank.credit(settings.chain.deployer, to_fixed(settings.chain.genesis_balance))
        assets = bank

    ledger = FundingLedger(
        address=settings.ledger.address,
        owner=settings.chain.deployer,
        converter=converter,
        assets=assets,
        minimum_usd=to_fixed(settings.ledger.minimum_usd),
    )

    logger.info(
        "ledger_deployed",
        ledger=ledger.address,
        owner=ledger.owner,
        minimum_usd=str(settings.ledger.minimum_usd),
        initial_price=str(settings.oracle.initial_price),
        feed_decimals=settings.oracle.decimals,
    )
    return Deployment(feed=feed, converter=converter, assets=assets, ledger=ledger)
