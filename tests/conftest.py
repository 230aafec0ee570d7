"""Shared test fixtures for the funding ledger."""

import pytest

from fundme.assets import InMemoryAssetBank
from fundme.config import AppSettings, ChainSettings, LedgerSettings, OracleSettings
from fundme.ledger import FundingLedger
from fundme.oracle.converter import PriceConverter
from fundme.oracle.mock_feed import MockPriceFeed
from fundme.units import WEI_PER_ETH

OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ALICE = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
BOB = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
LEDGER_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

# 2000 USD per ETH with the feed's 8 decimals
INITIAL_ANSWER = 2000 * 10**8


@pytest.fixture
def mock_settings() -> AppSettings:
    """Return AppSettings with test defaults (2000 USD/ETH, 5 USD minimum)."""
    return AppSettings(
        log_level="DEBUG",
        oracle=OracleSettings(decimals=8),
        ledger=LedgerSettings(address=LEDGER_ADDRESS),
        chain=ChainSettings(deployer=OWNER),
    )


@pytest.fixture
def feed() -> MockPriceFeed:
    return MockPriceFeed(decimals=8, initial_answer=INITIAL_ANSWER)


@pytest.fixture
def converter(feed: MockPriceFeed) -> PriceConverter:
    return PriceConverter(feed, feed_decimals=8)


@pytest.fixture
def bank() -> InMemoryAssetBank:
    """Bank where the owner, Alice and Bob each hold 100 ETH."""
    bank = InMemoryAssetBank()
    for account in (OWNER, ALICE, BOB):
        bank.credit(account, 100 * WEI_PER_ETH)
    return bank


@pytest.fixture
def ledger(converter: PriceConverter, bank: InMemoryAssetBank) -> FundingLedger:
    return FundingLedger(
        address=LEDGER_ADDRESS,
        owner=OWNER,
        converter=converter,
        assets=bank,
    )


@pytest.fixture
def owner() -> str:
    return OWNER


@pytest.fixture
def alice() -> str:
    return ALICE


@pytest.fixture
def bob() -> str:
    return BOB
