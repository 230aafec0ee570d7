"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class OracleSettings(BaseSettings):
    """Price feed parameters for the mock aggregator deployed alongside the ledger."""

    model_config = SettingsConfigDict(env_prefix="ORACLE_")

    decimals: int = 8  # Chainlink ETH/USD feeds report 8 decimals
    initial_price: Decimal = Decimal("2000")  # USD per ETH


class LedgerSettings(BaseSettings):
    """Funding ledger parameters. Fixed for the lifetime of a deployed ledger."""

    model_config = SettingsConfigDict(env_prefix="LEDGER_")

    address: str = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
    minimum_usd: Decimal = Decimal("5")


class ChainSettings(BaseSettings):
    """In-memory asset bank parameters.

    The deployer becomes the ledger owner and is credited with
    genesis_balance ETH when the bank is created.
    """

    model_config = SettingsConfigDict(env_prefix="CHAIN_")

    deployer: str = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
    genesis_balance: Decimal = Decimal("1000")  # ETH


class ApiSettings(BaseSettings):
    """HTTP API server configuration."""

    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "127.0.0.1"
    port: int = 8545
    enabled: bool = True


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
    oracle: OracleSettings = OracleSettings()
    ledger: LedgerSettings = LedgerSettings()
    chain: ChainSettings = ChainSettings()
    api: ApiSettings = ApiSettings()
