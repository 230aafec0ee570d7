"""Entry point for a local funding ledger.

Loads settings, configures logging, deploys the ledger against a mock
price feed and in-memory asset bank, and serves the HTTP API with
uvicorn. With the API disabled it deploys, logs the ledger state and
exits, which is useful for checking configuration.
"""

import asyncio

import uvicorn

from fundme.api.app import create_app
from fundme.config import AppSettings
from fundme.deploy import deploy
from fundme.logging import get_logger, setup_logging
from fundme.units import from_fixed


async def run() -> None:
    """Deploy the ledger and serve it until interrupted."""
    settings = AppSettings()

    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("fundme.main")

    deployment = deploy(settings)
    ledger = deployment.ledger

    if not settings.api.enabled:
        price = await deployment.converter.get_price()
        logger.info(
            "ledger_ready_without_api",
            ledger=ledger.address,
            owner=ledger.owner,
            eth_usd=str(from_fixed(price)),
            feed_version=await ledger.get_version(),
        )
        return

    app = create_app(ledger)

    logger.info(
        "starting_api",
        host=settings.api.host,
        port=settings.api.port,
        ledger=ledger.address,
    )

    config = uvicorn.Config(
        app,
        host=settings.api.host,
        port=settings.api.port,
        log_level="warning",  # Suppress uvicorn access logs
    )
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    """Synchronous entry point."""
    asyncio.run(run())


if __name__ == "__main__":
    main()
