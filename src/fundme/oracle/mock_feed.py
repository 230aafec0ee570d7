"""In-memory price feed for local deployments and tests.

Behaves like Chainlink's MockV3Aggregator: every update_answer() opens a
new round stamped with the current time, and update_round_data() lets a
caller write an arbitrary round (e.g., to replay history).
"""

import asyncio
import time

from fundme.logging import get_logger
from fundme.models import PriceReading
from fundme.oracle.feed import PriceFeed

logger = get_logger(__name__)


class MockPriceFeed(PriceFeed):
    """Settable price feed keeping a full round history.

    Args:
        decimals: Implicit decimals of every answer (8 for ETH / USD).
        initial_answer: Answer for round 1, already scaled by decimals.
    """

    VERSION = 0

    def __init__(self, decimals: int, initial_answer: int) -> None:
        self._decimals = decimals
        self._latest_round = 0
        self._answers: dict[int, int] = {}
        self._timestamps: dict[int, int] = {}
        self._started_at: dict[int, int] = {}
        self._lock = asyncio.Lock()
        self._write_round(1, initial_answer, int(time.time()), int(time.time()))

    def _write_round(
        self, round_id: int, answer: int, timestamp: int, started_at: int
    ) -> None:
        self._latest_round = round_id
        self._answers[round_id] = answer
        self._timestamps[round_id] = timestamp
        self._started_at[round_id] = started_at

    def _reading(self, round_id: int) -> PriceReading:
        return PriceReading(
            round_id=round_id,
            answer=self._answers[round_id],
            started_at=self._started_at[round_id],
            updated_at=self._timestamps[round_id],
            answered_in_round=round_id,
        )

    @property
    def latest_round(self) -> int:
        return self._latest_round

    @property
    def latest_answer(self) -> int:
        return self._answers[self._latest_round]

    @property
    def latest_timestamp(self) -> int:
        return self._timestamps[self._latest_round]

    async def update_answer(self, answer: int) -> PriceReading:
        """Open a new round with the given answer (scaled by decimals).

        Returns:
            The newly written round.
        """
        async with self._lock:
            now = int(time.time())
            self._write_round(self._latest_round + 1, answer, now, now)
            logger.info(
                "price_feed_answer_updated",
                round_id=self._latest_round,
                answer=answer,
            )
            return self._reading(self._latest_round)

    async def update_round_data(
        self, round_id: int, answer: int, timestamp: int, started_at: int
    ) -> None:
        """Write a specific round and make it the latest."""
        async with self._lock:
            self._write_round(round_id, answer, timestamp, started_at)
            logger.info(
                "price_feed_round_written",
                round_id=round_id,
                answer=answer,
            )

    async def latest_round_data(self) -> PriceReading:
        async with self._lock:
            return self._reading(self._latest_round)

    async def get_round_data(self, round_id: int) -> PriceReading:
        async with self._lock:
            if round_id not in self._answers:
                raise LookupError(f"No data present for round {round_id}")
            return self._reading(round_id)

    async def decimals(self) -> int:
        return self._decimals

    async def description(self) -> str:
        return "v0.8/tests/MockV3Aggregator.sol"

    async def version(self) -> int:
        return self.VERSION
