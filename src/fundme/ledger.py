"""Funding ledger: USD-gated deposits and owner-only withdrawal.

Deposit flow (fund):
1. Convert the deposited wei to USD via PriceConverter
2. Reject below the minimum USD value (InsufficientValue)
3. Pull the wei from the caller into the ledger account
4. Credit the caller and append them to the funder list

Withdrawal flow (withdraw):
1. Reject non-owners (NotOwner) before touching state
2. Stage a snapshot, zero every listed funder, clear the list
3. Pay the full pooled balance to the owner
4. On a refused payout restore the snapshot and raise TransferFailed

Every public operation holds the ledger lock for its whole duration, so
operations on one ledger run one at a time in arrival order and each
either commits fully or leaves no trace.
"""

import asyncio
from collections.abc import Sequence
from typing import Any

from fundme.assets import AssetTransfer
from fundme.exceptions import (
    FunderIndexOutOfRange,
    InsufficientValue,
    InvalidCall,
    NotOwner,
    NotPayable,
    TransferFailed,
)
from fundme.logging import get_logger, ledger_context
from fundme.models import (
    DepositReceipt,
    LedgerSnapshot,
    Operation,
    WithdrawalReceipt,
)
from fundme.oracle.converter import PriceConverter
from fundme.oracle.feed import PriceFeed
from fundme.units import WEI_PER_ETH

logger = get_logger(__name__)

# 5 USD in 18-decimal fixed point
MINIMUM_USD = 5 * WEI_PER_ETH


class FundingLedger:
    """Custody ledger accepting ETH deposits worth at least minimum_usd.

    Owns the per-funder amounts and the funder list exclusively. The
    owner is fixed at construction and is the only account allowed to
    withdraw.

    Args:
        address: Account the pooled balance is held under in the asset bank.
        owner: Account allowed to withdraw (the deployer).
        converter: Oracle adapter used to value deposits in USD.
        assets: Transfer primitive holding the pooled balance.
        minimum_usd: Minimum deposit value, USD with 18 decimals.
    """

    def __init__(
        self,
        address: str,
        owner: str,
        converter: PriceConverter,
        assets: AssetTransfer,
        minimum_usd: int = MINIMUM_USD,
    ) -> None:
        self._address = address
        self._owner = owner
        self._converter = converter
        self._assets = assets
        self._minimum_usd = minimum_usd
        self._amounts: dict[str, int] = {}
        self._funders: list[str] = []
        self._lock = asyncio.Lock()

    # -- exposed state --------------------------------------------------

    @property
    def address(self) -> str:
        return self._address

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def minimum_usd(self) -> int:
        return self._minimum_usd

    @property
    def price_feed(self) -> PriceFeed:
        return self._converter.feed

    @property
    def funder_count(self) -> int:
        return len(self._funders)

    def get_address_to_amount_funded(self, funder: str) -> int:
        """Cumulative wei funded by an address since the last withdrawal."""
        return self._amounts.get(funder, 0)

    def get_funder(self, index: int) -> str:
        """Return the funder list entry at index.

        Raises:
            FunderIndexOutOfRange: If index is negative or past the end of the list.
        """
        if not 0 <= index < len(self._funders):
            raise FunderIndexOutOfRange(
                f"Funder index {index} out of range (count={len(self._funders)})"
            )
        return self._funders[index]

    async def pooled_balance(self) -> int:
        """Wei currently held by the ledger account."""
        return await self._assets.balance_of(self._address)

    async def get_version(self) -> int:
        """Version identifier of the configured price feed."""
        return await self._converter.get_version()

    # -- operations -----------------------------------------------------

    async def fund(self, caller: str, amount: int) -> DepositReceipt:
        """Accept a deposit of amount wei from caller.

        Args:
            caller: Depositing account.
            amount: Deposit in wei.

        Returns:
            DepositReceipt with the USD value the deposit was accepted at.

        Raises:
            ValueError: If amount is negative.
            InsufficientValue: If the deposit is worth less than minimum_usd.
            InvalidPriceReading: If the oracle price is negative.
            TransferFailed: If the wei could not be pulled from caller.
        """
        async with self._lock:
            with ledger_context(self._address, "fund"):
                usd_value = await self._converter.get_conversion_rate(amount)
                if usd_value < self._minimum_usd:
                    logger.warning(
                        "fund_rejected_below_minimum",
                        funder=caller,
                        amount=amount,
                        usd_value=usd_value,
                        minimum_usd=self._minimum_usd,
                    )
                    raise InsufficientValue(
                        f"Deposit of {amount} wei is worth {usd_value} USD-wei, "
                        f"minimum is {self._minimum_usd}"
                    )

                if not await self._assets.transfer(caller, self._address, amount):
                    logger.error("fund_transfer_failed", funder=caller, amount=amount)
                    raise TransferFailed(
                        f"Could not move {amount} wei from {caller} to {self._address}"
                    )

                self._amounts[caller] = self._amounts.get(caller, 0) + amount
                self._funders.append(caller)

                logger.info(
                    "funded",
                    funder=caller,
                    amount=amount,
                    usd_value=usd_value,
                    total_funded=self._amounts[caller],
                )
                return DepositReceipt(funder=caller, amount=amount, usd_value=usd_value)

    async def withdraw(self, caller: str) -> WithdrawalReceipt:
        """Pay the entire pooled balance to the owner and reset all funders.

        Any exception or cancellation raised while paying out also restores
        the funder state before propagating.

        Raises:
            NotOwner: If caller is not the owner. No state is touched.
            TransferFailed: If the payout was refused. All resets are undone.
        """
        async with self._lock:
            with ledger_context(self._address, "withdraw"):
                if caller != self._owner:
                    logger.warning("withdraw_rejected_not_owner", caller=caller)
                    raise NotOwner(f"{caller} is not the owner of {self._address}")

                snapshot = self._snapshot()
                funders_cleared = len(self._funders)

                try:
                    for funder in self._funders:
                        self._amounts[funder] = 0
                    self._funders = []

                    amount = await self._assets.balance_of(self._address)
                    paid = await self._assets.transfer(self._address, caller, amount)
                except BaseException as exc:
                    self._restore(snapshot)
                    logger.error(
                        "withdraw_aborted",
                        owner=caller,
                        error=type(exc).__name__,
                    )
                    raise

                if not paid:
                    self._restore(snapshot)
                    logger.error(
                        "withdraw_transfer_failed",
                        owner=caller,
                        amount=amount,
                    )
                    raise TransferFailed(
                        f"Could not move {amount} wei from {self._address} to {caller}"
                    )

                logger.info(
                    "withdrawn",
                    owner=caller,
                    amount=amount,
                    funders_cleared=funders_cleared,
                )
                return WithdrawalReceipt(
                    owner=caller, amount=amount, funders_cleared=funders_cleared
                )

    # -- raw transfer entry points ----------------------------------------

    async def receive(self, sender: str, amount: int) -> DepositReceipt:
        """Plain value transfer with no selector; treated as a deposit."""
        logger.debug("receive_routed_to_fund", sender=sender, amount=amount)
        return await self.fund(sender, amount)

    async def fallback(self, sender: str, amount: int, data: str) -> DepositReceipt:
        """Transfer carrying an unrecognized selector; treated as a deposit."""
        logger.debug(
            "fallback_routed_to_fund", sender=sender, amount=amount, data=data
        )
        return await self.fund(sender, amount)

    async def dispatch(
        self,
        sender: str,
        amount: int = 0,
        selector: str | None = None,
        args: Sequence[Any] = (),
    ) -> Any:
        """Route a raw call to the matching operation.

        No selector goes to receive(); an unknown selector goes to
        fallback(). Both end up in fund(), so the minimum-value rule
        applies on every path that carries value.

        Raises:
            NotPayable: If amount > 0 for an operation other than fund.
            InvalidCall: If a getter's argument is missing or not usable.
        """
        if not selector:
            return await self.receive(sender, amount)

        try:
            operation = Operation(selector)
        except ValueError:
            return await self.fallback(sender, amount, selector)

        if operation is Operation.FUND:
            return await self.fund(sender, amount)

        if amount > 0:
            logger.warning(
                "value_sent_to_non_payable",
                sender=sender,
                amount=amount,
                selector=operation.value,
            )
            raise NotPayable(f"{operation.value} does not accept value")

        if operation is Operation.WITHDRAW:
            return await self.withdraw(sender)
        if operation is Operation.GET_VERSION:
            return await self.get_version()
        if operation is Operation.GET_OWNER:
            return self.owner
        if operation is Operation.GET_FUNDER:
            return self.get_funder(self._index_arg(operation, args))
        if operation is Operation.GET_ADDRESS_TO_AMOUNT_FUNDED:
            if len(args) != 1 or not isinstance(args[0], str):
                raise InvalidCall(f"{operation.value} expects one address argument")
            return self.get_address_to_amount_funded(args[0])
        if operation is Operation.MINIMUM_USD:
            return self.minimum_usd
        raise NotImplementedError(f"No handler for {operation.value}")

    @staticmethod
    def _index_arg(operation: Operation, args: Sequence[Any]) -> int:
        if len(args) != 1:
            raise InvalidCall(f"{operation.value} expects one index argument")
        try:
            return int(args[0])
        except (TypeError, ValueError) as exc:
            raise InvalidCall(
                f"{operation.value} index must be an integer, got {args[0]!r}"
            ) from exc

    # -- undo log ---------------------------------------------------------

    def _snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot(amounts=dict(self._amounts), funders=list(self._funders))

    def _restore(self, snapshot: LedgerSnapshot) -> None:
        self._amounts = snapshot.amounts
        self._funders = snapshot.funders
