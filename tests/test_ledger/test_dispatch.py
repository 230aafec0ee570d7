"""Tests for raw-transfer routing (receive / fallback / selectors)."""

import pytest

from fundme.exceptions import (
    FunderIndexOutOfRange,
    InsufficientValue,
    InvalidCall,
    NotOwner,
    NotPayable,
)
from fundme.ledger import FundingLedger
from fundme.models import DepositReceipt, WithdrawalReceipt


@pytest.mark.asyncio
async def test_receive_deposits(ledger: FundingLedger, alice: str) -> None:
    receipt = await ledger.receive(alice, 10**17)

    assert isinstance(receipt, DepositReceipt)
    assert ledger.get_address_to_amount_funded(alice) == 10**17


@pytest.mark.asyncio
async def test_fallback_deposits(ledger: FundingLedger, alice: str) -> None:
    await ledger.fallback(alice, 10**17, "0xdeadbeef")

    assert ledger.get_address_to_amount_funded(alice) == 10**17
    assert ledger.get_funder(0) == alice


@pytest.mark.asyncio
async def test_no_selector_routes_to_fund(ledger: FundingLedger, alice: str) -> None:
    await ledger.dispatch(alice, 10**17)

    assert ledger.get_address_to_amount_funded(alice) == 10**17


@pytest.mark.asyncio
async def test_unknown_selector_routes_to_fund(ledger: FundingLedger, alice: str) -> None:
    await ledger.dispatch(alice, 10**17, "notAFunction")

    assert ledger.get_address_to_amount_funded(alice) == 10**17


@pytest.mark.asyncio
async def test_minimum_enforced_on_every_entry_path(
    ledger: FundingLedger, alice: str
) -> None:
    with pytest.raises(InsufficientValue):
        await ledger.receive(alice, 1)
    with pytest.raises(InsufficientValue):
        await ledger.fallback(alice, 1, "0x1234")
    with pytest.raises(InsufficientValue):
        await ledger.dispatch(alice, 1, "fund")

    assert ledger.funder_count == 0


@pytest.mark.asyncio
async def test_withdraw_selector(ledger: FundingLedger, owner: str, alice: str) -> None:
    await ledger.dispatch(alice, 10**17, "fund")

    receipt = await ledger.dispatch(owner, 0, "withdraw")

    assert isinstance(receipt, WithdrawalReceipt)
    assert receipt.amount == 10**17


@pytest.mark.asyncio
async def test_withdraw_selector_checks_owner(ledger: FundingLedger, alice: str) -> None:
    with pytest.raises(NotOwner):
        await ledger.dispatch(alice, 0, "withdraw")


@pytest.mark.asyncio
async def test_value_on_non_payable_selector(ledger: FundingLedger, owner: str) -> None:
    with pytest.raises(NotPayable):
        await ledger.dispatch(owner, 1, "withdraw")
    with pytest.raises(NotPayable):
        await ledger.dispatch(owner, 1, "getVersion")


@pytest.mark.asyncio
async def test_read_selectors(ledger: FundingLedger, owner: str, alice: str) -> None:
    await ledger.fund(alice, 10**17)

    assert await ledger.dispatch(alice, 0, "getVersion") == 0
    assert await ledger.dispatch(alice, 0, "getOwner") == owner
    assert await ledger.dispatch(alice, 0, "getFunder", [0]) == alice
    assert await ledger.dispatch(alice, 0, "getAddressToAmountFunded", [alice]) == 10**17
    assert await ledger.dispatch(alice, 0, "MINIMUM_USD") == 5 * 10**18


class TestGetterArguments:
    @pytest.mark.asyncio
    async def test_get_funder_missing_index(self, ledger: FundingLedger, alice: str) -> None:
        with pytest.raises(InvalidCall):
            await ledger.dispatch(alice, 0, "getFunder")

    @pytest.mark.asyncio
    async def test_get_funder_non_integer_index(
        self, ledger: FundingLedger, alice: str
    ) -> None:
        with pytest.raises(InvalidCall):
            await ledger.dispatch(alice, 0, "getFunder", ["first"])

    @pytest.mark.asyncio
    async def test_get_funder_out_of_range(self, ledger: FundingLedger, alice: str) -> None:
        with pytest.raises(FunderIndexOutOfRange):
            await ledger.dispatch(alice, 0, "getFunder", [3])

    @pytest.mark.asyncio
    async def test_get_amount_funded_missing_address(
        self, ledger: FundingLedger, alice: str
    ) -> None:
        with pytest.raises(InvalidCall):
            await ledger.dispatch(alice, 0, "getAddressToAmountFunded")


@pytest.mark.parametrize("selector", ["getVersion", "getOwner", "MINIMUM_USD"])
@pytest.mark.asyncio
async def test_argument_free_selectors_return_own_value(
    ledger: FundingLedger, owner: str, selector: str
) -> None:
    expected = {"getVersion": 0, "getOwner": owner, "MINIMUM_USD": 5 * 10**18}

    assert await ledger.dispatch(owner, 0, selector) == expected[selector]
