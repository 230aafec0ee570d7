"""JSON endpoints for ledger operations and read-only ledger state.

Integers (wei, 18-decimal USD) are returned as decimal strings so that
JSON clients without big-integer support do not lose precision.
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from fundme.ledger import FundingLedger

log = structlog.get_logger(__name__)

router = APIRouter()


class FundRequest(BaseModel):
    sender: str
    amount: int = Field(ge=0)


class WithdrawRequest(BaseModel):
    sender: str


class RawTransferRequest(BaseModel):
    """A value transfer with an optional operation selector."""

    sender: str
    amount: int = Field(default=0, ge=0)
    selector: str | None = None
    args: list[Any] = Field(default_factory=list)


def _int_to_str(obj: Any) -> Any:
    """Recursively convert ints (not bools) to strings for JSON serialization."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return _int_to_str(asdict(obj))
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, int):
        return str(obj)
    if isinstance(obj, dict):
        return {k: _int_to_str(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_int_to_str(item) for item in obj]
    return obj


def _ledger(request: Request) -> FundingLedger:
    return request.app.state.ledger


@router.post("/fund")
async def fund(body: FundRequest, request: Request) -> JSONResponse:
    receipt = await _ledger(request).fund(body.sender, body.amount)
    return JSONResponse(content=_int_to_str(receipt))


@router.post("/withdraw")
async def withdraw(body: WithdrawRequest, request: Request) -> JSONResponse:
    """Owner-only: pay out the pooled balance."""
    receipt = await _ledger(request).withdraw(body.sender)
    return JSONResponse(content=_int_to_str(receipt))


@router.post("/")
async def raw_transfer(body: RawTransferRequest, request: Request) -> JSONResponse:
    """Receive/fallback entry point: no or unknown selector deposits the value."""
    log.debug(
        "raw_transfer_received",
        sender=body.sender,
        amount=body.amount,
        selector=body.selector,
    )
    result = await _ledger(request).dispatch(
        body.sender, body.amount, body.selector, body.args
    )
    return JSONResponse(content={"result": _int_to_str(result)})


@router.get("/version")
async def get_version(request: Request) -> JSONResponse:
    version = await _ledger(request).get_version()
    return JSONResponse(content={"version": str(version)})


@router.get("/owner")
async def get_owner(request: Request) -> JSONResponse:
    return JSONResponse(content={"owner": _ledger(request).owner})


@router.get("/minimum-usd")
async def get_minimum_usd(request: Request) -> JSONResponse:
    return JSONResponse(content={"minimum_usd": str(_ledger(request).minimum_usd)})


@router.get("/funders")
async def get_funder_count(request: Request) -> JSONResponse:
    return JSONResponse(content={"count": str(_ledger(request).funder_count)})


@router.get("/funders/{index}")
async def get_funder(index: int, request: Request) -> JSONResponse:
    funder = _ledger(request).get_funder(index)
    return JSONResponse(content={"index": str(index), "funder": funder})


@router.get("/balances/{address}")
async def get_amount_funded(address: str, request: Request) -> JSONResponse:
    amount = _ledger(request).get_address_to_amount_funded(address)
    return JSONResponse(content={"address": address, "amount": str(amount)})


@router.get("/pooled-balance")
async def get_pooled_balance(request: Request) -> JSONResponse:
    balance = await _ledger(request).pooled_balance()
    return JSONResponse(content={"balance": str(balance)})
