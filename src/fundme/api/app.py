"""FastAPI application factory exposing a funding ledger over HTTP."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from fundme.api import routes
from fundme.exceptions import (
    FunderIndexOutOfRange,
    InsufficientValue,
    InvalidCall,
    InvalidPriceReading,
    LedgerError,
    NotOwner,
    NotPayable,
    TransferFailed,
)
from fundme.ledger import FundingLedger
from fundme.logging import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR: dict[type[LedgerError], int] = {
    InsufficientValue: 400,
    NotPayable: 400,
    InvalidCall: 400,
    NotOwner: 403,
    FunderIndexOutOfRange: 404,
    TransferFailed: 409,
    InvalidPriceReading: 502,
}


async def _ledger_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate a LedgerError into a JSON error body with a fitting status."""
    status = _STATUS_BY_ERROR.get(type(exc), 400)
    logger.info(
        "api_ledger_error",
        path=request.url.path,
        error=type(exc).__name__,
        status=status,
    )
    return JSONResponse(
        status_code=status,
        content={"error": type(exc).__name__, "detail": str(exc)},
    )


def create_app(ledger: FundingLedger) -> FastAPI:
    """Create the API application bound to one ledger instance.

    Args:
        ledger: The ledger every route operates on.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(title="FundMe Ledger")
    app.state.ledger = ledger
    app.add_exception_handler(LedgerError, _ledger_error_handler)
    app.include_router(routes.router)
    return app
