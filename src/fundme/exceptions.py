"""Custom exceptions for the funding ledger.

Every failure of a ledger operation is raised as a LedgerError subclass.
A raised error means the operation had no effect on ledger state.
"""


class LedgerError(Exception):
    """Base exception for all ledger errors."""


class InsufficientValue(LedgerError):
    """Raised when a deposit's USD value is below the ledger minimum."""


class NotOwner(LedgerError):
    """Raised when a non-owner attempts an owner-only operation."""


class TransferFailed(LedgerError):
    """Raised when the asset-transfer primitive reports a failed transfer."""


class InvalidPriceReading(LedgerError):
    """Raised when the oracle returns a negative price."""


class NotPayable(LedgerError):
    """Raised when value is attached to an operation that does not accept it."""


class InvalidCall(LedgerError):
    """Raised when a raw call's arguments are missing or malformed."""


class FunderIndexOutOfRange(LedgerError, IndexError):
    """Raised when a funder-list lookup is past the end of the list."""
