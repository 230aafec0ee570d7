"""HTTP layer -- FastAPI routes over a single funding ledger."""

from fundme.api.app import create_app

__all__ = ["create_app"]
