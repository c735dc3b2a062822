"""Middleware integrations for the Siteline SDK."""

from ._shared import get_client, reset_client
from .flask import SitelineWSGIMiddleware

__all__ = ["SitelineWSGIMiddleware", "get_client", "reset_client"]

# Optional: FastAPI/Starlette middleware (requires siteline-sdk[fastapi])
try:
    from .fastapi import SitelineMiddleware
    __all__.append("SitelineMiddleware")
except ImportError:
    pass
