"""FastAPI/Starlette middleware for Siteline pageview tracking.

Works with FastAPI, Starlette, and any framework built on Starlette.
"""

import time
from typing import Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..client import Siteline
from ..types import PageviewData
from ._extract import extract_client_ip
from ._shared import get_client


_DEFAULT_EXCLUDE_PATHS: set[str] = {
    "/healthz",
    "/readyz",
    "/health",
    "/_health",
}


class SitelineMiddleware(BaseHTTPMiddleware):
    """
    ASGI middleware that tracks every request as a Siteline pageview.

    Usage:
        from fastapi import FastAPI
        from siteline.middleware.fastapi import SitelineMiddleware

        app = FastAPI()
        app.add_middleware(SitelineMiddleware, website_key="siteline_secret_...")

    Without ``website_key`` or ``client`` the shared client is configured from
    the ``SITELINE_*`` environment variables.
    """

    def __init__(
        self,
        app,
        client: Optional[Siteline] = None,
        website_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        debug: Optional[bool] = None,
        exclude_paths: Optional[set[str]] = None,
    ):
        super().__init__(app)
        self.client = client
        self.website_key = website_key
        self.endpoint = endpoint
        self.debug = debug
        self.exclude_paths = exclude_paths if exclude_paths is not None else _DEFAULT_EXCLUDE_PATHS

    def get_client(self) -> Optional[Siteline]:
        if self.client is not None:
            return self.client
        return get_client(
            website_key=self.website_key,
            endpoint=self.endpoint,
            debug=self.debug,
            integration_type="fastapi",
        )

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        start_time = time.perf_counter()

        # Exceptions from the app propagate untracked
        response = await call_next(request)

        duration = (time.perf_counter() - start_time) * 1000  # ms

        client = self.get_client()
        if client is None:
            return response

        ip = extract_client_ip(request.headers)
        if ip is None and request.client:
            ip = request.client.host

        client.track(
            PageviewData(
                url=str(request.url),
                method=request.method,
                status=response.status_code,
                duration=duration,
                user_agent=request.headers.get("user-agent"),
                ref=request.headers.get("referer"),
                ip=ip,
            )
        )
        return response
