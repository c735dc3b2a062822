"""Transport layer for sending pageviews to the Siteline intake API."""

from __future__ import annotations

import asyncio
import threading
from typing import Optional

import httpx

from .config import SitelineConfig
from .constants import TIMEOUT_MS
from .diagnostics import Diagnostics
from .errors import TransportError
from .types import PageviewPayload

_loop: Optional[asyncio.AbstractEventLoop] = None
_loop_lock = threading.Lock()


def get_background_loop() -> asyncio.AbstractEventLoop:
    """Get or create the event loop used for sends started outside of asyncio.

    The loop runs forever in a daemon thread shared by every client in the
    process, so sync callers (WSGI apps, scripts) never block on the network.
    """
    global _loop
    with _loop_lock:
        if _loop is None or _loop.is_closed():
            _loop = asyncio.new_event_loop()
            thread = threading.Thread(
                target=_loop.run_forever, name="siteline-dispatch", daemon=True
            )
            thread.start()
        return _loop


class PageviewTransport:
    """Sends one pageview per call, with a hard client-side timeout and no retry."""

    def __init__(
        self,
        config: SitelineConfig,
        timeout: float = TIMEOUT_MS / 1000,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the pageview transport.

        Args:
            config: Validated client configuration
            timeout: Seconds before an in-flight request is cancelled (default: 5.0)
            http_transport: Custom httpx transport, e.g. ``httpx.MockTransport`` in tests
        """
        self.endpoint = config.endpoint
        self.timeout = timeout
        self.headers = {
            "Content-Type": "application/json",
            "User-Agent": config.user_agent,
        }
        self.http_transport = http_transport
        self.diagnostics = Diagnostics(config.debug)

        # One long-lived client per event loop; httpx clients are loop-bound.
        self._clients: dict[asyncio.AbstractEventLoop, httpx.AsyncClient] = {}
        self._clients_lock = threading.Lock()

    def get_client(self) -> httpx.AsyncClient:
        """Return the HTTP client for the running loop, creating it on first use."""
        loop = asyncio.get_running_loop()
        with self._clients_lock:
            client = self._clients.get(loop)
            if client is None or client.is_closed:
                for stale in [l for l in self._clients if l.is_closed()]:
                    del self._clients[stale]
                client = httpx.AsyncClient(transport=self.http_transport)
                self._clients[loop] = client
            return client

    async def aclose(self) -> None:
        """Close the running loop's HTTP client. A caller-supplied transport stays open."""
        loop = asyncio.get_running_loop()
        with self._clients_lock:
            client = self._clients.pop(loop, None)
        # AsyncClient.aclose() would also close the caller's transport
        if client is not None and self.http_transport is None:
            await client.aclose()

    async def send(self, payload: PageviewPayload) -> None:
        """Send a pageview and report the outcome. Transport failures are not raised."""
        try:
            response = await self._post(payload)
        except TransportError as e:
            self.diagnostics.error("Network error: %s", e)
            return

        if response.is_success:
            self.diagnostics.info("Tracked: %s", payload.url)
        else:
            self.diagnostics.error("HTTP error: %s", response.status_code)

    async def _post(self, payload: PageviewPayload) -> httpx.Response:
        try:
            body = payload.model_dump_json(by_alias=True)
        except (TypeError, ValueError) as e:
            raise TransportError(f"Could not serialize pageview: {e}") from e

        client = self.get_client()
        try:
            # wait_for cancels the request when the timer fires
            return await asyncio.wait_for(
                client.post(self.endpoint, content=body, headers=self.headers),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Request timed out after {int(self.timeout * 1000)}ms"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__) from e
