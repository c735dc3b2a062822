"""Main Siteline client class."""

from __future__ import annotations

import asyncio
import concurrent.futures
import threading
from typing import Any, Mapping, Optional, Union

import httpx

from .config import SitelineConfig, validate_config
from .constants import (
    DEFAULT_INTEGRATION_TYPE,
    DEFAULT_SDK_NAME,
    DEFAULT_SDK_VERSION,
    TIMEOUT_MS,
)
from .diagnostics import Diagnostics
from .sanitize import sanitize
from .transport import PageviewTransport, get_background_loop
from .types import PageviewData, PageviewPayload


class Siteline:
    """
    Siteline pageview tracking client.

    Usage:
        siteline = Siteline(website_key="siteline_secret_...")

        # From a request handler, sync or async; never raises, never blocks
        siteline.track({
            "url": "https://example.com/pricing",
            "method": "GET",
            "status": 200,
            "duration": 42,
            "userAgent": request_user_agent,
            "ref": None,
            "ip": client_ip,
        })

        # On shutdown, optionally wait for in-flight sends
        await siteline.flush()
    """

    def __init__(
        self,
        website_key: str,
        endpoint: str | None = None,
        debug: bool = False,
        sdk: str = DEFAULT_SDK_NAME,
        sdk_version: str = DEFAULT_SDK_VERSION,
        integration_type: str = DEFAULT_INTEGRATION_TYPE,
        timeout: float = TIMEOUT_MS / 1000,
        http_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the Siteline client.

        Args:
            website_key: Your Siteline website key (``siteline_secret_`` + 32 hex chars)
            endpoint: Custom intake endpoint; must be HTTPS (default: Siteline intake)
            debug: Log initialization and every send outcome (default: False)
            sdk: SDK name sent with every pageview
            sdk_version: SDK version sent with every pageview
            integration_type: Integration identifier sent with every pageview
            timeout: Seconds before an in-flight send is cancelled (default: 5.0)
            http_transport: Custom httpx transport for outgoing requests

        Raises:
            ConfigurationError: If the website key or endpoint is invalid.
        """
        config = validate_config(
            website_key=website_key,
            endpoint=endpoint,
            debug=debug,
            sdk=sdk,
            sdk_version=sdk_version,
            integration_type=integration_type,
        )
        self.config = config
        self.diagnostics = Diagnostics(config.debug)
        self.transport = PageviewTransport(
            config, timeout=timeout, http_transport=http_transport
        )
        self._pending: set = set()
        self._pending_lock = threading.Lock()

        self.diagnostics.info("Siteline initialized")

    @classmethod
    def from_config(cls, config: SitelineConfig, **kwargs: Any) -> "Siteline":
        """Build a client from an existing config (validated again)."""
        return cls(
            website_key=config.website_key,
            endpoint=config.endpoint,
            debug=config.debug,
            sdk=config.sdk,
            sdk_version=config.sdk_version,
            integration_type=config.integration_type,
            **kwargs,
        )

    @property
    def debug(self) -> bool:
        return self.config.debug

    def track(self, data: Union[PageviewData, Mapping[str, Any]]) -> None:
        """
        Record a pageview. Returns immediately; the send runs in the background.

        Never raises. Failures are only visible through debug logging.

        Args:
            data: A PageviewData, or a mapping with the same fields
        """
        try:
            if not isinstance(data, PageviewData):
                data = PageviewData.model_validate(data)
            self._dispatch(sanitize(data, self.config))
        except Exception as e:
            self.diagnostics.error("Track failed: %s", e)

    def _dispatch(self, payload: PageviewPayload) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            future = asyncio.run_coroutine_threadsafe(
                self._send(payload), get_background_loop()
            )
        else:
            future = loop.create_task(self._send(payload))

        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future) -> None:
        with self._pending_lock:
            self._pending.discard(future)

    async def _send(self, payload: PageviewPayload) -> None:
        try:
            await self.transport.send(payload)
        except Exception as e:
            self.diagnostics.error("Track failed: %s", e)

    def _snapshot(self) -> list:
        with self._pending_lock:
            return list(self._pending)

    @property
    def pending(self) -> int:
        """Number of sends still in flight."""
        with self._pending_lock:
            return len(self._pending)

    async def flush(self) -> None:
        """Wait for in-flight sends started on this loop or the background loop."""
        loop = asyncio.get_running_loop()
        waiters = []
        for future in self._snapshot():
            if isinstance(future, concurrent.futures.Future):
                waiters.append(asyncio.wrap_future(future))
            elif future.get_loop() is loop:
                waiters.append(future)
        if waiters:
            await asyncio.gather(*waiters, return_exceptions=True)

    async def aclose(self) -> None:
        """Wait for in-flight sends, then close this loop's HTTP client."""
        await self.flush()
        await self.transport.aclose()

    def wait(self, timeout: float | None = None) -> bool:
        """
        Block until sends started outside of asyncio have finished.

        Args:
            timeout: Maximum seconds to wait (default: no limit)

        Returns:
            True if nothing is left in flight, False if the timeout expired.
        """
        futures = [
            f for f in self._snapshot() if isinstance(f, concurrent.futures.Future)
        ]
        if not futures:
            return True
        _, not_done = concurrent.futures.wait(futures, timeout=timeout)
        return not not_done
