"""Process-wide Siteline client used by the framework middleware.

The client is created lazily on the first request that needs it. Later calls
return the same instance (or ``None`` if initialization failed) without
re-reading configuration. Tests call :func:`reset_client` to start over.
"""

from __future__ import annotations

import os
import threading
from typing import Optional

from ..client import Siteline
from ..constants import (
    DEFAULT_INTEGRATION_TYPE,
    DEFAULT_SDK_NAME,
    DEFAULT_SDK_VERSION,
    ENV_DEBUG,
    ENV_ENDPOINT,
    ENV_WEBSITE_KEY,
)
from ..diagnostics import Diagnostics
from ..errors import ConfigurationError

_client: Optional[Siteline] = None
_initialized = False
_lock = threading.Lock()


def get_client(
    website_key: str | None = None,
    endpoint: str | None = None,
    debug: bool | None = None,
    sdk: str = DEFAULT_SDK_NAME,
    sdk_version: str = DEFAULT_SDK_VERSION,
    integration_type: str = DEFAULT_INTEGRATION_TYPE,
) -> Optional[Siteline]:
    """
    Return the shared client, creating it on first use.

    Explicit arguments take precedence over the ``SITELINE_WEBSITE_KEY``,
    ``SITELINE_ENDPOINT`` and ``SITELINE_DEBUG`` environment variables.

    Returns:
        The shared Siteline client, or None when tracking is disabled because
        the website key is missing or the configuration is invalid.
    """
    global _client, _initialized
    with _lock:
        if _initialized:
            return _client
        _initialized = True

        website_key = website_key or os.environ.get(ENV_WEBSITE_KEY)
        if not website_key:
            Diagnostics.warning("Missing websiteKey in config or environment")
            return None
        if endpoint is None:
            endpoint = os.environ.get(ENV_ENDPOINT) or None
        if debug is None:
            debug = os.environ.get(ENV_DEBUG) == "true"

        try:
            _client = Siteline(
                website_key=website_key,
                endpoint=endpoint,
                debug=debug,
                sdk=sdk,
                sdk_version=sdk_version,
                integration_type=integration_type,
            )
        except ConfigurationError as e:
            Diagnostics.warning("Failed to initialize: %s", e)
        return _client


def reset_client() -> None:
    """Forget the shared client so the next request initializes a new one."""
    global _client, _initialized
    with _lock:
        _client = None
        _initialized = False
