"""Request metadata extraction shared across middleware adapters."""

from __future__ import annotations

from typing import Mapping

# Checked in order; the first header present wins.
IP_HEADERS = ("x-forwarded-for", "x-real-ip", "cf-connecting-ip")


def extract_client_ip(headers: Mapping[str, str]) -> str | None:
    """Resolve the client IP from proxy headers.

    ``x-forwarded-for`` may hold a chain (``client, proxy1, proxy2``); only the
    first entry is used.
    """
    lowered = {k.lower(): v for k, v in headers.items()}
    for name in IP_HEADERS:
        value = lowered.get(name)
        if not value:
            continue
        if name == "x-forwarded-for":
            value = value.split(",")[0]
        value = value.strip()
        if value:
            return value
    return None


def headers_from_environ(environ: Mapping[str, object]) -> dict[str, str]:
    """Collect HTTP request headers from a WSGI environ, lower-cased and dashed."""
    headers: dict[str, str] = {}
    for key, value in environ.items():
        if key.startswith("HTTP_") and isinstance(value, str):
            headers[key[5:].replace("_", "-").lower()] = value
    return headers
