"""WSGI middleware for Siteline pageview tracking.

Works with Flask, Django, and any WSGI-compatible framework. ``Siteline.track``
hands the send to a background event loop, so requests never wait on it.
"""

from __future__ import annotations

import time
from typing import Optional
from wsgiref.util import request_uri

from ..client import Siteline
from ..types import PageviewData
from ._extract import extract_client_ip, headers_from_environ
from ._shared import get_client


class SitelineWSGIMiddleware:
    """
    WSGI middleware that tracks every request as a Siteline pageview.

    Usage (Flask):
        from flask import Flask
        from siteline.middleware.flask import SitelineWSGIMiddleware

        app = Flask(__name__)
        app.wsgi_app = SitelineWSGIMiddleware(app.wsgi_app, website_key="siteline_secret_...")

    Usage (Django wsgi.py):
        application = SitelineWSGIMiddleware(application)
    """

    def __init__(
        self,
        app,
        client: Optional[Siteline] = None,
        website_key: str | None = None,
        endpoint: str | None = None,
        debug: bool | None = None,
        exclude_paths: set[str] | None = None,
    ):
        self.app = app
        self.client = client
        self.website_key = website_key
        self.endpoint = endpoint
        self.debug = debug
        self.exclude_paths = exclude_paths if exclude_paths is not None else set()

    def get_client(self) -> Optional[Siteline]:
        if self.client is not None:
            return self.client
        return get_client(
            website_key=self.website_key,
            endpoint=self.endpoint,
            debug=self.debug,
            integration_type="wsgi",
        )

    def __call__(self, environ, start_response):
        path = environ.get("PATH_INFO", "/")
        if path in self.exclude_paths:
            return self.app(environ, start_response)

        start_time = time.perf_counter()

        # Intercept response status
        status_code = 200

        def start_response_wrapper(status, headers, exc_info=None):
            nonlocal status_code
            status_code = int(status.split(" ", 1)[0])
            return start_response(status, headers, exc_info)

        result = self.app(environ, start_response_wrapper)
        try:
            response_chunks = list(result)
        finally:
            if hasattr(result, "close"):
                result.close()

        duration = (time.perf_counter() - start_time) * 1000  # ms

        client = self.get_client()
        if client is not None:
            headers = headers_from_environ(environ)
            client.track(
                PageviewData(
                    url=request_uri(environ),
                    method=environ.get("REQUEST_METHOD", "GET"),
                    status=status_code,
                    duration=duration,
                    user_agent=headers.get("user-agent"),
                    ref=headers.get("referer"),
                    ip=extract_client_ip(headers) or environ.get("REMOTE_ADDR"),
                )
            )

        return response_chunks
