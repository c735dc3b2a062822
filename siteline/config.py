"""Construction-time configuration for the Siteline client."""

from __future__ import annotations

import re

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError

from .constants import (
    DEFAULT_ENDPOINT,
    DEFAULT_INTEGRATION_TYPE,
    DEFAULT_SDK_NAME,
    DEFAULT_SDK_VERSION,
    WEBSITE_KEY_PATTERN,
)
from .errors import ConfigurationError

_WEBSITE_KEY_RE = re.compile(WEBSITE_KEY_PATTERN)


class SitelineConfig(BaseModel):
    """Immutable client configuration.

    Build instances through :func:`validate_config`; the model itself does not
    re-check the website key or endpoint.
    """

    model_config = ConfigDict(frozen=True)

    website_key: str
    endpoint: str = DEFAULT_ENDPOINT
    debug: bool = False
    sdk: str = DEFAULT_SDK_NAME
    sdk_version: str = DEFAULT_SDK_VERSION
    integration_type: str = DEFAULT_INTEGRATION_TYPE

    @property
    def user_agent(self) -> str:
        return f"{self.sdk}/{self.sdk_version}"


def is_valid_website_key(website_key: object) -> bool:
    return isinstance(website_key, str) and _WEBSITE_KEY_RE.fullmatch(website_key) is not None


def is_https_url(endpoint: object) -> bool:
    if not isinstance(endpoint, str):
        return False
    try:
        url = httpx.URL(endpoint)
    except (httpx.InvalidURL, TypeError, ValueError):
        return False
    return url.scheme == "https" and bool(url.host)


def validate_config(
    website_key: str,
    endpoint: str | None = None,
    debug: bool = False,
    sdk: str = DEFAULT_SDK_NAME,
    sdk_version: str = DEFAULT_SDK_VERSION,
    integration_type: str = DEFAULT_INTEGRATION_TYPE,
) -> SitelineConfig:
    """
    Validate client options and freeze them into a :class:`SitelineConfig`.

    Args:
        website_key: Site credential, ``siteline_secret_`` + 32 lowercase hex chars
        endpoint: Intake URL override; must use HTTPS (default: built-in endpoint)
        debug: Enable diagnostic logging
        sdk: SDK name reported with every pageview
        sdk_version: SDK version reported with every pageview
        integration_type: Integration identifier reported with every pageview

    Raises:
        ConfigurationError: If the website key or endpoint is invalid.
    """
    if not is_valid_website_key(website_key):
        raise ConfigurationError("Invalid websiteKey format")
    if endpoint is None:
        endpoint = DEFAULT_ENDPOINT
    elif not is_https_url(endpoint):
        raise ConfigurationError("Endpoint must use HTTPS")

    try:
        return SitelineConfig(
            website_key=website_key,
            endpoint=endpoint,
            debug=bool(debug),
            sdk=sdk,
            sdk_version=sdk_version,
            integration_type=integration_type,
        )
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
