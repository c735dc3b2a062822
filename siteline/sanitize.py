"""Field sanitization for outgoing pageviews.

Every function here is pure and total: oversized or out-of-range input is
truncated or clamped, never rejected, so a malformed field can never stop a
pageview from being sent.
"""

from __future__ import annotations

import math
from typing import Optional, Union

from .config import SitelineConfig
from .constants import (
    DURATION_MAX,
    DURATION_MIN,
    INTEGRATION_TYPE_MAX_LENGTH,
    IP_MAX_LENGTH,
    METHOD_MAX_LENGTH,
    REF_MAX_LENGTH,
    SDK_MAX_LENGTH,
    SDK_VERSION_MAX_LENGTH,
    STATUS_MAX,
    STATUS_MIN,
    URL_MAX_LENGTH,
    USER_AGENT_MAX_LENGTH,
)
from .types import PageviewData, PageviewPayload

Number = Union[int, float]


def truncate(value: str, limit: int) -> str:
    return value[:limit]


def truncate_optional(value: Optional[str], limit: int) -> Optional[str]:
    if value is None:
        return None
    return value[:limit]


def clamp(value: Number, low: Number, high: Number) -> Number:
    """Clamp ``value`` into ``[low, high]``. NaN maps to ``low``."""
    if isinstance(value, float) and math.isnan(value):
        return low
    return max(low, min(high, value))


def sanitize_method(method: str) -> str:
    return truncate(method.upper(), METHOD_MAX_LENGTH)


def sanitize_status(status: Number) -> int:
    return int(clamp(status, STATUS_MIN, STATUS_MAX))


def sanitize_duration(duration: Number) -> Number:
    return clamp(duration, DURATION_MIN, DURATION_MAX)


def sanitize(data: PageviewData, config: SitelineConfig) -> PageviewPayload:
    """
    Map a raw pageview onto a bounded payload.

    Args:
        data: Pageview as observed by the caller
        config: Client configuration supplying the SDK identity fields

    Returns:
        A PageviewPayload whose strings and numbers all fit the intake limits.
    """
    return PageviewPayload(
        url=truncate(data.url, URL_MAX_LENGTH),
        method=sanitize_method(data.method),
        status=sanitize_status(data.status),
        duration=sanitize_duration(data.duration),
        user_agent=truncate_optional(data.user_agent, USER_AGENT_MAX_LENGTH),
        ref=truncate_optional(data.ref, REF_MAX_LENGTH),
        ip=truncate_optional(data.ip, IP_MAX_LENGTH),
        sdk=truncate(config.sdk, SDK_MAX_LENGTH),
        sdk_version=truncate(config.sdk_version, SDK_VERSION_MAX_LENGTH),
        integration_type=truncate(config.integration_type, INTEGRATION_TYPE_MAX_LENGTH),
    )
