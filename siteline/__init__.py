"""Siteline SDK: pageview tracking for Python web apps."""

from .client import Siteline
from .config import SitelineConfig
from .constants import DEFAULT_SDK_VERSION as __version__
from .errors import ConfigurationError, SitelineError, TransportError
from .types import PageviewData, PageviewPayload

__all__ = [
    "Siteline",
    "SitelineConfig",
    "PageviewData",
    "PageviewPayload",
    "SitelineError",
    "ConfigurationError",
    "TransportError",
    "__version__",
]
