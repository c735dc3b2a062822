"""Exceptions raised by the Siteline SDK."""


class SitelineError(Exception):
    """Base class for all Siteline SDK errors."""


class ConfigurationError(SitelineError, ValueError):
    """Raised when a client is constructed with invalid configuration.

    Only ever raised synchronously from the client constructor.
    """


class TransportError(SitelineError):
    """A single pageview could not be delivered.

    Covers network failures, timeouts and payload serialization problems.
    Never propagated out of ``Siteline.track``.
    """
