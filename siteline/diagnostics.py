"""Debug-gated diagnostic logging."""

import logging

_log = logging.getLogger("siteline")

PREFIX = "[Siteline] "


class Diagnostics:
    """Forwards messages to the ``siteline`` logger only when debug is enabled."""

    def __init__(self, enabled: bool = False):
        self.enabled = enabled

    def info(self, msg: str, *args) -> None:
        if self.enabled:
            _log.info(PREFIX + msg, *args)

    def error(self, msg: str, *args) -> None:
        if self.enabled:
            _log.error(PREFIX + msg, *args)

    @staticmethod
    def warning(msg: str, *args) -> None:
        # Misconfiguration notices are always emitted.
        _log.warning(PREFIX + msg, *args)
