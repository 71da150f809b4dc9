"""Logging helper for zone_climate.

Wraps Python's standard logger. Without an entry_id, log messages have no
prefix. With an entry_id, messages are prefixed with ``[xxxxx]`` (the last
five characters of the entry ID) to identify the integration instance.
"""

from __future__ import annotations

import logging
from typing import Any

# Logger name shared by all instances (matches the package path)
_LOGGER_NAME = "custom_components.zone_climate"


#
# Log
#
class Log:
    """Instance-aware logger.

    Accepts ``%s``-style arguments like the standard logger so formatting is
    deferred until a record is actually emitted.
    """

    #
    # __init__
    #
    def __init__(self, entry_id: str | None = None) -> None:
        """Initialize the logger.

        Args:
            entry_id: Config entry ID used for the message prefix (optional).
        """

        self._logger = logging.getLogger(_LOGGER_NAME)
        self._prefix = f"[{entry_id[-5:]}] " if entry_id else ""

    #
    # underlying_logger
    #
    @property
    def underlying_logger(self) -> logging.Logger:
        """Return the wrapped ``logging.Logger`` (for HA helpers that need one)."""

        return self._logger

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(self._prefix + msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(self._prefix + msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(self._prefix + msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(self._prefix + msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._logger.exception(self._prefix + msg, *args, **kwargs)
