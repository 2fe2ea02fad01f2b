"""
Logger class for the logging system.

Extends the standard Python logger with the custom TRACE and SUCCESS levels
and pre-populated structured extra fields.
"""

import collections
import logging
from typing import Any, Protocol, runtime_checkable

from .config import LogConfig
from .constants import LogConstants
from .formatters import EXTRA_ATTR


@runtime_checkable
class LoggerProtocol(Protocol):
    """The logging capability handed to command handlers and middleware."""

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def success(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


class Logger(logging.Logger):
    """
    Enhanced logger with custom levels and extra field handling.

    Extends the standard Python logger with:
    - success() for positive completion messages
    - trace() for very verbose debugging
    - warn() kept as an alias of warning()
    - Pre-populated extra fields merged into every record
    - Derived "view" loggers that share the root's handlers
    """

    def __init__(
        self,
        name: str,
        config: LogConfig | None = None,
        extra: dict[str, Any] | collections.OrderedDict | None = None,
    ):
        """
        Initialize the enhanced logger.

        Args:
            name: Logger name
            config: Logger configuration (default: info level)
            extra: Pre-populated extra fields to include in all log records
        """
        if config is None:
            config = LogConfig.from_params("info")

        if config.level is False:
            super().__init__(name, logging.CRITICAL + 1)
            self._logging_disabled = True
        else:
            super().__init__(name, config.level)
            self._logging_disabled = False

        self._config = config
        self._extra = extra or {}
        self._root_logger: Logger | None = None  # Set for derived "view" loggers

    @property
    def config(self) -> LogConfig:
        """Get logger configuration."""
        return self._config

    @property
    def extra(self) -> dict[str, Any]:
        """Pre-populated extra fields."""
        return dict(self._extra)

    def get_level(self) -> int | bool:
        """Get configured log level."""
        return self._config.level

    def setLevel(self, level: int | str) -> None:
        """Set level and clear this logger's cache.

        Loggers built by the factory are not registered in the manager's
        loggerDict, so the manager never clears their cache for us.
        """
        super().setLevel(level)
        self._cache.clear()  # type: ignore[attr-defined]

    def _merge_extra(self, extra: Any) -> dict[str, Any] | collections.OrderedDict:
        """Merge pre-populated extra fields with per-call extra fields."""
        merged: dict[str, Any] | collections.OrderedDict
        if isinstance(self._extra, collections.OrderedDict) or isinstance(
            extra, collections.OrderedDict
        ):
            merged = collections.OrderedDict(self._extra)
        else:
            merged = self._extra.copy()
        if extra:
            merged.update(extra)
        return merged

    def makeRecord(  # type: ignore[override]
        self,
        name: str,
        level: int,
        fn: str,
        lno: int,
        msg: object,
        args: Any,
        exc_info: Any,
        func: str | None = None,
        extra: Any = None,
        sinfo: str | None = None,
    ) -> logging.LogRecord:
        """Create log record, attaching merged extra fields for the formatter."""
        merged_extra = self._merge_extra(extra)
        record = super().makeRecord(
            name, level, fn, lno, msg, args, exc_info, func=func, sinfo=sinfo
        )
        setattr(record, EXTRA_ATTR, merged_extra)
        return record

    def _log(self, level: int, msg: Any, args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        if self._logging_disabled:
            return
        super()._log(level, msg, args, **kwargs)

    def success(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log a SUCCESS level message.

        Args:
            msg: Log message
            *args: Message format arguments
            **kwargs: Additional keyword arguments including 'extra' for structured data
        """
        level = LogConstants.CUSTOM_LEVELS["SUCCESS"]
        if self.isEnabledFor(level):
            self._log(level, msg, args, **kwargs)

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log a TRACE level message (most verbose level).

        Args:
            msg: Log message
            *args: Message format arguments
            **kwargs: Additional keyword arguments including 'extra' for structured data
        """
        level = LogConstants.CUSTOM_LEVELS["TRACE"]
        if self.isEnabledFor(level):
            self._log(level, msg, args, **kwargs)

    def warn(self, msg: str, *args: Any, **kwargs: Any) -> None:  # type: ignore[override]
        """Alias of warning()."""
        self.warning(msg, *args, **kwargs)

    def callHandlers(self, record: logging.LogRecord) -> None:
        """
        Pass a record to all relevant handlers.

        Derived "view" loggers delegate to the root logger's handlers so
        handlers added to the root apply everywhere.
        """
        if self._root_logger is not None:
            for handler in self._root_logger.handlers:
                if record.levelno >= handler.level:
                    handler.handle(record)
        else:
            super().callHandlers(record)
