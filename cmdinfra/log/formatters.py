"""
Log formatters for the logging system.

This module renders records as short console lines: an optional timestamp,
a colored level prefix, the message, and any structured extra fields.
"""

import collections
import logging
from typing import Any

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants

EXTRA_ATTR = "__cmdinfra__extra"


def _level_prefix(levelno: int) -> str:
    """Lower-case display name for a level, e.g. ``warn`` or ``success``."""
    if levelno in LogConstants.PREFIX_NAMES:
        return LogConstants.PREFIX_NAMES[levelno]
    return logging.getLevelName(levelno).lower()


def _format_value(value: Any) -> str:
    """Format an extra field value."""
    if isinstance(value, BaseException):
        return value.__class__.__name__
    if isinstance(value, (list, tuple)):
        return ",".join(map(str, value))
    return str(value)


def format_extra(extra: Any, color: str | None = None) -> str:
    """
    Render extra fields as ``[key:value]`` groups.

    Args:
        extra: Mapping of extra fields (may be None)
        color: Optional color escape sequence for the brackets

    Returns:
        Rendered fields with a leading space, or an empty string
    """
    if not extra:
        return ""

    keys = extra.keys()
    if not isinstance(extra, collections.OrderedDict):
        keys = sorted(keys)

    parts = []
    for key in keys:
        field = f"[{key}:{_format_value(extra[key])}]"
        parts.append(ColorManager.colorize(field, color) if color else field)
    return " " + " ".join(parts)


class LogFormatter(logging.Formatter):
    """
    Console log formatter with colored level prefixes and structured fields.

    Output looks like ``info: loaded config [path:etc/app.yaml]`` and, with
    timestamps enabled, ``[12:34:56,789] info: ...``.
    """

    def __init__(self, config: LogConfig):
        """
        Initialize the log formatter.

        Args:
            config: Logger configuration
        """
        super().__init__()
        self._config = config

    @property
    def config(self) -> LogConfig:
        return self._config

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record.

        Args:
            record: Log record to format

        Returns:
            Formatted log line
        """
        prefix = _level_prefix(record.levelno) + ":"
        extra = getattr(record, EXTRA_ATTR, None)

        if self._config.colors:
            color = (
                ColorManager.get_color_for_level(record.levelno) or ColorManager.DEFAULT
            )
            prefix = ColorManager.colorize(prefix, color, bold=True)
            fields = format_extra(extra, ColorManager.create_gray_level(9))
        else:
            fields = format_extra(extra)

        line = f"{prefix} {record.getMessage()}{fields}"
        if self._config.timestamps:
            line = f"[{self.formatTime(record)}] {line}"

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
