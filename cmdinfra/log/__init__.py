"""
Console logging for command-line tools.

This module extends Python's standard logging with:
- Custom TRACE and SUCCESS log levels
- Colored level prefixes (``info:``, ``warn:``, ``error:``, ``success:``)
- Structured logging with extra fields rendered as ``[key:value]``
- Derived view loggers sharing the root's handlers
- Complete logging disable functionality (level=False or level="false")
"""

import logging

from .colors import ColorManager
from .config import LogConfig
from .constants import LogConstants
from .exceptions import InvalidLogLevelError, LogError
from .factory import LoggerFactory
from .formatters import LogFormatter
from .logger import Logger, LoggerProtocol

# Define custom log levels
logging.addLevelName(LogConstants.CUSTOM_LEVELS["TRACE"], "TRACE")
logging.addLevelName(LogConstants.CUSTOM_LEVELS["SUCCESS"], "SUCCESS")

LogConstants.LEVEL_NAMES.update(
    {
        "trace": LogConstants.CUSTOM_LEVELS["TRACE"],
        "success": LogConstants.CUSTOM_LEVELS["SUCCESS"],
    }
)

ColorManager.add_custom_level_colors()


def resolve_level(s: str | int | bool) -> int | bool:
    """
    Resolve log level from string, numeric value, or boolean.

    Args:
        s: Log level as string name, numeric value, or False to disable logging

    Returns:
        Numeric log level or False to disable logging

    Raises:
        InvalidLogLevelError: If the log level is invalid
    """
    if isinstance(s, bool):
        return s

    if str(s).isnumeric():
        return int(s)

    if isinstance(s, str) and s.lower() in LogConstants.LEVEL_NAMES:
        return LogConstants.LEVEL_NAMES[s.lower()]

    raise InvalidLogLevelError(s)


def create_root_lg(level: str | int | bool = "info", colors: bool = True) -> Logger:
    """
    Create a root logger with the specified configuration.

    Example:
        >>> lg = create_root_lg("debug", colors=False)
    """
    return LoggerFactory.create_root(LogConfig.from_params(level, colors=colors))


__all__ = [
    "ColorManager",
    "InvalidLogLevelError",
    "LogConfig",
    "LogConstants",
    "LogError",
    "LogFormatter",
    "Logger",
    "LoggerFactory",
    "LoggerProtocol",
    "create_root_lg",
    "resolve_level",
]
