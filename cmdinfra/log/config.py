"""
Configuration for the logging system.

Loggers are configured from an immutable LogConfig so that the formatter
and every derived logger read the same settings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class LogConfig:
    """
    Immutable configuration for root loggers.

    Derived loggers share their root's handlers, so only the root's
    configuration controls colors and timestamps.
    """

    level: int | bool = logging.INFO  # int for normal levels, False to disable logging
    colors: bool = True
    timestamps: bool = False

    @staticmethod
    def _resolve_level(level: str | int | bool) -> int | bool:
        """Resolve level parameter to int or False."""
        from .constants import LogConstants
        from .exceptions import InvalidLogLevelError

        if isinstance(level, bool):
            return False if not level else logging.INFO
        elif isinstance(level, str):
            if level.isnumeric():
                return int(level)
            elif level.lower() in LogConstants.LEVEL_NAMES:
                return LogConstants.LEVEL_NAMES[level.lower()]
            else:
                raise InvalidLogLevelError(level)
        return level

    @classmethod
    def from_params(
        cls,
        level: str | int | bool,
        colors: bool = True,
        timestamps: bool = False,
    ) -> LogConfig:
        """
        Create LogConfig from individual parameters.

        Args:
            level: Log level (string name, numeric value, or False to disable logging)
            colors: Whether to enable colored output
            timestamps: Whether to prefix messages with a timestamp

        Returns:
            LogConfig instance
        """
        return cls(
            level=cls._resolve_level(level), colors=colors, timestamps=timestamps
        )
