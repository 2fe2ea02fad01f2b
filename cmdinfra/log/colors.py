"""
Color management for the logging system.

This module provides centralized ANSI color code management and color
selection logic for different log levels.
"""

import logging

from .constants import LogConstants


class ColorManager:
    """Centralized ANSI color code management."""

    # Basic ANSI color escape sequences
    RED = "\x1b[31"
    GREEN = "\x1b[32"
    YELLOW = "\x1b[33"
    BLUE = "\x1b[34"
    MAGENTA = "\x1b[35"
    CYAN = "\x1b[36"
    DEFAULT = "\x1b[38"

    # Reset sequence to clear formatting
    RESET = LogConstants.RESET

    # Color mapping for log levels (custom levels are added on import)
    COLORS: dict[int, str] = {
        logging.DEBUG: "\x1b[38;5;244",  # Gray for DEBUG
        logging.INFO: BLUE,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: MAGENTA,
    }

    @staticmethod
    def get_color_for_level(level: int) -> str | None:
        """
        Get appropriate color for log level.

        Args:
            level: Log level number

        Returns:
            Color escape sequence or None if not found
        """
        return ColorManager.COLORS.get(level)

    @staticmethod
    def create_gray_level(level: int) -> str:
        """
        Create gray color for trace levels.

        Args:
            level: Gray level (0-23 range, clamped)

        Returns:
            Gray color escape sequence
        """
        level = max(0, min(level, LogConstants.GRAY_MAX_LEVELS - 1))
        return f"\x1b[38;5;{LogConstants.GRAY_BASE + level}"

    @staticmethod
    def colorize(text: str, color: str, bold: bool = False) -> str:
        """Wrap text in a color escape sequence followed by a reset."""
        return f"{color}{';1' if bold else ''}m{text}{ColorManager.RESET}"

    @staticmethod
    def add_custom_level_colors() -> None:
        """Add colors for custom log levels after they are defined."""
        ColorManager.COLORS.update(
            {
                LogConstants.CUSTOM_LEVELS["TRACE"]: ColorManager.create_gray_level(7),
                LogConstants.CUSTOM_LEVELS["SUCCESS"]: ColorManager.GREEN,
            }
        )
