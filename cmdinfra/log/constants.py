"""
Constants for the logging system.

This module contains the constant values used throughout the logging system,
including format strings and custom log level definitions.
"""

import logging


class LogConstants:
    """Constants for the logging system."""

    # Custom log levels
    CUSTOM_LEVELS: dict[str, int] = {"TRACE": 5, "SUCCESS": 25}

    # Log level names for resolution (custom levels are added on import)
    LEVEL_NAMES: dict[str, int | bool] = {
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "warn": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
        "false": False,  # Special value to disable all logging
    }

    # Display names for the level prefix
    PREFIX_NAMES: dict[int, str] = {
        logging.DEBUG: "debug",
        logging.INFO: "info",
        logging.WARNING: "warn",
        logging.ERROR: "error",
        logging.CRITICAL: "critical",
    }

    # ANSI escape sequences
    RESET: str = "\x1b[0m"

    # Gray level range for trace logging
    GRAY_BASE: int = 232
    GRAY_MAX_LEVELS: int = 24
