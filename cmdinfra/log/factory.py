"""
Factory for creating and configuring loggers.

Root loggers own a console handler; derived loggers are lightweight views
that share the root's handlers and only add a name segment.
"""

import collections
import logging
import sys
from typing import IO, Any

from .config import LogConfig
from .formatters import LogFormatter
from .logger import Logger


class LoggerFactory:
    """Factory for creating and configuring loggers."""

    @staticmethod
    def create_root(
        config: LogConfig,
        logger_class: type[Logger] = Logger,
        stream: IO[str] | None = None,
    ) -> Logger:
        """
        Create a root logger with the specified configuration.

        Args:
            config: Logger configuration
            logger_class: Logger class to use
            stream: Output stream (default: sys.stdout at creation time)

        Returns:
            Configured root logger

        Example:
            >>> config = LogConfig.from_params(level="info", colors=False)
            >>> lg = LoggerFactory.create_root(config)
            >>> lg.success("done")
            success: done
        """
        return LoggerFactory.create("/", config, logger_class, stream=stream)

    @staticmethod
    def _setup_console_handler(
        config: LogConfig, stream: IO[str] | None
    ) -> logging.Handler:
        """Set up and return a console handler with formatter."""
        handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
        if config.level is not False:
            handler.setLevel(config.level)
        handler.setFormatter(LogFormatter(config))
        return handler

    @staticmethod
    def create(
        name: str,
        config: LogConfig,
        logger_class: type[Logger] = Logger,
        extra: dict[str, Any] | collections.OrderedDict | None = None,
        stream: IO[str] | None = None,
    ) -> Logger:
        """
        Create a logger with its own console handler.

        Loggers are not registered with the logging manager: every call
        returns a new, independent logger.

        Args:
            name: Logger name
            config: Logger configuration
            logger_class: Logger class to use
            extra: Pre-populated extra fields to include in all log records
            stream: Output stream (default: sys.stdout at creation time)

        Returns:
            Configured logger instance
        """
        lg = logger_class(name, config, extra)
        lg.addHandler(LoggerFactory._setup_console_handler(config, stream))
        lg.propagate = False
        lg.parent = logging.root
        lg.trace(
            "created logger",
            extra={"level": logging.getLevelName(config.level)},
        )
        return lg

    @staticmethod
    def derive(parent: Logger, tags: str | list[str]) -> Logger:
        """
        Derive a "view" logger that delegates to root's handlers.

        Examples:
            >>> root = LoggerFactory.create_root(config)  # name: "/"
            >>> LoggerFactory.derive(root, ["user", "create"]).name
            '/user/create'

        Args:
            parent: Parent logger instance
            tags: Single tag string OR list of tag strings to form hierarchy

        Returns:
            Derived logger with the parent's level and extra fields
        """
        if isinstance(tags, str):
            tags = [tags]

        prefix = parent.name if parent.name.endswith("/") else parent.name + "/"
        name = prefix + "/".join(tags)

        root = parent._root_logger if parent._root_logger else parent
        lg = parent.__class__(name, parent.config, parent.extra)
        lg.setLevel(logging.NOTSET)
        lg._root_logger = root
        lg.parent = parent
        lg.propagate = False

        lg.trace("derived logger", extra={"root": root.name})
        return lg
