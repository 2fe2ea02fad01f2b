"""
Logging fixtures for testing.

Provides fixtures for loggers writing to an in-memory stream.
"""

import logging
from collections.abc import Generator
from io import StringIO

import pytest

from cmdinfra.log import LogConfig, Logger, LoggerFactory


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """
    Reset Python logging global state before and after each test.

    Resets: root handlers, root level, and logger class.
    """
    original_class = logging.getLoggerClass()
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    yield

    logging.setLoggerClass(original_class)
    logging.root.handlers = original_handlers
    logging.root.setLevel(original_level)


@pytest.fixture
def log_stream() -> StringIO:
    """
    Provide a stream capturing log output.

    Returns:
        StringIO: Stream the test logger writes to
    """
    return StringIO()


@pytest.fixture
def sample_log_config() -> LogConfig:
    """
    Provide a debug-level LogConfig without colors.

    Returns:
        LogConfig: Sample log configuration
    """
    return LogConfig.from_params(level="debug", colors=False)


@pytest.fixture
def test_logger(sample_log_config: LogConfig, log_stream: StringIO) -> Logger:
    """
    Provide a root logger writing plain text to log_stream.

    Returns:
        Logger: Test logger instance
    """
    return LoggerFactory.create_root(sample_log_config, stream=log_stream)
