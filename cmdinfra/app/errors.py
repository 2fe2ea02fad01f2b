"""
Concrete error kinds raised by the command pipeline.

Each class maps to one recovery policy of the execution engine: config
errors fall back to defaults, plugin errors skip the plugin, command and
validation errors become log lines, and builder errors abort definition.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..exceptions import (
    BuilderError,
    CommandError,
    ConfigError,
    PluginError,
    ValidationError,
)


@dataclass(frozen=True)
class FieldError:
    """A single schema violation: where it happened and what is wrong."""

    path: tuple[str | int, ...]
    message: str

    @property
    def dotted(self) -> str:
        """Path rendered as ``a.b.0``; empty for root-level errors."""
        return ".".join(str(p) for p in self.path)

    def __str__(self) -> str:
        return f"{self.dotted}: {self.message}" if self.path else self.message


class ConfigLoadError(ConfigError):
    """Raised when a config file cannot be read or parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"failed to load config from {path}: {reason}", path=path)
        self.path = path
        self.reason = reason

    def __str__(self) -> str:
        return self.message


class ConfigValidationError(ConfigError, ValidationError):
    """Raised when configuration (or its defaults) violate the schema."""

    def __init__(self, message: str, errors: list[FieldError] | None = None) -> None:
        ValidationError.__init__(self, message, errors)


class PluginLoadError(PluginError):
    """Raised when a single plugin cannot be loaded."""

    def __init__(self, plugin_dir: str, reason: str) -> None:
        super().__init__(f"error loading plugin from {plugin_dir}: {reason}")
        self.plugin_dir = plugin_dir
        self.reason = reason


class UnknownCommandError(CommandError):
    """Raised when a command path resolves to no definition."""

    def __init__(self, command: str) -> None:
        super().__init__(f"unknown command: {command}")
        self.command = command


class InputValidationError(ValidationError):
    """Raised when parsed options do not satisfy a command's input schema."""

    def __init__(self, command: str, errors: list[FieldError]) -> None:
        super().__init__(f"invalid arguments for '{command}'", errors)
        self.command = command


class OutputValidationError(ValidationError):
    """Raised when a handler's result does not satisfy its output schema."""

    def __init__(self, command: str, errors: list[FieldError]) -> None:
        super().__init__(f"invalid output from '{command}'", errors)
        self.command = command


class HandlerExecutionError(CommandError):
    """Raised when a command handler (or its middleware) fails."""

    def __init__(self, command: str, cause: BaseException) -> None:
        super().__init__(f"error executing command: {cause}", command=command)
        self.command = command
        self.cause = cause


class BuilderConfigurationError(BuilderError):
    """Raised when a command is finalized without a name or input schema."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(f"Configuration error: {message}", **context)
