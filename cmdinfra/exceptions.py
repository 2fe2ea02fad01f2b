"""
Unified exception hierarchy for the cmdinfra framework.

This module provides a consistent exception hierarchy for all framework errors,
making it easier to catch and handle framework-specific exceptions.
"""

from typing import Any


class CmdInfraError(Exception):
    """
    Base exception for all cmdinfra framework errors.

    All framework-specific exceptions inherit from this base class,
    allowing users to catch all framework errors with a single except clause.

    Example:
        try:
            cli.add("greet").action(handler)
        except CmdInfraError as e:
            lg.error(f"Framework error: {e}")
    """

    def __init__(self, message: str, **context: Any) -> None:
        """
        Initialize the exception with a message and optional context.

        Args:
            message: Human-readable error message
            **context: Additional context information (stored in self.context)
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigError(CmdInfraError):
    """
    Configuration-related errors.

    Examples:
        - Config file cannot be read or parsed
        - Merged configuration does not satisfy the schema
    """

    pass


class ValidationError(CmdInfraError):
    """
    Schema validation errors.

    Carries the list of field errors produced by the validator so callers
    can render a path and a message for every failure.
    """

    def __init__(
        self, message: str, errors: list[Any] | None = None, **context: Any
    ) -> None:
        super().__init__(message, **context)
        self.errors = list(errors or [])


class PluginError(CmdInfraError):
    """
    Plugin-related errors.

    Examples:
        - Manifest missing or malformed
        - Entry module cannot be imported
        - Entry does not provide an initialize capability
    """

    pass


class CommandError(CmdInfraError):
    """
    Command dispatch and execution errors.

    Examples:
        - Command not found
        - Handler raised an exception
    """

    pass


class BuilderError(CmdInfraError):
    """
    Command definition errors.

    Raised at definition time when the CLI's own code builds an
    incomplete command. These are programming errors and are not recovered.
    """

    pass
