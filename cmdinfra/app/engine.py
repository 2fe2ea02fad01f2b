"""
Command execution engine.

The engine runs one command per invocation:

    CREATED -> INITIALIZING -> DISPATCHING -> DONE

Initializing resolves configuration and loads plugins. Dispatching
tokenizes the arguments, answers help and version, resolves the command,
validates its input, runs the middleware-wrapped handler and checks the
output. Every runtime failure is logged and reported in the RunResult;
nothing is raised to the caller.
"""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..log import Logger, LoggerFactory
from .constants import NAME_SEPARATOR
from .errors import (
    FieldError,
    HandlerExecutionError,
    InputValidationError,
    OutputValidationError,
    UnknownCommandError,
)
from .help import HelpRenderer
from .middleware import Context
from .plugin import PluginManager
from .registry import AliasTable
from .tokenizer import ArgumentTokenizer, ParsedArgs
from .validation import SchemaValidator

if TYPE_CHECKING:
    from .builder import CliBuilder
    from .definition import CommandDefinition


class RunState(Enum):
    """Lifecycle state of an engine."""

    CREATED = "created"
    INITIALIZING = "initializing"
    DISPATCHING = "dispatching"
    DONE = "done"


class Outcome(Enum):
    """How a run ended."""

    SUCCESS = "success"
    HELP = "help"
    VERSION = "version"
    UNKNOWN_COMMAND = "unknown_command"
    VALIDATION_FAILED = "validation_failed"
    EXECUTION_FAILED = "execution_failed"


@dataclass
class RunResult:
    """Result of a single run."""

    outcome: Outcome
    command: str | None = None
    value: Any = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True unless the run failed."""
        return self.outcome in (Outcome.SUCCESS, Outcome.HELP, Outcome.VERSION)


class Engine:
    """Runs a CLI built with CliBuilder."""

    def __init__(
        self,
        cli: CliBuilder,
        plugins_dir: str | Path | None = None,
        out: Any = None,
        validator: SchemaValidator | None = None,
    ) -> None:
        """
        Initialize the engine.

        The alias table is built here from the commands registered so far
        and rebuilt once after plugins are loaded.

        Args:
            cli: CLI whose commands and settings to use
            plugins_dir: Directory of plugins to load while initializing
            out: Stream for help and version output (default: sys.stdout)
            validator: Schema validator
        """
        self.cli = cli
        self.lg = cli.lg
        self.plugins_dir = plugins_dir
        self.plugins = PluginManager(self.lg)
        self.validator = validator or SchemaValidator()
        self.state = RunState.CREATED
        self.config: Any = {}
        self._out = out
        self.aliases = AliasTable.from_registry(cli.registry)
        self.help = HelpRenderer(cli.name, cli.registry, cli.description)

    @property
    def out(self) -> Any:
        return self._out if self._out is not None else sys.stdout

    def _print(self, text: str) -> None:
        print(text, file=self.out)

    def initialize(self, overrides: Mapping[str, Any] | None = None) -> None:
        """Resolve configuration and load plugins."""
        self.state = RunState.INITIALIZING

        resolver = self.cli.config_resolver()
        self.config = resolver.resolve(overrides) if resolver else dict(overrides or {})

        if self.plugins_dir is not None:
            self.plugins.load_directory(self.plugins_dir, self.cli)
            self.aliases = AliasTable.from_registry(self.cli.registry)

    def run(
        self,
        argv: Sequence[str] | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> RunResult:
        """
        Run one command.

        Args:
            argv: Full argument vector; the first two entries are skipped
                (default: sys.argv with the interpreter prepended)
            overrides: Configuration overrides (highest precedence)

        Returns:
            RunResult describing the outcome
        """
        if argv is None:
            argv = [sys.executable, *sys.argv]

        try:
            self.initialize(overrides)
            self.state = RunState.DISPATCHING
            return self.dispatch(argv)
        except Exception as e:
            self.lg.error(f"unexpected error: {e}")
            return RunResult(Outcome.EXECUTION_FAILED)
        finally:
            self.state = RunState.DONE

    def dispatch(self, argv: Sequence[str]) -> RunResult:
        """Tokenize ``argv`` and run the selected command."""
        parsed = ArgumentTokenizer(self.aliases).tokenize(argv)
        self.lg.debug(
            "dispatching", extra={"command": parsed.command or "-", "options": parsed.options}
        )

        if parsed.is_help:
            return self._show_help(parsed)

        if parsed.is_version:
            self._print(f"v{self.cli.version}")
            return RunResult(Outcome.VERSION, parsed.command)

        definition = self.cli.registry.resolve(parsed.command, self.aliases)
        if definition is None:
            self.lg.error(str(UnknownCommandError(parsed.display)))
            self._print(self.help.render_general())
            return RunResult(Outcome.UNKNOWN_COMMAND, parsed.command)

        return self.execute(definition, parsed.options)

    def _show_help(self, parsed: ParsedArgs) -> RunResult:
        target = parsed.help_target
        if target is None:
            self._print(self.help.render_general())
            return RunResult(Outcome.HELP)

        definition = self.cli.registry.resolve(target, self.aliases)
        if definition is None:
            self.lg.error(str(UnknownCommandError(ParsedArgs(target).display)))
            self._print(self.help.render_general())
            return RunResult(Outcome.HELP, target)

        self._print(self.help.render_command(definition))
        return RunResult(Outcome.HELP, definition.name)

    def _context_logger(self, definition: CommandDefinition) -> Any:
        if isinstance(self.lg, Logger):
            return LoggerFactory.derive(self.lg, definition.name.split(NAME_SEPARATOR))
        return self.lg

    def execute(
        self, definition: CommandDefinition, options: Mapping[str, Any]
    ) -> RunResult:
        """
        Validate options and invoke a command's handler.

        Args:
            definition: Command to run
            options: Raw options from the tokenizer

        Returns:
            RunResult with the handler's value on success
        """
        result = self.validator.validate(definition.input_schema, dict(options))
        if not result.is_valid:
            err = InputValidationError(definition.name, result.errors)
            self.lg.error("invalid command arguments:")
            for field_error in err.errors:
                self.lg.error(f"- {field_error}")
            self.lg.info("Run with --help for usage information.")
            return RunResult(Outcome.VALIDATION_FAILED, definition.name, errors=err.errors)

        context = Context(logger=self._context_logger(definition), command=definition.name)
        try:
            value = definition.handler(
                parsed_input=result.value, context=context, config=self.config
            )
        except Exception as e:
            err = HandlerExecutionError(definition.name, e)
            self.lg.error(str(err), exc_info=self.cli.debug)
            return RunResult(Outcome.EXECUTION_FAILED, definition.name)

        if definition.output_schema is not None and value is not None:
            self._check_output(definition, value)

        return RunResult(Outcome.SUCCESS, definition.name, value=value)

    def _check_output(self, definition: CommandDefinition, value: Any) -> None:
        """Validate a handler's result; failures are only logged."""
        data = value.model_dump() if hasattr(value, "model_dump") else value
        result = self.validator.validate(definition.output_schema, data)
        if result.is_valid:
            return
        err = OutputValidationError(definition.name, result.errors)
        self.lg.warning(err.message)
        for field_error in err.errors:
            self.lg.warning(f"- {field_error}")


__all__ = ["Engine", "Outcome", "RunResult", "RunState"]
