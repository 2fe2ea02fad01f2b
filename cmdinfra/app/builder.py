"""
Fluent API for defining commands and assembling a CLI.

CommandBuilder collects a command's schemas, middleware, aliases, examples
and metadata and registers an immutable CommandDefinition once a handler is
attached. CliBuilder is the top-level surface handed to application code
and plugins.

Example:
    cli = create_cli(name="tool", version="1.2.0")

    (
        cli.add("greet", "Greet someone")
        .input(GreetInput)
        .output(GreetOutput)
        .examples({"name": "World", "uppercase": True})
        .action(greet)
    )

    cli.run()
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any

from ..config.loaders import ConfigLoader, ConfigLoaderRegistry
from ..config.resolver import ConfigOptions, ConfigResolver
from ..log import LogConfig, LoggerFactory
from .constants import DEFAULT_GROUP, HELP_COMMAND, HELP_GROUP, VERSION_COMMAND
from .definition import CommandDefinition, join_name, parent_of, to_internal
from .errors import BuilderConfigurationError
from .middleware import Middleware, MiddlewareChain, as_middleware
from .registry import CommandRegistry

if TYPE_CHECKING:
    from .engine import Engine, RunResult


class CommandBuilder:
    """
    Builder for a single command.

    ``input()``, ``output()`` and ``use()`` return a new builder and leave
    the current one untouched, so two chains continued from the same
    intermediate builder never affect each other. ``describe()``,
    ``meta()``, ``examples()`` and ``aliases()`` modify the current builder
    in place and return it.
    """

    def __init__(
        self,
        name: str | None = None,
        registry: CommandRegistry | None = None,
        description: str = "",
        parent: str | None = None,
        middleware: Sequence[Middleware] = (),
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        """
        Initialize the command builder.

        Args:
            name: Internal command name
            registry: Registry the finished command is entered into
            description: One-line description shown in help
            parent: Internal name of the parent command
            middleware: Middleware inherited from the CLI or parent command
            metadata: Initial metadata (``group`` included)
        """
        self._name = name
        self._registry = registry
        self._description = description
        self._parent = parent
        self._middleware: list[Middleware] = list(middleware)
        self._metadata: dict[str, Any] = dict(metadata or {})
        self._aliases: list[str] = []
        self._examples: list[Any] = []
        self._input_schema: Any = None
        self._output_schema: Any = None

    @property
    def name(self) -> str | None:
        return self._name

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """Middleware accumulated so far, outermost first."""
        return tuple(self._middleware)

    def _fork(self) -> CommandBuilder:
        """Copy this builder, duplicating its mutable containers."""
        clone = copy.copy(self)
        clone._middleware = list(self._middleware)
        clone._metadata = dict(self._metadata)
        clone._aliases = list(self._aliases)
        clone._examples = list(self._examples)
        return clone

    def input(self, schema: Any) -> CommandBuilder:
        """Return a new builder with the given input schema."""
        clone = self._fork()
        clone._input_schema = schema
        return clone

    def output(self, schema: Any) -> CommandBuilder:
        """Return a new builder with the given output schema."""
        clone = self._fork()
        clone._output_schema = schema
        return clone

    def use(self, middleware: Middleware | Callable[..., Any]) -> CommandBuilder:
        """Return a new builder with ``middleware`` appended."""
        clone = self._fork()
        clone._middleware.append(as_middleware(middleware))
        return clone

    def describe(self, description: str) -> CommandBuilder:
        """Set the description."""
        self._description = description
        return self

    def meta(self, metadata: Mapping[str, Any] | None = None, **fields: Any) -> CommandBuilder:
        """Merge entries into the command metadata."""
        self._metadata.update(metadata or {})
        self._metadata.update(fields)
        return self

    def examples(self, *examples: Any) -> CommandBuilder:
        """
        Set the example inputs shown in command help.

        Replaces any earlier examples. Accepts the examples as separate
        arguments or as a single list or tuple.
        """
        if len(examples) == 1 and isinstance(examples[0], (list, tuple)):
            examples = tuple(examples[0])
        self._examples = list(examples)
        return self

    def aliases(self, *aliases: str) -> CommandBuilder:
        """Add aliases, scoped to this command's parent."""
        self._aliases.extend(aliases)
        return self

    def sub(self, name: str | Mapping[str, Any], description: str = "") -> CommandBuilder:
        """
        Create a builder for a subcommand.

        The subcommand is named ``<this>:<name>``, starts with this
        builder's middleware, and is placed in the ``default`` group unless
        the mapping form names another one.

        Args:
            name: Subcommand segment, or a mapping with ``command`` (or
                ``name``) and optionally ``description``, ``group`` and
                ``aliases``; other keys become metadata
            description: Description (ignored with the mapping form)

        Raises:
            BuilderConfigurationError: If this builder or the subcommand
                has no name
        """
        if not self._name:
            raise BuilderConfigurationError("cannot add a subcommand to an unnamed command")

        options = dict(name) if isinstance(name, Mapping) else {"command": name}
        legacy = options.pop("name", None)
        segment = options.pop("command", None) or legacy
        if not segment:
            raise BuilderConfigurationError("subcommand name is required", parent=self._name)

        child = CommandBuilder(
            name=join_name(self._name, segment),
            registry=self._registry,
            description=options.pop("description", description),
            parent=self._name,
            middleware=self._middleware,
            metadata={"group": options.pop("group", DEFAULT_GROUP)},
        )
        aliases = options.pop("aliases", ())
        child.aliases(*([aliases] if isinstance(aliases, str) else aliases))
        child.meta(options)
        return child

    def action(self, handler: Callable[..., Any]) -> CommandDefinition:
        """
        Finish the command with its handler.

        The handler is called with keyword arguments ``parsed_input``,
        ``context`` and ``config`` after the command's middleware ran.

        Args:
            handler: Command implementation

        Returns:
            The registered, immutable command definition

        Raises:
            BuilderConfigurationError: If the name or input schema is missing
        """
        if not self._name:
            raise BuilderConfigurationError("command name is required")
        if self._input_schema is None:
            raise BuilderConfigurationError(
                "input schema is required", command=self._name
            )

        definition = CommandDefinition(
            name=self._name,
            input_schema=self._input_schema,
            handler=MiddlewareChain(self._middleware, handler, self._metadata),
            description=self._description,
            output_schema=self._output_schema,
            metadata=self._metadata,
            aliases=tuple(self._aliases),
            examples=tuple(self._examples),
            parent=self._parent,
            middleware=tuple(self._middleware),
            callback=handler,
        )
        if self._registry is not None:
            self._registry.register(definition)
        return definition

    def __repr__(self) -> str:
        return f"<CommandBuilder {self._name}>"


def _builtin_handler(**kwargs: Any) -> None:
    """Placeholder for commands the engine answers itself."""
    return None


class CliBuilder:
    """
    Top-level CLI surface.

    Holds the command registry, global middleware, config loaders and the
    configuration options. Plugins receive this object in ``initialize``.
    """

    def __init__(
        self,
        name: str = "cli",
        version: str = "1.0.0",
        description: str = "",
        logger: Any = None,
        debug: bool = False,
    ) -> None:
        """
        Initialize the CLI builder.

        Args:
            name: Program name shown in help
            version: Version printed by ``--version``
            description: Description shown in general help
            logger: Logger to use (default: a console logger)
            debug: Log at debug level when creating the default logger
        """
        self.name = name
        self.version = version
        self.description = description
        self.debug = debug
        self.lg = logger or LoggerFactory.create_root(
            LogConfig.from_params("debug" if debug else "info")
        )
        self._registry = CommandRegistry()
        self._middleware: list[Middleware] = []
        self._loaders = ConfigLoaderRegistry()
        self._config_options: ConfigOptions | None = None
        self._register_builtins()

    def _register_builtins(self) -> None:
        self._registry.register(
            CommandDefinition(
                name=HELP_COMMAND,
                input_schema=dict[str, Any],
                handler=_builtin_handler,
                description="Show help",
                metadata={"group": HELP_GROUP},
            )
        )
        self._registry.register(
            CommandDefinition(
                name=VERSION_COMMAND,
                input_schema=dict[str, Any],
                handler=_builtin_handler,
                description="Show version",
                metadata={"group": HELP_GROUP},
            )
        )

    @property
    def registry(self) -> CommandRegistry:
        return self._registry

    @property
    def loaders(self) -> ConfigLoaderRegistry:
        return self._loaders

    @property
    def middleware(self) -> tuple[Middleware, ...]:
        """Global middleware, outermost first."""
        return tuple(self._middleware)

    def configure(
        self,
        schema: Any = None,
        config_files: Sequence[str | Path] = (),
        env_prefix: str = "",
        defaults: Mapping[str, Any] | None = None,
    ) -> CliBuilder:
        """
        Configure layered configuration for every run.

        Args:
            schema: Schema the merged configuration must satisfy
            config_files: Candidate files; the first existing, loadable one wins
            env_prefix: Environment variable prefix; empty disables env loading
            defaults: Default values (lowest precedence)
        """
        self._config_options = ConfigOptions(
            schema=schema,
            defaults=dict(defaults or {}),
            env_prefix=env_prefix,
            config_files=tuple(config_files),
        )
        return self

    def config_resolver(self) -> ConfigResolver | None:
        """Resolver for the configured options, or None when unconfigured."""
        if self._config_options is None:
            return None
        return ConfigResolver(self._config_options, loaders=self._loaders, logger=self.lg)

    def add(
        self,
        command: str,
        description: str = "",
        group: str = DEFAULT_GROUP,
        **metadata: Any,
    ) -> CommandBuilder:
        """
        Start defining a command.

        Global middleware registered so far is applied; middleware added
        with ``use()`` afterwards does not affect this command.

        Args:
            command: Command name, internal (``user:create``) or display
                (``user create``) form
            description: One-line description shown in help
            group: Help group
            **metadata: Additional metadata entries
        """
        name = to_internal(command)
        if not name:
            raise BuilderConfigurationError("command name is required")
        return CommandBuilder(
            name=name,
            registry=self._registry,
            description=description,
            parent=parent_of(name),
            middleware=self._middleware,
            metadata={"group": group, **metadata},
        )

    def use(self, middleware: Middleware | Callable[..., Any]) -> CliBuilder:
        """Register global middleware for commands added after this call."""
        self._middleware.append(as_middleware(middleware))
        return self

    def register_command(self, definition: CommandDefinition) -> CliBuilder:
        """Register a prebuilt command definition."""
        self._registry.register(definition)
        return self

    def register_loader(self, loader: ConfigLoader) -> CliBuilder:
        """Register a custom config loader, consulted after the built-ins."""
        self._loaders.register(loader)
        return self

    def build_engine(self, plugins_dir: str | Path | None = None, out: Any = None) -> Engine:
        """Create an execution engine over the current command set."""
        from .engine import Engine

        return Engine(self, plugins_dir=plugins_dir, out=out)

    def run(
        self,
        argv: Sequence[str] | None = None,
        plugins_dir: str | Path | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> RunResult:
        """
        Run the CLI once.

        Args:
            argv: Full argument vector (default: sys.argv with the
                interpreter prepended)
            plugins_dir: Directory of plugins to load before dispatch
            overrides: Configuration overrides (highest precedence)

        Returns:
            The outcome of the run; failures are logged, never raised
        """
        return self.build_engine(plugins_dir).run(argv, overrides)

    def __repr__(self) -> str:
        return f"<CliBuilder {self.name} v{self.version}>"


def create_cli(
    name: str = "cli",
    version: str = "1.0.0",
    description: str = "",
    debug: bool = False,
    logger: Any = None,
) -> CliBuilder:
    """
    Create a CLI builder.

    Example:
        >>> cli = create_cli("tool", "0.3.0", "Developer tooling")
    """
    return CliBuilder(
        name=name, version=version, description=description, logger=logger, debug=debug
    )


__all__ = ["CliBuilder", "CommandBuilder", "create_cli"]
