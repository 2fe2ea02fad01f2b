from importlib.metadata import PackageNotFoundError, version

# app must be imported before config: config's loaders import app.errors
from .app import (
    AliasTable,
    ArgumentTokenizer,
    CliBuilder,
    CommandBuilder,
    CommandDefinition,
    CommandRegistry,
    Context,
    Engine,
    FieldError,
    LoggingMiddleware,
    Middleware,
    MiddlewareBuilder,
    Outcome,
    Plugin,
    PluginManager,
    RunResult,
    SchemaValidator,
    create_cli,
    create_middleware_builder,
    to_display,
    to_internal,
)
from .config import ConfigLoader, ConfigResolver, deep_merge, env_to_dict
from .exceptions import (
    BuilderError,
    CmdInfraError,
    CommandError,
    ConfigError,
    PluginError,
    ValidationError,
)
from .log import Logger, LoggerFactory, LogConfig, create_root_lg

# Version is read from package metadata (pyproject.toml)
try:
    __version__ = version("cmdinfra")
except PackageNotFoundError:
    # Package not installed, use fallback (development mode)
    __version__ = "0.1.0-dev"

# Explicit public API
__all__ = [
    # Version
    "__version__",
    # Building and running
    "CliBuilder",
    "CommandBuilder",
    "CommandDefinition",
    "Engine",
    "Outcome",
    "RunResult",
    "create_cli",
    # Dispatch
    "AliasTable",
    "ArgumentTokenizer",
    "CommandRegistry",
    "to_display",
    "to_internal",
    # Middleware
    "Context",
    "LoggingMiddleware",
    "Middleware",
    "MiddlewareBuilder",
    "create_middleware_builder",
    # Plugins
    "Plugin",
    "PluginManager",
    # Validation and config
    "ConfigLoader",
    "ConfigResolver",
    "FieldError",
    "SchemaValidator",
    "deep_merge",
    "env_to_dict",
    # Logging
    "LogConfig",
    "Logger",
    "LoggerFactory",
    "create_root_lg",
    # Exceptions
    "BuilderError",
    "CmdInfraError",
    "CommandError",
    "ConfigError",
    "PluginError",
    "ValidationError",
]
