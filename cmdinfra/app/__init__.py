"""
Declarative command framework.

This module provides:
- CliBuilder and CommandBuilder for fluent command definition
- CommandRegistry with scoped aliases and colon-delimited subcommands
- ArgumentTokenizer mapping argv to a command and options
- Middleware chains wrapping command handlers
- Engine running one command per invocation
- HelpRenderer and the plugin system
"""

from .builder import CliBuilder, CommandBuilder, create_cli
from .definition import CommandDefinition, join_name, parent_of, to_display, to_internal
from .engine import Engine, Outcome, RunResult, RunState
from .errors import (
    BuilderConfigurationError,
    ConfigLoadError,
    ConfigValidationError,
    FieldError,
    HandlerExecutionError,
    InputValidationError,
    OutputValidationError,
    PluginLoadError,
    UnknownCommandError,
)
from .help import HelpRenderer, format_example
from .middleware import (
    BuiltMiddleware,
    Context,
    FunctionMiddleware,
    LoggingMiddleware,
    Middleware,
    MiddlewareBuilder,
    MiddlewareChain,
    create_middleware_builder,
)
from .plugin import LoadedPlugin, Plugin, PluginManager, PluginManifest
from .registry import AliasTable, CommandRegistry
from .tokenizer import ArgumentTokenizer, ParsedArgs, parse_options, tokenize
from .validation import SchemaField, SchemaValidator, ValidationResult, schema_fields

__all__ = [
    "AliasTable",
    "ArgumentTokenizer",
    "BuilderConfigurationError",
    "BuiltMiddleware",
    "CliBuilder",
    "CommandBuilder",
    "CommandDefinition",
    "CommandRegistry",
    "ConfigLoadError",
    "ConfigValidationError",
    "Context",
    "Engine",
    "FieldError",
    "FunctionMiddleware",
    "HandlerExecutionError",
    "HelpRenderer",
    "InputValidationError",
    "LoadedPlugin",
    "LoggingMiddleware",
    "Middleware",
    "MiddlewareBuilder",
    "MiddlewareChain",
    "Outcome",
    "OutputValidationError",
    "ParsedArgs",
    "Plugin",
    "PluginLoadError",
    "PluginManager",
    "PluginManifest",
    "RunResult",
    "RunState",
    "SchemaField",
    "SchemaValidator",
    "UnknownCommandError",
    "ValidationResult",
    "create_cli",
    "create_middleware_builder",
    "format_example",
    "join_name",
    "parent_of",
    "parse_options",
    "schema_fields",
    "to_display",
    "to_internal",
    "tokenize",
]
