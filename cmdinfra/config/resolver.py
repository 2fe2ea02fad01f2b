"""
Layered configuration resolution.

Configuration is merged from four sources in increasing precedence:

    defaults -> environment -> first config file -> command-line overrides

and then validated against a schema. When the merged result is invalid,
the defaults alone are validated and used instead.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..app.errors import ConfigLoadError, ConfigValidationError
from ..app.validation import SchemaValidator
from .loaders import ConfigLoaderRegistry

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?[0-9]+\.[0-9]+")


def deep_merge(target: Any, source: Mapping[str, Any]) -> dict[str, Any]:
    """
    Deep merge ``source`` into a copy of ``target``.

    Mappings in ``source`` are merged recursively, creating the target
    substructure when it is absent or not a mapping. Every other value,
    lists included, replaces the target value outright.

    Args:
        target: Base mapping (anything else is treated as empty)
        source: Mapping whose values take precedence

    Returns:
        New merged dictionary; neither input is modified
    """
    result = dict(target) if isinstance(target, Mapping) else {}
    for key, value in source.items():
        if isinstance(value, Mapping):
            result[key] = deep_merge(result.get(key), value)
        else:
            result[key] = value
    return result


def coerce_env_value(value: str) -> bool | int | float | str:
    """
    Convert an environment variable string to a scalar.

    ``true``/``false`` (any case) become booleans, integer-looking text an
    int, decimal-looking text a float; anything else stays a string.
    """
    lowered = value.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT_RE.fullmatch(value):
        return int(value)
    if _FLOAT_RE.fullmatch(value):
        return float(value)
    return value


def _set_nested_value(data: dict[str, Any], path: list[str], value: Any) -> None:
    current = data
    for part in path[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[path[-1]] = value


def env_to_dict(prefix: str, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """
    Build a nested mapping from environment variables starting with ``prefix``.

    Example:
        >>> env_to_dict("APP_", {"APP_DB_PORT": "5432", "APP_DEBUG": "true"})
        {'db': {'port': 5432}, 'debug': True}

    Args:
        prefix: Variable name prefix; an empty prefix yields an empty mapping
        environ: Environment to read (default: os.environ)

    Returns:
        Nested mapping with coerced values
    """
    if not prefix:
        return {}

    env = os.environ if environ is None else environ
    data: dict[str, Any] = {}
    for key in sorted(env):
        if not key.startswith(prefix):
            continue
        # APP_DB_PORT -> ['db', 'port']
        path = key[len(prefix) :].lower().split("_")
        _set_nested_value(data, path, coerce_env_value(env[key]))
    return data


@dataclass
class ConfigOptions:
    """Inputs of configuration resolution."""

    schema: Any = None
    defaults: dict[str, Any] = field(default_factory=dict)
    env_prefix: str = ""
    config_files: Sequence[str | Path] = ()


class ConfigResolver:
    """Merges and validates configuration from all sources."""

    def __init__(
        self,
        options: ConfigOptions,
        loaders: ConfigLoaderRegistry | None = None,
        logger: Any = None,
        validator: SchemaValidator | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            options: Schema, defaults, env prefix and candidate files
            loaders: Config loaders (default: built-in loaders)
            logger: Logger for warnings and field errors
            validator: Schema validator
            environ: Environment to read (default: os.environ at resolve time)
        """
        self.options = options
        self.loaders = loaders or ConfigLoaderRegistry()
        self.lg = logger
        self.validator = validator or SchemaValidator()
        self._environ = environ

    def load_env(self) -> dict[str, Any]:
        """Environment-derived configuration for the configured prefix."""
        return env_to_dict(self.options.env_prefix, self._environ)

    def load_files(self) -> dict[str, Any]:
        """
        Load the first candidate file that exists and has a loader.

        Candidates without a loader or failing to load are skipped with a
        warning; later candidates are never read once one succeeds.
        """
        for candidate in self.options.config_files:
            path = Path(candidate)
            if not path.is_file():
                continue

            loader = self.loaders.find(path)
            if loader is None:
                self._warn("no loader for config file", path=str(path))
                continue

            try:
                data = loader.load(path)
            except ConfigLoadError as e:
                self._warn("failed to load config file", path=str(path), reason=e.reason)
                continue
            except Exception as e:
                self._warn(
                    "failed to load config file",
                    path=str(path),
                    reason=f"{type(e).__name__}: {e}",
                )
                continue

            if self.lg:
                self.lg.debug("loaded config file", extra={"path": str(path)})
            return data
        return {}

    def merge(self, overrides: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Merge all sources without validating."""
        merged = deep_merge({}, self.options.defaults or {})
        merged = deep_merge(merged, self.load_env())
        merged = deep_merge(merged, self.load_files())
        return deep_merge(merged, overrides or {})

    def resolve(self, overrides: Mapping[str, Any] | None = None) -> Any:
        """
        Resolve the effective configuration.

        Args:
            overrides: Command-line overrides (highest precedence)

        Returns:
            The validated configuration, or the validated defaults when the
            merged configuration is invalid. Without a schema, the merged
            mapping itself.

        Raises:
            ConfigValidationError: If the defaults alone are invalid too
        """
        merged = self.merge(overrides)
        schema = self.options.schema
        if schema is None:
            return merged

        result = self.validator.validate(schema, merged)
        if result.is_valid:
            return result.value

        if self.lg:
            self.lg.error("invalid configuration:")
            for err in result.errors:
                self.lg.error(f"- {err}")
            self.lg.warning("using default configuration")

        fallback = self.validator.validate(schema, dict(self.options.defaults or {}))
        if not fallback.is_valid:
            raise ConfigValidationError(
                "default configuration is invalid", fallback.errors
            )
        return fallback.value

    def _warn(self, msg: str, **extra: Any) -> None:
        if self.lg:
            self.lg.warning(msg, extra=extra)


__all__ = [
    "ConfigOptions",
    "ConfigResolver",
    "coerce_env_value",
    "deep_merge",
    "env_to_dict",
]
