"""
Configuration management package.

This module provides:
- Loaders for JSON, YAML, TOML and Python config files
- ConfigResolver merging defaults, environment, files and overrides
- Environment variable coercion and nested key mapping
"""

from .loaders import (
    ConfigLoader,
    ConfigLoaderRegistry,
    JsonLoader,
    PythonLoader,
    TomlLoader,
    YamlLoader,
)
from .resolver import (
    ConfigOptions,
    ConfigResolver,
    coerce_env_value,
    deep_merge,
    env_to_dict,
)

__all__ = [
    "ConfigLoader",
    "ConfigLoaderRegistry",
    "ConfigOptions",
    "ConfigResolver",
    "JsonLoader",
    "PythonLoader",
    "TomlLoader",
    "YamlLoader",
    "coerce_env_value",
    "deep_merge",
    "env_to_dict",
]
