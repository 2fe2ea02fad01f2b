"""
Config file loaders.

Each loader reads one file format and returns its top-level mapping. The
registry picks the first loader whose ``can_load()`` accepts a path;
built-in loaders are consulted before custom ones.
"""

from __future__ import annotations

import json
import runpy
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import yaml

from ..app.errors import ConfigLoadError


class ConfigLoader(ABC):
    """Contract for a single config file format."""

    #: File extensions (lower-case, with dot) handled by this loader
    extensions: tuple[str, ...] = ()

    def can_load(self, path: str | Path) -> bool:
        """Check whether this loader handles the given path."""
        return Path(path).suffix.lower() in self.extensions

    def load(self, path: str | Path) -> dict[str, Any]:
        """
        Load a config file.

        Args:
            path: Path to the config file

        Returns:
            The file's top-level mapping

        Raises:
            ConfigLoadError: If the file cannot be read, parsed, or does not
                contain a mapping
        """
        try:
            data = self._read(Path(path))
        except ConfigLoadError:
            raise
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigLoadError(str(path), str(e)) from e

        if data is None:
            return {}
        if not isinstance(data, Mapping):
            raise ConfigLoadError(
                str(path), f"expected a mapping, got {type(data).__name__}"
            )
        return dict(data)

    @abstractmethod
    def _read(self, path: Path) -> Any:
        """Read and parse the file; may return any parsed value."""
        pass


class JsonLoader(ConfigLoader):
    """Loads ``.json`` files."""

    extensions = (".json",)

    def _read(self, path: Path) -> Any:
        with open(path, encoding="utf-8") as f:
            return json.load(f)


class YamlLoader(ConfigLoader):
    """Loads ``.yml`` / ``.yaml`` files with ``yaml.safe_load``."""

    extensions = (".yml", ".yaml")

    def _read(self, path: Path) -> Any:
        with open(path, encoding="utf-8") as f:
            return yaml.safe_load(f)


class TomlLoader(ConfigLoader):
    """Loads ``.toml`` files."""

    extensions = (".toml",)

    def _read(self, path: Path) -> Any:
        with open(path, "rb") as f:
            return tomllib.load(f)


class PythonLoader(ConfigLoader):
    """
    Loads ``.py`` files by executing them and taking their ``config`` value.

    Example file:
        config = {"server": {"port": 8080}}
    """

    extensions = (".py",)
    variable = "config"

    def _read(self, path: Path) -> Any:
        try:
            namespace = runpy.run_path(str(path))
        except Exception as e:
            raise ConfigLoadError(str(path), f"{type(e).__name__}: {e}") from e
        if self.variable not in namespace:
            raise ConfigLoadError(str(path), f"no '{self.variable}' variable defined")
        return namespace[self.variable]


class ConfigLoaderRegistry:
    """Ordered collection of config loaders."""

    def __init__(self, include_builtins: bool = True) -> None:
        self._loaders: list[ConfigLoader] = []
        if include_builtins:
            for loader in (JsonLoader(), YamlLoader(), TomlLoader(), PythonLoader()):
                self.register(loader)

    def register(self, loader: ConfigLoader) -> None:
        """Append a loader; it is consulted after those already registered."""
        self._loaders.append(loader)

    def find(self, path: str | Path) -> ConfigLoader | None:
        """Return the first loader accepting ``path``, or None."""
        for loader in self._loaders:
            if loader.can_load(path):
                return loader
        return None

    def __iter__(self) -> Iterator[ConfigLoader]:
        return iter(self._loaders)

    def __len__(self) -> int:
        return len(self._loaders)


__all__ = [
    "ConfigLoader",
    "ConfigLoaderRegistry",
    "JsonLoader",
    "PythonLoader",
    "TomlLoader",
    "YamlLoader",
]
