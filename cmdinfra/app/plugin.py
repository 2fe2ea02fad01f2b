"""
Plugin system for command-line tools.

A plugin lives in its own subdirectory of a plugins directory and is
described by a ``cmdinfra-plugin.json`` manifest. Its entry module must
provide an ``initialize(cli)`` callable, which receives the CliBuilder and
registers commands, middleware or config loaders on it.
"""

from __future__ import annotations

import importlib.util
import json
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Any, Literal

import pydantic
from pydantic import BaseModel

from .constants import PLUGIN_MANIFEST
from .errors import PluginLoadError

if TYPE_CHECKING:
    from .builder import CliBuilder


class PluginManifest(BaseModel):
    """Contents of a plugin manifest file."""

    name: str
    version: str
    description: str | None = None
    author: str | None = None
    main: str
    type: Literal["module", "package"] = "module"


class Plugin(ABC):
    """Base class for class-based plugins."""

    def __init__(self, name: str | None = None):
        """
        Initialize the plugin.

        Args:
            name: Plugin name (defaults to class name; replaced by the
                manifest name when loaded from a directory)
        """
        self.name = name or self.__class__.__name__
        self.version: str | None = None
        self.description: str | None = None
        self.author: str | None = None

    @abstractmethod
    def initialize(self, cli: CliBuilder) -> None:
        """
        Register the plugin's features on the CLI.

        Args:
            cli: CLI builder to extend
        """
        pass


@dataclass
class LoadedPlugin:
    """A plugin that was loaded and initialized."""

    manifest: PluginManifest
    path: Path
    entry: Any
    commands: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.manifest.name

    @property
    def version(self) -> str:
        return self.manifest.version


def _import_entry(manifest: PluginManifest, main_path: Path) -> ModuleType:
    """Import a plugin's entry module from its file path."""
    module_name = f"cmdinfra_plugin_{manifest.name.replace('-', '_')}"
    if manifest.type == "package":
        init = main_path / "__init__.py"
        spec = importlib.util.spec_from_file_location(
            module_name, init, submodule_search_locations=[str(main_path)]
        )
    else:
        spec = importlib.util.spec_from_file_location(module_name, main_path)

    if spec is None or spec.loader is None:
        raise ImportError(f"cannot import {main_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


class PluginManager:
    """Discovers, loads and initializes plugins."""

    def __init__(self, logger: Any) -> None:
        """
        Initialize the plugin manager.

        Args:
            logger: Logger for load progress and failures
        """
        self.lg = logger
        self._plugins: dict[str, LoadedPlugin] = {}

    def load_directory(self, plugins_dir: str | Path, cli: CliBuilder) -> None:
        """
        Load every plugin below ``plugins_dir``.

        Subdirectories are visited in sorted order. A plugin that fails to
        load is logged and skipped; the pass continues with the next one.

        Args:
            plugins_dir: Directory containing one subdirectory per plugin
            cli: CLI builder handed to each plugin's ``initialize``
        """
        root = Path(plugins_dir)
        if not root.is_dir():
            self.lg.warning("plugins directory not found", extra={"path": str(root)})
            return

        for plugin_dir in sorted(p for p in root.iterdir() if p.is_dir()):
            try:
                self.load_plugin(plugin_dir, cli)
            except PluginLoadError as e:
                self.lg.error(str(e))

        self.lg.info(f"loaded {len(self._plugins)} plugins")

    def load_plugin(self, plugin_dir: str | Path, cli: CliBuilder) -> LoadedPlugin | None:
        """
        Load a single plugin directory.

        Args:
            plugin_dir: Directory holding the manifest
            cli: CLI builder handed to the plugin's ``initialize``

        Returns:
            The loaded plugin, or None when it was skipped with a warning

        Raises:
            PluginLoadError: If the plugin is broken
        """
        plugin_dir = Path(plugin_dir)
        manifest_path = plugin_dir / PLUGIN_MANIFEST
        if not manifest_path.is_file():
            self.lg.warning(
                "plugin manifest not found", extra={"path": str(manifest_path)}
            )
            return None

        manifest = self._read_manifest(plugin_dir, manifest_path)
        if manifest.name in self._plugins:
            self.lg.warning("plugin already loaded", extra={"plugin": manifest.name})
            return None

        main_path = plugin_dir / manifest.main
        if not main_path.exists():
            raise PluginLoadError(str(plugin_dir), f"main file not found: {main_path}")

        try:
            module = _import_entry(manifest, main_path)
        except Exception as e:
            raise PluginLoadError(str(plugin_dir), f"{type(e).__name__}: {e}") from e

        entry = getattr(module, "plugin", module)
        if not callable(getattr(entry, "initialize", None)):
            raise PluginLoadError(
                str(plugin_dir), f"invalid plugin module: {manifest.name}"
            )

        if isinstance(entry, Plugin):
            entry.name = manifest.name
            entry.version = manifest.version
            entry.description = manifest.description
            entry.author = manifest.author

        before = set(cli.registry.list_commands())
        try:
            entry.initialize(cli)
        except Exception as e:
            raise PluginLoadError(str(plugin_dir), f"initialize failed: {e}") from e

        loaded = LoadedPlugin(
            manifest=manifest,
            path=plugin_dir,
            entry=entry,
            commands=[n for n in cli.registry.list_commands() if n not in before],
        )
        self._plugins[manifest.name] = loaded
        self.lg.info(
            "loaded plugin",
            extra={"plugin": manifest.name, "version": manifest.version},
        )
        return loaded

    def _read_manifest(self, plugin_dir: Path, manifest_path: Path) -> PluginManifest:
        try:
            with open(manifest_path, encoding="utf-8") as f:
                data = json.load(f)
            return PluginManifest.model_validate(data)
        except (OSError, ValueError) as e:
            # pydantic.ValidationError is a ValueError
            reason = (
                "invalid manifest: " + "; ".join(err["msg"] for err in e.errors())
                if isinstance(e, pydantic.ValidationError)
                else str(e)
            )
            raise PluginLoadError(str(plugin_dir), reason) from e

    def get_plugin(self, name: str) -> LoadedPlugin | None:
        """Get a loaded plugin by name."""
        return self._plugins.get(name)

    def list_plugins(self) -> list[LoadedPlugin]:
        """List loaded plugins in load order."""
        return list(self._plugins.values())

    def __len__(self) -> int:
        return len(self._plugins)


__all__ = ["LoadedPlugin", "Plugin", "PluginManager", "PluginManifest"]
