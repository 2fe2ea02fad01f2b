"""
Command registration and discovery.

This module provides the command registry (internal name -> definition)
and the alias table built from it once the command set is complete.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from .definition import CommandDefinition


class AliasTable(Mapping[str, str]):
    """
    Read-only mapping from scoped alias to canonical internal name.

    A subcommand's alias is scoped under its parent, so ``rm`` declared on
    ``user:remove`` is stored as ``user:rm``.
    """

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: Mapping[str, str] = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_registry(cls, registry: CommandRegistry) -> AliasTable:
        """Scan every registered command's aliases."""
        entries: dict[str, str] = {}
        for definition in registry:
            for alias in definition.scoped_aliases:
                entries[alias] = definition.name
        return cls(entries)

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AliasTable({dict(self._entries)!r})"


class CommandRegistry:
    """Centralized command registration and discovery."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandDefinition] = {}

    def register(self, definition: CommandDefinition) -> None:
        """
        Register a command under its internal name.

        Registering a name twice replaces the earlier definition; the
        command keeps its original position in listing order.

        Args:
            definition: Command definition to register
        """
        self._commands[definition.name] = definition

    def get(self, name: str) -> CommandDefinition | None:
        """Get a command by exact internal name."""
        return self._commands.get(name)

    def resolve(
        self, name: str, aliases: Mapping[str, str] | None = None
    ) -> CommandDefinition | None:
        """
        Get a command by internal name, falling back to one alias lookup.

        Aliases are not chained: an alias that points at another alias
        resolves to nothing.

        Args:
            name: Internal command name or scoped alias
            aliases: Alias table (usually an AliasTable)

        Returns:
            The definition, or None when the command is unknown
        """
        if name in self._commands:
            return self._commands[name]
        if aliases and name in aliases:
            return self._commands.get(aliases[name])
        return None

    def list_commands(self) -> list[str]:
        """List all registered internal names in registration order."""
        return list(self._commands.keys())

    def list_top_level(self) -> dict[str, list[CommandDefinition]]:
        """
        List top-level commands grouped by help group.

        Returns:
            Groups in first-seen order, commands in registration order
        """
        groups: dict[str, list[CommandDefinition]] = {}
        for definition in self._commands.values():
            if definition.parent:
                continue
            groups.setdefault(definition.group, []).append(definition)
        return groups

    def list_children_of(self, name: str) -> list[CommandDefinition]:
        """List commands exactly one segment below ``name``."""
        return [d for d in self._commands.values() if d.is_child_of(name)]

    def is_registered(self, name: str) -> bool:
        """Check if an internal name is registered."""
        return name in self._commands

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[CommandDefinition]:
        return iter(list(self._commands.values()))

    def __len__(self) -> int:
        return len(self._commands)


__all__ = ["AliasTable", "CommandRegistry"]
