"""
Command definitions and the command naming scheme.

Commands are identified internally by a colon-delimited path
(``user:create``) and shown to users with spaces (``user create``).
A command is a subcommand of another exactly when its internal name
extends the parent's name by one segment.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .constants import DEFAULT_GROUP, HELP_GROUP, NAME_SEPARATOR


def to_display(name: str) -> str:
    """Convert an internal name to its display form (``a:b`` -> ``a b``)."""
    return " ".join(name.split(NAME_SEPARATOR))


def to_internal(display: str) -> str:
    """Convert a display name to its internal form (``a b`` -> ``a:b``)."""
    return NAME_SEPARATOR.join(display.split())


def join_name(parent: str | None, segment: str) -> str:
    """Build the internal name of ``segment`` under ``parent``."""
    return f"{parent}{NAME_SEPARATOR}{segment}" if parent else segment


def parent_of(name: str) -> str | None:
    """Internal name of the immediate parent, or None for top-level names."""
    head, sep, _ = name.rpartition(NAME_SEPARATOR)
    return head if sep else None


def _freeze(metadata: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(metadata or {}))


@dataclass(frozen=True, eq=False)
class CommandDefinition:
    """
    An immutable, registered command.

    ``handler`` is the middleware-wrapped callable invoked by the engine
    with ``(parsed_input, context, config)``; ``callback`` is the
    function the command author supplied.
    """

    name: str
    input_schema: Any
    handler: Callable[..., Any]
    description: str = ""
    output_schema: Any = None
    metadata: Mapping[str, Any] = field(default_factory=lambda: _freeze(None))
    aliases: tuple[str, ...] = ()
    examples: tuple[Any, ...] = ()
    parent: str | None = None
    middleware: tuple[Any, ...] = ()
    callback: Callable[..., Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.metadata, MappingProxyType):
            object.__setattr__(self, "metadata", _freeze(self.metadata))

    @property
    def display_name(self) -> str:
        """Name as typed on the command line."""
        return to_display(self.name)

    @property
    def segment(self) -> str:
        """Last segment of the internal name."""
        return self.name.rsplit(NAME_SEPARATOR, 1)[-1]

    @property
    def depth(self) -> int:
        """Number of segments in the internal name."""
        return len(self.name.split(NAME_SEPARATOR))

    @property
    def group(self) -> str:
        """Help group; commands without one are listed under ``General``."""
        return str(self.metadata.get("group") or HELP_GROUP)

    @property
    def scoped_aliases(self) -> tuple[str, ...]:
        """Aliases qualified with the parent's internal name."""
        return tuple(join_name(self.parent, alias) for alias in self.aliases)

    def is_child_of(self, name: str) -> bool:
        """True when this command is exactly one segment below ``name``."""
        prefix = name + NAME_SEPARATOR
        return self.name.startswith(prefix) and NAME_SEPARATOR not in self.name[
            len(prefix) :
        ]


__all__ = [
    "DEFAULT_GROUP",
    "CommandDefinition",
    "join_name",
    "parent_of",
    "to_display",
    "to_internal",
]
