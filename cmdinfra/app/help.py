"""
Help text rendering.

General help lists top-level commands grouped by ``metadata.group`` in
registration order. Command help shows usage, description, aliases, the
options derived from the input schema, direct subcommands and examples.
"""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from .constants import HELP_NAME_WIDTH, OPTION_PREFIX
from .definition import CommandDefinition
from .registry import CommandRegistry
from .validation import SchemaField, schema_fields


def format_example(prog: str, command: str, example: Any) -> str:
    """
    Render an example input as a command line.

    ``True`` values become bare flags and ``False``/``None`` values are
    omitted. Non-mapping examples are appended verbatim.

    Example:
        >>> format_example("cli", "greet", {"name": "World", "uppercase": True})
        'cli greet --name World --uppercase'
    """
    if isinstance(example, BaseModel):
        example = example.model_dump(exclude_none=True)

    parts = [prog, command]
    if isinstance(example, Mapping):
        for key, value in example.items():
            if value is True:
                parts.append(f"{OPTION_PREFIX}{key}")
            elif value is False or value is None:
                continue
            else:
                parts.append(f"{OPTION_PREFIX}{key} {shlex.quote(str(value))}")
    elif example:
        parts.append(str(example))
    return " ".join(parts)


def _format_field(f: SchemaField) -> str:
    line = f"  {OPTION_PREFIX}{f.name:<{HELP_NAME_WIDTH}} {f.type}"
    notes = []
    if f.required:
        notes.append("required")
    elif f.default is not None:
        notes.append(f"default: {f.default}")
    if notes:
        line += f" ({', '.join(notes)})"
    if f.description:
        line += f"  {f.description}"
    return line


class HelpRenderer:
    """Renders general and per-command help text."""

    def __init__(self, prog: str, registry: CommandRegistry, description: str = ""):
        """
        Initialize the renderer.

        Args:
            prog: Program name shown in usage lines
            registry: Registry to list commands from
            description: CLI description shown under the usage line
        """
        self.prog = prog
        self.registry = registry
        self.description = description

    def render_general(self) -> str:
        """Render the top-level help listing."""
        lines = [f"Usage: {self.prog} <command> [options]"]
        if self.description:
            lines += ["", self.description]
        lines += ["", "Commands:"]

        for group, commands in self.registry.list_top_level().items():
            lines.append(f"\n{group}:")
            for definition in commands:
                lines.append(
                    f"  {definition.display_name:<{HELP_NAME_WIDTH}} "
                    f"{definition.description}".rstrip()
                )

        lines.append(
            f"\nRun '{self.prog} <command> --help' for more information on a command."
        )
        return "\n".join(lines)

    def render_command(self, definition: CommandDefinition) -> str:
        """Render help for a single command."""
        children = self.registry.list_children_of(definition.name)
        usage = f"Usage: {self.prog} {definition.display_name}"
        if children:
            usage += " <subcommand>"
        lines = [usage + " [options]"]

        if definition.description:
            lines += ["", definition.description]

        if definition.aliases:
            lines += ["", f"Aliases: {', '.join(definition.aliases)}"]

        fields = schema_fields(definition.input_schema)
        if fields:
            lines += ["", "Options:"]
            lines += [_format_field(f) for f in fields]

        if children:
            lines += ["", "Subcommands:"]
            for child in children:
                lines.append(
                    f"  {child.segment:<{HELP_NAME_WIDTH}} {child.description}".rstrip()
                )

        if definition.examples:
            lines += ["", "Examples:"]
            for example in definition.examples:
                lines.append(
                    "  " + format_example(self.prog, definition.display_name, example)
                )

        return "\n".join(lines)


__all__ = ["HelpRenderer", "format_example"]
