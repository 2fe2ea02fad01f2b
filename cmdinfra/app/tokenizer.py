"""
Argument tokenizing for CLI applications.

This module turns a raw argument vector into a command path and an options
mapping. It intentionally does no type conversion: every option value is a
string except bare flags, which are ``True``. Coercion is left to the
command's input schema.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .constants import (
    ARGV_SKIP,
    HELP_COMMAND,
    HELP_FLAGS,
    NAME_SEPARATOR,
    OPTION_PREFIX,
    VERSION_COMMAND,
    VERSION_FLAGS,
)
from .definition import to_display


@dataclass(frozen=True)
class ParsedArgs:
    """Result of tokenizing an argument vector."""

    command: str
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def display(self) -> str:
        """Command path as typed by the user."""
        return to_display(self.command)

    @property
    def is_help(self) -> bool:
        return self.command == HELP_COMMAND

    @property
    def is_version(self) -> bool:
        return self.command == VERSION_COMMAND

    @property
    def help_target(self) -> str | None:
        """Internal name of the command to show help for, if any."""
        if not self.is_help:
            return None
        target = self.options.get("command")
        return target if isinstance(target, str) and target else None


def _is_option(token: str) -> bool:
    return token.startswith(OPTION_PREFIX)


def _split_path(args: Sequence[str]) -> tuple[list[str], int]:
    """Collect leading non-option tokens; return them and the next index."""
    segments: list[str] = []
    i = 0
    while i < len(args) and not _is_option(args[i]):
        segments.append(args[i])
        i += 1
    return segments, i


def parse_options(args: Sequence[str]) -> dict[str, Any]:
    """
    Parse option tokens into a mapping.

    Rules:
        ``--key=value``  -> ``{"key": "value"}`` (split at the first ``=``)
        ``--key value``  -> ``{"key": "value"}``
        ``--key``        -> ``{"key": True}`` when followed by another
                            option or the end of input

    Tokens that are neither options nor consumed values are ignored.

    Args:
        args: Tokens following the command path

    Returns:
        Options mapping; later occurrences of a key overwrite earlier ones
    """
    options: dict[str, Any] = {}
    i = 0
    while i < len(args):
        arg = args[i]
        if _is_option(arg):
            flag = arg[len(OPTION_PREFIX) :]
            if "=" in flag:
                key, _, value = flag.partition("=")
                options[key] = value
            elif i + 1 >= len(args) or _is_option(args[i + 1]):
                options[flag] = True
            else:
                options[flag] = args[i + 1]
                i += 1
        i += 1
    return options


class ArgumentTokenizer:
    """
    Maps process arguments to ``(command, options)``.

    Example:
        >>> ArgumentTokenizer().tokenize(["python", "cli", "user", "create", "--name", "Joe"])
        ParsedArgs(command='user:create', options={'name': 'Joe'})
    """

    def __init__(
        self, aliases: Mapping[str, str] | None = None, skip: int = ARGV_SKIP
    ) -> None:
        """
        Initialize the tokenizer.

        Args:
            aliases: Scoped alias table used to rewrite the command path
            skip: Number of leading entries reserved for interpreter/script
        """
        self._aliases: Mapping[str, str] = aliases or {}
        self._skip = skip

    def tokenize(self, argv: Sequence[str]) -> ParsedArgs:
        """
        Tokenize an argument vector.

        Args:
            argv: Full argument vector, including the reserved leading entries

        Returns:
            ParsedArgs with the internal command name and raw options
        """
        args = list(argv[self._skip :])

        if not args:
            return ParsedArgs(HELP_COMMAND)

        if any(a in HELP_FLAGS for a in args):
            return ParsedArgs(HELP_COMMAND)

        if any(a in VERSION_FLAGS for a in args):
            return ParsedArgs(VERSION_COMMAND)

        segments, i = _split_path(args)

        if segments and segments[0] == HELP_COMMAND and len(segments) > 1:
            target = NAME_SEPARATOR.join(segments[1:])
            return ParsedArgs(HELP_COMMAND, {"command": target})

        command = NAME_SEPARATOR.join(segments)
        command = self._aliases.get(command, command)

        return ParsedArgs(command, parse_options(args[i:]))


def tokenize(
    argv: Sequence[str], aliases: Mapping[str, str] | None = None
) -> ParsedArgs:
    """Tokenize ``argv`` with an optional alias table."""
    return ArgumentTokenizer(aliases).tokenize(argv)


__all__ = ["ArgumentTokenizer", "ParsedArgs", "parse_options", "tokenize"]
