"""Property-based tests for command naming, tokenizing and registration."""

from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from cmdinfra.app.definition import (
    CommandDefinition,
    join_name,
    parent_of,
    to_display,
    to_internal,
)
from cmdinfra.app.registry import CommandRegistry
from cmdinfra.app.tokenizer import ArgumentTokenizer, parse_options

segment = st.text(
    alphabet="abcdefghijklmnopqrstuvwxyz0123456789_-", min_size=1, max_size=12
).filter(lambda s: not s.startswith("-"))

command_name = st.lists(segment, min_size=1, max_size=4).map(":".join)

option_value = st.text(min_size=1, max_size=20).filter(
    lambda s: not s.startswith("--")
)


def noop(**kwargs: Any) -> None:
    return None


@pytest.mark.property
@pytest.mark.unit
class TestNamingProperties:
    """Property-based tests for internal and display names."""

    @given(name=command_name)
    def test_display_round_trip(self, name: str) -> None:
        """Converting to display form and back yields the internal name."""
        assert to_internal(to_display(name)) == name

    @given(name=command_name, child=segment)
    def test_parent_of_joined_name(self, name: str, child: str) -> None:
        assert parent_of(join_name(name, child)) == name

    @given(name=command_name)
    def test_display_has_no_separator(self, name: str) -> None:
        assert ":" not in to_display(name)


@pytest.mark.property
@pytest.mark.unit
class TestTokenizerProperties:
    """Property-based tests for argument tokenizing."""

    @given(key=segment, value=option_value)
    def test_equals_form_keeps_value(self, key: str, value: str) -> None:
        """Everything after the first '=' is the value, unchanged."""
        assert parse_options([f"--{key}={value}"]) == {key: value}

    @given(key=segment, value=option_value)
    def test_space_form_keeps_value(self, key: str, value: str) -> None:
        assert parse_options([f"--{key}", value]) == {key: value}

    @given(keys=st.lists(segment, min_size=1, max_size=5))
    def test_trailing_flags_are_true(self, keys: list[str]) -> None:
        options = parse_options([f"--{k}" for k in keys])

        assert options == {k: True for k in keys}

    @given(name=command_name)
    @settings(max_examples=50)
    def test_command_path_is_internal_name(self, name: str) -> None:
        segments = name.split(":")
        if segments[0] in ("help", "version"):
            return

        parsed = ArgumentTokenizer().tokenize(["python", "cli", *segments])

        assert parsed.command == name
        assert parsed.options == {}


@pytest.mark.property
@pytest.mark.unit
class TestRegistryProperties:
    """Property-based tests for the command registry."""

    @given(names=st.lists(command_name, min_size=1, max_size=10))
    def test_last_registration_wins(self, names: list[str]) -> None:
        registry = CommandRegistry()
        last: dict[str, CommandDefinition] = {}
        for i, name in enumerate(names):
            definition = CommandDefinition(
                name=name, input_schema=dict, handler=noop, description=str(i)
            )
            registry.register(definition)
            last[name] = definition

        assert registry.list_commands() == list(dict.fromkeys(names))
        for name, definition in last.items():
            assert registry.get(name) is definition
