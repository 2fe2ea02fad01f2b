"""
CLI fixtures for testing.

Provides a CLI builder with a captured logger and sample command schemas.
"""

from io import StringIO
from typing import Any

import pytest
from pydantic import BaseModel

from cmdinfra.app import CliBuilder, create_cli
from cmdinfra.log import Logger


class GreetInput(BaseModel):
    name: str
    uppercase: bool = False


class GreetOutput(BaseModel):
    message: str


class UserCreateInput(BaseModel):
    email: str
    name: str


def greet(parsed_input: GreetInput, context: Any, config: Any) -> dict:
    message = f"Hello, {parsed_input.name}!"
    if parsed_input.uppercase:
        message = message.upper()
    return {"message": message}


@pytest.fixture
def out() -> StringIO:
    """
    Provide a stream capturing help and version output.

    Returns:
        StringIO: Output stream for the engine
    """
    return StringIO()


@pytest.fixture
def cli(test_logger: Logger) -> CliBuilder:
    """
    Provide an empty CLI builder logging to the test stream.

    Returns:
        CliBuilder: CLI named 'test' at version 2.0.0
    """
    return create_cli(name="test", version="2.0.0", logger=test_logger)


@pytest.fixture
def greet_cli(cli: CliBuilder) -> CliBuilder:
    """
    Provide a CLI with 'greet' and 'user create' registered.

    Returns:
        CliBuilder: CLI with sample commands
    """
    (
        cli.add("greet", "Greet someone")
        .input(GreetInput)
        .output(GreetOutput)
        .aliases("hi")
        .examples({"name": "World", "uppercase": True})
        .action(greet)
    )
    user = cli.add("user", "Manage users", group="Users")
    user.input(dict[str, Any]).action(lambda **kwargs: None)
    (
        user.sub("create", "Create a user")
        .input(UserCreateInput)
        .aliases("new")
        .action(lambda parsed_input, context, config: parsed_input.model_dump())
    )
    return cli
