#!/usr/bin/env python3
"""
Minimal CLI with a command, a subcommand and aliases.

Try:
    python greet_cli.py greet --name World --uppercase
    python greet_cli.py hi --name Bob
    python greet_cli.py user new --email joe@example.com --name Joe
    python greet_cli.py help user create
"""

import pathlib
import sys
from typing import Any

# Add the project root to the path
project_root = str(pathlib.Path(__file__).resolve().parents[2])
sys.path.append(project_root) if project_root not in sys.path else None

from pydantic import BaseModel, Field

from cmdinfra import create_cli


class GreetInput(BaseModel):
    name: str = Field(description="Who to greet")
    uppercase: bool = False


class GreetOutput(BaseModel):
    message: str


class UserCreateInput(BaseModel):
    email: str
    name: str


def greet(parsed_input: GreetInput, context, config) -> GreetOutput:
    """Say hello."""
    message = f"Hello, {parsed_input.name}!"
    if parsed_input.uppercase:
        message = message.upper()
    print(message)
    return GreetOutput(message=message)


def create_user(parsed_input: UserCreateInput, context, config) -> dict:
    context.logger.success("user created", extra={"email": parsed_input.email})
    return parsed_input.model_dump()


def create_application():
    """Create the CLI with its commands."""
    cli = create_cli("greet", "1.0.0", "Example CLI built with cmdinfra")

    (
        cli.add("greet", "Greet someone")
        .input(GreetInput)
        .output(GreetOutput)
        .aliases("hi")
        .examples({"name": "World", "uppercase": True})
        .action(greet)
    )

    user = cli.add("user", "Manage users", group="Users")
    user.input(dict[str, Any]).action(lambda **kwargs: print("try: user create --help"))
    (
        user.sub("create", "Create a user")
        .input(UserCreateInput)
        .aliases("new")
        .action(create_user)
    )

    return cli


def main():
    """Main function."""
    create_application().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
