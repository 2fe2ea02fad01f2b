#!/usr/bin/env python3
"""
cmdinfra CLI - Utility commands for the cmdinfra framework.

Usage:
    cmdinfra plugins list --dir ./plugins
    cmdinfra env show --prefix MYAPP_
    cmdinfra --help
"""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, Field

import cmdinfra
from cmdinfra.app import CliBuilder, HelpRenderer, PluginManager, create_cli
from cmdinfra.config import env_to_dict

PLUGINS_DIR_ENV = "CMDINFRA_PLUGINS_DIR"


class GroupInput(BaseModel):
    pass


class PluginsListInput(BaseModel):
    dir: str | None = Field(default=None, description="Plugins directory")


class EnvShowInput(BaseModel):
    prefix: str = Field(description="Environment variable prefix, e.g. MYAPP_")


def _group_handler(cli: CliBuilder, name: str) -> Any:
    """Handler for a command that only groups subcommands: show its help."""

    def show_help(parsed_input: Any, context: Any, config: Any) -> None:
        definition = cli.registry.get(name)
        if definition is not None:
            print(HelpRenderer(cli.name, cli.registry).render_command(definition))

    return show_help


def _list_plugins(parsed_input: PluginsListInput, context: Any, config: Any) -> list[str]:
    plugins_dir = parsed_input.dir or os.environ.get(PLUGINS_DIR_ENV)
    if not plugins_dir:
        context.logger.error(f"no plugins directory given (use --dir or {PLUGINS_DIR_ENV})")
        return []

    # Load into a scratch CLI so the listed commands are exactly the plugins'
    target = create_cli(name="plugins", logger=context.logger)
    manager = PluginManager(context.logger)
    manager.load_directory(plugins_dir, target)

    for plugin in manager.list_plugins():
        line = f"{plugin.name} v{plugin.version}"
        if plugin.manifest.description:
            line += f" - {plugin.manifest.description}"
        print(line)
        for command in plugin.commands:
            print(f"  {cmdinfra.to_display(command)}")
    return [plugin.name for plugin in manager.list_plugins()]


def _show_env(parsed_input: EnvShowInput, context: Any, config: Any) -> dict[str, Any]:
    data = env_to_dict(parsed_input.prefix)
    print(json.dumps(data, indent=2, sort_keys=True))
    return data


def build_cli() -> CliBuilder:
    """Build the cmdinfra CLI with all commands registered."""
    cli = create_cli(
        name="cmdinfra",
        version=cmdinfra.__version__,
        description="Utility commands for the cmdinfra framework",
    )

    plugins = cli.add("plugins", "Inspect plugin directories", group="Tools")
    plugins.input(GroupInput).action(_group_handler(cli, "plugins"))
    (
        plugins.sub("list", "List plugins and the commands they register")
        .input(PluginsListInput)
        .aliases("ls")
        .examples({"dir": "./plugins"})
        .action(_list_plugins)
    )

    env = cli.add("env", "Inspect environment-derived configuration", group="Tools")
    env.input(GroupInput).action(_group_handler(cli, "env"))
    (
        env.sub("show", "Print the configuration mapping for a prefix")
        .input(EnvShowInput)
        .examples({"prefix": "MYAPP_"})
        .action(_show_env)
    )

    return cli


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the cmdinfra CLI.

    Failures are logged; the exit status is always 0.
    """
    cli = build_cli()
    cli.run(argv, plugins_dir=os.environ.get(PLUGINS_DIR_ENV))
    return 0


if __name__ == "__main__":
    sys.exit(main())
