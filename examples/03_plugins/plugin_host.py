#!/usr/bin/env python3
"""
CLI that loads commands from the plugins/ directory next to this file.

Try:
    python plugin_host.py --help
    python plugin_host.py hello --name World
    cmdinfra plugins list --dir plugins
"""

import pathlib
import sys

# Add the project root to the path
project_root = str(pathlib.Path(__file__).resolve().parents[2])
sys.path.append(project_root) if project_root not in sys.path else None

from cmdinfra import create_cli

PLUGINS_DIR = pathlib.Path(__file__).resolve().parent / "plugins"


def main():
    """Main function."""
    cli = create_cli("host", "1.0.0", "Plugin host example")
    cli.run(plugins_dir=PLUGINS_DIR)
    return 0


if __name__ == "__main__":
    sys.exit(main())
