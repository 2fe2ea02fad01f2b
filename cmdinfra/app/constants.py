"""Constants shared by the command pipeline."""

# Separator between segments of an internal command name
NAME_SEPARATOR = ":"

# Group assigned by the builder when none is given
DEFAULT_GROUP = "default"

# Group shown in help for commands without group metadata
HELP_GROUP = "General"

# Built-in command names intercepted by the tokenizer
HELP_COMMAND = "help"
VERSION_COMMAND = "version"

HELP_FLAGS = frozenset({"--help", "-h"})
VERSION_FLAGS = frozenset({"--version", "-v"})

# Prefix of option tokens
OPTION_PREFIX = "--"

# Number of leading argv entries reserved for interpreter and script
ARGV_SKIP = 2

# Plugin manifest file name inside each plugin directory
PLUGIN_MANIFEST = "cmdinfra-plugin.json"

# Width of the command name column in help output
HELP_NAME_WIDTH = 15
