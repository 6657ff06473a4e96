"""Command declarations and the argument-binding API they are built with.

Importing this package registers every command in ``COMMANDS``.
"""

from gitcmd.commands.arguments import Arguments
from gitcmd.commands.base import Command, classify
from gitcmd.commands.bound import Bound
from gitcmd.commands.constraints import (
    allowed_values,
    conflicts,
    forbid_values,
    requires,
    requires_exactly_one_of,
    requires_one_of,
)
from gitcmd.commands.entries import (
    custom_option,
    execution_option,
    flag_option,
    flag_or_value_option,
    key_value_option,
    literal,
    operand,
    value_option,
)
from gitcmd.commands.registry import COMMANDS, command_names, get_command

# Declaration modules register their commands on import
from gitcmd.commands import (  # noqa: F401
    branch,
    cat_file,
    checkout,
    diff,
    merge,
    repository,
    stash,
    tag,
    worktree,
)

__all__ = [
    "COMMANDS",
    "Arguments",
    "Bound",
    "Command",
    "allowed_values",
    "classify",
    "command_names",
    "conflicts",
    "custom_option",
    "execution_option",
    "flag_option",
    "flag_or_value_option",
    "forbid_values",
    "get_command",
    "key_value_option",
    "literal",
    "operand",
    "requires",
    "requires_exactly_one_of",
    "requires_one_of",
    "value_option",
]
