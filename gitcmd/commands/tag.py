"""``git tag`` subcommands."""

from gitcmd.commands.arguments import Arguments
from gitcmd.commands.base import Command
from gitcmd.commands.constraints import conflicts
from gitcmd.commands.entries import (
    flag_option,
    flag_or_value_option,
    key_value_option,
    literal,
    operand,
    value_option,
)


class Create(Command, name="tag.create"):
    """``git tag [options] <tag-name> [<commit>]``

    ``trailer`` takes a mapping or ``(key, value)`` pairs and emits one
    ``--trailer "key: value"`` per pair.
    """

    arguments = Arguments(
        literal("tag"),
        flag_option(("annotate", "a")),
        flag_option(("sign", "s"), negatable=True),
        value_option(("local_user", "u"), inline=True),
        flag_option(("force", "f")),
        flag_option("create_reflog"),
        value_option(("message", "m"), inline=True, allow_empty=True),
        value_option(("file", "F"), inline=True),
        key_value_option("trailer", key_separator=": "),
        value_option("cleanup", inline=True),
        operand("tag_name", required=True),
        operand("commit"),
        conflicts("annotate", "sign", "local_user"),
        conflicts("message", "file"),
    )


class Delete(Command, name="tag.delete"):
    arguments = Arguments(
        literal("tag"),
        literal("--delete"),
        operand("tag_names", repeatable=True, required=True),
    )


class List(Command, name="tag.list"):
    arguments = Arguments(
        literal("tag"),
        literal("--list"),
        value_option("format", inline=True),
        value_option("sort", inline=True, repeatable=True),
        flag_or_value_option("contains", inline=True),
        flag_or_value_option("no_contains", inline=True),
        flag_or_value_option("merged", inline=True),
        flag_or_value_option("no_merged", inline=True),
        flag_or_value_option("points_at", inline=True),
        flag_option(("ignore_case", "i")),
        operand("patterns", repeatable=True),
    )


class Verify(Command, name="tag.verify"):
    arguments = Arguments(
        literal("tag"),
        literal("--verify"),
        value_option("format", inline=True),
        operand("tag_names", repeatable=True, required=True),
    )
