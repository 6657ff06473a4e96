"""Commands that create, copy, or inspect whole repositories."""

from gitcmd.commands.arguments import Arguments
from gitcmd.commands.base import Command
from gitcmd.commands.constraints import conflicts
from gitcmd.commands.entries import (
    custom_option,
    execution_option,
    flag_option,
    literal,
    operand,
    value_option,
)


def _is_depth(value: object) -> bool:
    """Positive int or digit string, never a bool."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    return isinstance(value, str) and value.isascii() and value.isdigit() and int(value) > 0


class Init(Command, name="init"):
    """``git init [--bare] [--initial-branch=<name>] [<directory>]``"""

    arguments = Arguments(
        literal("init"),
        flag_option("bare"),
        flag_option(("quiet", "q")),
        value_option("initial_branch", inline=True),
        operand("directory"),
    )


class Clone(Command, name="clone"):
    """``git clone [options] -- <repository> [<directory>]``

    ``timeout`` is not passed to git; it bounds how long the clone may run.
    """

    arguments = Arguments(
        literal("clone"),
        flag_option("bare"),
        flag_option("recursive"),
        flag_option("mirror"),
        value_option("branch"),
        value_option("filter"),
        value_option(("origin", "remote")),
        value_option("config", repeatable=True),
        flag_option("single_branch", negatable=True),
        custom_option("depth", lambda depth: ["--depth", str(int(depth))], validator=_is_depth),
        operand("repository", required=True, separator="--"),
        operand("directory"),
        execution_option("timeout", type_=(int, float)),
        conflicts("bare", "mirror"),
    )


class Fsck(Command, name="fsck"):
    """``git fsck --no-progress [options] [<object>...]``

    git fsck reports findings through bit flags in its exit code, so any
    status from 0 to 7 is a completed check.
    """

    arguments = Arguments(
        literal("fsck"),
        literal("--no-progress"),
        flag_option("tags"),
        flag_option("root"),
        flag_option("unreachable"),
        flag_option("cache"),
        flag_option("no_reflogs"),
        flag_option("full", negatable=True),
        flag_option("strict"),
        flag_option("lost_found"),
        flag_option("dangling", negatable=True),
        flag_option("connectivity_only"),
        flag_option("name_objects", negatable=True),
        flag_option("references", negatable=True),
        operand("object", repeatable=True),
    )
    allowed_exit_status = range(0, 8)


class MergeBase(Command, name="merge_base"):
    """``git merge-base [options] <commit>...``

    Exit status 1 means no common ancestor (or, with ``is_ancestor``, "no").
    """

    arguments = Arguments(
        literal("merge-base"),
        flag_option("octopus"),
        flag_option("independent"),
        flag_option("is_ancestor"),
        flag_option("fork_point"),
        flag_option("all"),
        operand("commits", repeatable=True, required=True),
        conflicts("octopus", "independent", "is_ancestor", "fork_point"),
    )
    allowed_exit_status = range(0, 2)
