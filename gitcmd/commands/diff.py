"""``git diff`` in its three output formats.

Each variant always asks for ``--numstat --shortstat`` so the totals are
available alongside the selected format. git exits 1 when it finds
differences under ``--no-index``, so 0 and 1 are both success.
"""

from gitcmd.commands.arguments import Arguments
from gitcmd.commands.base import Command
from gitcmd.commands.constraints import conflicts
from gitcmd.commands.entries import (
    flag_option,
    flag_or_value_option,
    literal,
    operand,
    value_option,
)

DIFF_EXIT_STATUS = range(0, 2)


class Numstat(Command, name="diff.numstat"):
    arguments = Arguments(
        literal("diff"),
        literal("--numstat"),
        literal("--shortstat"),
        literal("-M"),
        flag_option(("cached", "staged")),
        flag_option("merge_base"),
        flag_option("no_index"),
        flag_or_value_option("dirstat", inline=True),
        operand("commit1"),
        operand("commit2"),
        value_option("pathspecs", as_operand=True, separator="--", repeatable=True),
        conflicts("cached", "no_index"),
    )
    allowed_exit_status = DIFF_EXIT_STATUS


class Patch(Command, name="diff.patch"):
    arguments = Arguments(
        literal("diff"),
        literal("--patch"),
        literal("--numstat"),
        literal("--shortstat"),
        literal("--src-prefix=a/"),
        literal("--dst-prefix=b/"),
        literal("-M"),
        flag_option(("cached", "staged")),
        flag_option("merge_base"),
        flag_option("no_index"),
        flag_option("find_copies", as_="-C"),
        flag_or_value_option("dirstat", inline=True),
        operand("commit1"),
        operand("commit2"),
        value_option("pathspecs", as_operand=True, separator="--", repeatable=True),
        conflicts("cached", "no_index"),
    )
    allowed_exit_status = DIFF_EXIT_STATUS


class Raw(Command, name="diff.raw"):
    arguments = Arguments(
        literal("diff"),
        literal("--raw"),
        literal("--numstat"),
        literal("--shortstat"),
        literal("--src-prefix=a/"),
        literal("--dst-prefix=b/"),
        flag_option(("cached", "staged")),
        flag_option("merge_base"),
        flag_option("no_index"),
        flag_or_value_option(("find_renames", "M"), inline=True),
        flag_or_value_option(("find_copies", "C"), inline=True),
        flag_option("find_copies_harder"),
        flag_or_value_option("dirstat", inline=True),
        operand("commit1"),
        operand("commit2"),
        value_option("pathspecs", as_operand=True, separator="--", repeatable=True),
        conflicts("cached", "no_index"),
    )
    allowed_exit_status = DIFF_EXIT_STATUS
