"""``git stash`` subcommands."""

from gitcmd.commands.arguments import Arguments
from gitcmd.commands.base import Command
from gitcmd.commands.constraints import conflicts, requires
from gitcmd.commands.entries import (
    flag_option,
    flag_or_value_option,
    literal,
    operand,
    value_option,
)


class Push(Command, name="stash.push"):
    """``git stash push [options] [--] [<pathspec>...]``"""

    arguments = Arguments(
        literal("stash"),
        literal("push"),
        flag_option(("patch", "p")),
        flag_option(("staged", "S")),
        flag_option(("keep_index", "k"), negatable=True),
        flag_option(("include_untracked", "u")),
        flag_option(("all", "a")),
        value_option(("message", "m"), inline=True),
        value_option("pathspec_from_file", inline=True),
        flag_option("pathspec_file_nul"),
        operand("pathspecs", repeatable=True, separator="--"),
        conflicts("include_untracked", "all"),
        requires("pathspec_from_file", when="pathspec_file_nul"),
    )


class Pop(Command, name="stash.pop"):
    arguments = Arguments(
        literal("stash"),
        literal("pop"),
        flag_option("index"),
        operand("stash"),
    )


class Apply(Command, name="stash.apply"):
    arguments = Arguments(
        literal("stash"),
        literal("apply"),
        flag_option("index"),
        operand("stash"),
    )


class Drop(Command, name="stash.drop"):
    arguments = Arguments(literal("stash"), literal("drop"), operand("stash"))


class List(Command, name="stash.list"):
    arguments = Arguments(
        literal("stash"),
        literal("list"),
        value_option("format", inline=True),
    )


class Clear(Command, name="stash.clear"):
    arguments = Arguments(literal("stash"), literal("clear"))


class Create(Command, name="stash.create"):
    """``git stash create [<message>]``; prints the commit without storing it."""

    arguments = Arguments(literal("stash"), literal("create"), operand("message"))


class Store(Command, name="stash.store"):
    arguments = Arguments(
        literal("stash"),
        literal("store"),
        value_option(("message", "m"), inline=True),
        flag_option(("quiet", "q")),
        operand("commit", required=True),
    )


class Branch(Command, name="stash.branch"):
    arguments = Arguments(
        literal("stash"),
        literal("branch"),
        operand("branchname", required=True),
        operand("stash"),
    )


class ShowNumstat(Command, name="stash.show_numstat"):
    arguments = Arguments(
        literal("stash"),
        literal("show"),
        literal("--numstat"),
        literal("--shortstat"),
        literal("-M"),
        flag_option(("include_untracked", "u"), negatable=True),
        flag_option("only_untracked"),
        flag_or_value_option("dirstat", inline=True),
        operand("stash"),
        conflicts("include_untracked", "only_untracked"),
    )


class ShowPatch(Command, name="stash.show_patch"):
    arguments = Arguments(
        literal("stash"),
        literal("show"),
        literal("--patch"),
        literal("--numstat"),
        literal("--shortstat"),
        literal("--src-prefix=a/"),
        literal("--dst-prefix=b/"),
        literal("-M"),
        flag_option(("include_untracked", "u"), negatable=True),
        flag_option("only_untracked"),
        flag_option("find_copies", as_="-C"),
        flag_or_value_option("dirstat", inline=True),
        operand("stash"),
        conflicts("include_untracked", "only_untracked"),
    )


class ShowRaw(Command, name="stash.show_raw"):
    arguments = Arguments(
        literal("stash"),
        literal("show"),
        literal("--raw"),
        literal("--numstat"),
        literal("--shortstat"),
        literal("-M"),
        flag_option(("include_untracked", "u"), negatable=True),
        flag_option("only_untracked"),
        flag_option("find_copies", as_="-C"),
        flag_or_value_option("dirstat", inline=True),
        operand("stash"),
        conflicts("include_untracked", "only_untracked"),
    )
