"""Commands that change the index and working tree."""

from gitcmd.commands.arguments import Arguments
from gitcmd.commands.base import Command
from gitcmd.commands.constraints import allowed_values, conflicts, forbid_values
from gitcmd.commands.entries import (
    flag_option,
    flag_or_value_option,
    literal,
    operand,
    value_option,
)


class Add(Command, name="add"):
    """``git add [options] [--] [<pathspec>...]``"""

    arguments = Arguments(
        literal("add"),
        flag_option(("all", "A")),
        flag_option(("update", "u")),
        flag_option(("force", "f")),
        flag_option(("dry_run", "n")),
        flag_option(("intent_to_add", "N")),
        flag_option("ignore_removal", negatable=True),
        operand("paths", repeatable=True, separator="--"),
        conflicts("all", "update"),
        forbid_values(all=True, ignore_removal=True),
    )


class Rm(Command, name="rm"):
    """``git rm [options] [--] <pathspec>...``"""

    arguments = Arguments(
        literal("rm"),
        flag_option("force", as_="-f"),
        flag_option("recursive", as_="-r"),
        flag_option("cached"),
        flag_option(("dry_run", "n")),
        operand("paths", repeatable=True, required=True, separator="--"),
    )


class Mv(Command, name="mv"):
    """``git mv --verbose [options] [--] <source>... <destination>``"""

    arguments = Arguments(
        literal("mv"),
        literal("--verbose"),
        flag_option(("force", "f")),
        flag_option(("dry_run", "n")),
        flag_option("k"),
        operand("source", repeatable=True, required=True, separator="--"),
        operand("destination", required=True),
    )


class Clean(Command, name="clean"):
    """``git clean [-f | -ff] [-d] [-x]``"""

    arguments = Arguments(
        literal("clean"),
        flag_option("force"),
        flag_option("force_force", as_="-ff"),
        flag_option("d"),
        flag_option("x"),
        flag_option(("dry_run", "n")),
        conflicts("force", "force_force"),
    )


class Reset(Command, name="reset"):
    """``git reset [--hard | --soft | --mixed] [<commit>]``"""

    arguments = Arguments(
        literal("reset"),
        flag_option("hard"),
        flag_option("soft"),
        flag_option("mixed"),
        operand("commit"),
        conflicts("hard", "soft", "mixed"),
    )


class CheckoutIndex(Command, name="checkout_index"):
    """``git checkout-index [options] [--] [<file>...]``"""

    arguments = Arguments(
        literal("checkout-index"),
        flag_option(("index", "u")),
        flag_option(("all", "a")),
        flag_option(("force", "f")),
        flag_option(("no_create", "n")),
        value_option("prefix", inline=True),
        value_option("stage", inline=True),
        flag_option("temp"),
        flag_option("ignore_skip_worktree_bits"),
        operand("file", repeatable=True, separator="--"),
        allowed_values("stage", ("1", "2", "3", "all")),
        conflicts("all", "file"),
    )


class Commit(Command, name="commit"):
    """``git commit [options]``"""

    arguments = Arguments(
        literal("commit"),
        flag_option(("all", "add_all")),
        flag_option("allow_empty"),
        flag_option("no_verify"),
        flag_option("allow_empty_message"),
        value_option("author", inline=True),
        value_option("message", inline=True, allow_empty=True),
        value_option("date", inline=True, type_=str),
        flag_option("amend", as_=("--amend", "--no-edit")),
        flag_or_value_option("gpg_sign", negatable=True, inline=True),
    )
