"""``git merge`` subcommands."""

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


class Start(Command, name="merge.start"):
    """``git merge --no-edit [options] <commit>...``"""

    arguments = Arguments(
        literal("merge"),
        literal("--no-edit"),
        flag_option("commit", negatable=True),
        flag_option("squash"),
        flag_option("ff", negatable=True),
        flag_option("ff_only"),
        value_option(("message", "m"), as_="-m"),
        value_option(("file", "F"), as_="-F"),
        value_option("into_name", inline=True),
        value_option(("strategy", "s"), as_="-s"),
        value_option(("strategy_option", "X"), as_="-X", repeatable=True),
        flag_option("verify", negatable=True),
        flag_option("verify_signatures", negatable=True),
        flag_or_value_option("gpg_sign", negatable=True, inline=True),
        flag_option("allow_unrelated_histories"),
        flag_option("rerere_autoupdate", negatable=True),
        flag_option("autostash", negatable=True),
        flag_option("signoff", negatable=True),
        flag_or_value_option("log", negatable=True, inline=True),
        operand("commits", repeatable=True, required=True),
        conflicts("message", "file"),
        conflicts("squash", "commit"),
        conflicts("ff", "ff_only"),
    )


class Abort(Command, name="merge.abort"):
    arguments = Arguments(literal("merge"), literal("--abort"))


class Continue(Command, name="merge.continue"):
    arguments = Arguments(literal("merge"), literal("--continue"))


class Quit(Command, name="merge.quit"):
    arguments = Arguments(literal("merge"), literal("--quit"))
