"""``git branch`` subcommands."""

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


class Create(Command, name="branch.create"):
    """``git branch [options] <branch-name> [<start-point>]``"""

    arguments = Arguments(
        literal("branch"),
        flag_option(("force", "f")),
        flag_option("create_reflog"),
        flag_option("recurse_submodules"),
        flag_or_value_option("track", negatable=True, inline=True),
        operand("branch_name", required=True),
        operand("start_point"),
    )


class Delete(Command, name="branch.delete"):
    """``git branch --delete [options] <branch-name>...``

    git exits 1 when only some of the branches could be deleted.
    """

    arguments = Arguments(
        literal("branch"),
        literal("--delete"),
        flag_option(("force", "f")),
        flag_option(("remotes", "r")),
        operand("branch_names", repeatable=True, required=True),
    )
    allowed_exit_status = range(0, 2)


class List(Command, name="branch.list"):
    """``git branch --list [options] [<pattern>...]``"""

    arguments = Arguments(
        literal("branch"),
        literal("--list"),
        value_option("format", inline=True),
        flag_option("all", as_="-a"),
        flag_option("remotes", as_="-r"),
        value_option("sort", inline=True, repeatable=True),
        value_option("contains"),
        value_option("no_contains"),
        value_option("merged"),
        value_option("no_merged"),
        value_option("points_at"),
        operand("patterns", repeatable=True),
        conflicts("all", "remotes"),
    )


class Move(Command, name="branch.move"):
    """``git branch --move [--force] [<old-branch>] <new-branch>``"""

    arguments = Arguments(
        literal("branch"),
        literal("--move"),
        flag_option(("force", "f")),
        operand("old_branch"),
        operand("new_branch", required=True),
    )


class Copy(Command, name="branch.copy"):
    """``git branch --copy [--force] [<old-branch>] <new-branch>``"""

    arguments = Arguments(
        literal("branch"),
        literal("--copy"),
        flag_option(("force", "f")),
        operand("old_branch"),
        operand("new_branch", required=True),
    )


class SetUpstream(Command, name="branch.set_upstream"):
    """``git branch --set-upstream-to=<upstream> [<branch-name>]``"""

    arguments = Arguments(
        literal("branch"),
        value_option(("set_upstream_to", "u"), inline=True, required=True),
        operand("branch_name"),
    )


class UnsetUpstream(Command, name="branch.unset_upstream"):
    arguments = Arguments(
        literal("branch"),
        literal("--unset-upstream"),
        operand("branch_name"),
    )


class ShowCurrent(Command, name="branch.show_current"):
    arguments = Arguments(literal("branch"), literal("--show-current"))
