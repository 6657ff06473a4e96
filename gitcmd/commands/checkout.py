"""``git checkout`` subcommands: switching branches and restoring files."""

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


class Branch(Command, name="checkout.branch"):
    """``git checkout [options] [<branch>]``

    ``new_branch``, ``new_branch_force`` and ``orphan`` take the name of the
    branch to create; ``branch`` is then the start point.
    """

    arguments = Arguments(
        literal("checkout"),
        flag_option(("force", "f")),
        flag_option(("merge", "m")),
        flag_option(("detach", "d")),
        value_option(("new_branch", "b"), as_="-b"),
        value_option(("new_branch_force", "B"), as_="-B"),
        value_option("orphan"),
        flag_or_value_option("track", negatable=True, inline=True),
        flag_option("guess", negatable=True),
        flag_option("ignore_other_worktrees"),
        flag_option("recurse_submodules", negatable=True),
        operand("branch"),
        conflicts("new_branch", "new_branch_force", "orphan", "detach"),
    )


class Files(Command, name="checkout.files"):
    """``git checkout [options] [<tree-ish>] [--] <pathspec>...``

    ``tree_ish`` must be given positionally but may be None to restore from
    the index.
    """

    arguments = Arguments(
        literal("checkout"),
        flag_option(("force", "f")),
        flag_option("ours"),
        flag_option("theirs"),
        flag_option(("merge", "m")),
        value_option("conflict", inline=True),
        flag_option("overlay", negatable=True),
        value_option("pathspec_from_file", inline=True),
        flag_option("pathspec_file_nul"),
        operand("tree_ish", required=True, allow_nil=True),
        operand("paths", repeatable=True, separator="--"),
        conflicts("ours", "theirs"),
        requires("pathspec_from_file", when="pathspec_file_nul"),
    )
