"""``git cat-file --batch`` commands.

Object names are not put on the command line; they are written to git's
stdin, one per line, which is why the ``objects`` operand is ``skip_cli``.
Output is returned raw (no decoding fixes, trailing newline kept) because
object content can be binary.
"""

from __future__ import annotations

from typing import Any

from gitcmd.commands.arguments import Arguments
from gitcmd.commands.base import Command
from gitcmd.commands.constraints import conflicts, requires_one_of
from gitcmd.commands.entries import flag_option, literal, operand
from gitcmd.result import CommandLineResult


def _batch_arguments(mode: str) -> Arguments:
    return Arguments(
        literal("cat-file"),
        literal(mode),
        flag_option("batch_all_objects"),
        flag_option("unordered"),
        flag_option("follow_symlinks"),
        flag_option("allow_unknown_type"),
        operand("objects", repeatable=True, skip_cli=True),
        conflicts("objects", "batch_all_objects"),
        requires_one_of("objects", "batch_all_objects"),
    )


class _BatchCommand(Command):
    def call(self, *args: Any, **kwargs: Any) -> CommandLineResult:
        bound = self.bind(*args, **kwargs)
        content = "".join(f"{obj}\n" for obj in bound.objects)
        with self.with_stdin(content) as reader:
            return self.execute(bound, stdin=reader, normalize=False, chomp=False)

    __call__ = call


class ObjectMeta(_BatchCommand, name="cat_file.object_meta"):
    """Type and size of each object (``--batch-check``)."""

    arguments = _batch_arguments("--batch-check")


class ObjectContent(_BatchCommand, name="cat_file.object_content"):
    """Header plus raw content of each object (``--batch``)."""

    arguments = _batch_arguments("--batch")
