"""gitcmd exception hierarchy."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gitcmd.result import CommandLineResult


class GitCmdError(Exception):
    """Base exception for all gitcmd errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class SpecificationError(GitCmdError):
    """A command's argument specification is malformed.

    Raised when the specification is built, never when a command is called.
    """

    pass


class ArgumentError(GitCmdError, ValueError):
    """A command was called with arguments its specification rejects.

    Always raised before any subprocess is spawned.
    """

    def __init__(
        self,
        message: str,
        names: Sequence[str] = (),
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.names = tuple(names)


class ConstraintError(ArgumentError):
    """A declared cross-option constraint was violated."""

    def __init__(self, message: str, kind: str, names: Sequence[str]) -> None:
        super().__init__(message, names)
        self.kind = kind


class CommandLineError(GitCmdError):
    """Base error for a git process that ran but did not succeed."""

    def __init__(self, result: CommandLineResult) -> None:
        super().__init__(self._build_message(result))
        self.result = result

    def _build_message(self, result: CommandLineResult) -> str:
        return f"{result.command_string}, status: {result.status}, stderr: {result.stderr!r}"

    @property
    def command(self) -> tuple[str, ...]:
        return self.result.command

    @property
    def status(self):
        return self.result.status

    @property
    def exit_status(self) -> int | None:
        return self.result.status.exitstatus

    @property
    def stdout(self) -> str:
        return self.result.stdout

    @property
    def stderr(self) -> str:
        return self.result.stderr


class FailedError(CommandLineError):
    """The git process exited with a status outside the accepted range."""

    pass


class SignaledError(CommandLineError):
    """The git process was terminated by a signal."""

    pass


class GitTimeoutError(SignaledError):
    """The git process was killed because it exceeded its timeout."""

    def __init__(self, result: CommandLineResult, timeout_duration: float | None = None) -> None:
        # Fall back to the limit the runner recorded on the status
        self.timeout_duration = timeout_duration if timeout_duration is not None else result.status.timeout
        super().__init__(result)

    def _build_message(self, result: CommandLineResult) -> str:
        message = super()._build_message(result)
        if self.timeout_duration is None:
            return message
        return f"{message}, timed out after {self.timeout_duration}s"


class ProcessIOError(GitCmdError):
    """The git process could not be spawned or its pipes failed."""

    def __init__(self, message: str, command: Sequence[str] = ()) -> None:
        super().__init__(message, {"command": list(command)} if command else None)
        self.command = tuple(command)


class UnexpectedResultError(GitCmdError):
    """Git produced output in a shape the caller did not expect."""

    pass


class NotARepositoryError(GitCmdError):
    """A path expected to be a git repository is not one."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Not a git repository: {path}", {"path": path})
        self.path = path
