"""Command base class: binds arguments, runs git, classifies the exit status."""

from __future__ import annotations

import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import IO, Any, ClassVar, Protocol

from gitcmd.commands.arguments import Arguments
from gitcmd.commands.bound import Bound
from gitcmd.commands.registry import register
from gitcmd.constants import ExecutionState
from gitcmd.exceptions import FailedError, GitTimeoutError, SignaledError, SpecificationError
from gitcmd.logging import get_command_logger, get_logger
from gitcmd.result import CommandLineResult

logger = get_logger("commands.base")


class CommandRunner(Protocol):
    """What a command needs from its execution context."""

    def command(self, *tokens: str, raise_on_failure: bool = ..., **options: Any) -> CommandLineResult: ...


def validate_exit_status_range(statuses: Any) -> range:
    """Check an accepted exit-status range.

    Raises:
        SpecificationError: If ``statuses`` is not a non-empty, step-1 range
    """
    if not isinstance(statuses, range):
        raise SpecificationError(f"allowed exit status expects a range, got {type(statuses).__name__}")
    if statuses.step != 1:
        raise SpecificationError(f"allowed exit status range must have step 1, got {statuses!r}")
    if len(statuses) == 0:
        raise SpecificationError(f"allowed exit status range must not be empty, got {statuses!r}")
    return statuses


def classify(result: CommandLineResult, accepted: range) -> ExecutionState:
    """Map a finished process to its terminal execution state."""
    status = result.status
    if status.timed_out:
        return ExecutionState.TIMED_OUT
    if status.signaled:
        return ExecutionState.SIGNALED
    if status.exitstatus in accepted:
        return ExecutionState.SUCCEEDED
    return ExecutionState.FAILED_EXIT_STATUS


class Command:
    """Base class for git commands.

    Subclasses declare their command line and, when git uses non-zero exit
    codes for success, the accepted range::

        class Numstat(Command, name="diff.numstat"):
            arguments = Arguments(literal("diff"), literal("--numstat"), ...)
            allowed_exit_status = range(0, 2)

    Calling a command binds the arguments (raising ArgumentError before any
    process starts), runs git through the execution context with
    ``raise_on_failure=False`` and raises FailedError, SignaledError or
    GitTimeoutError unless the exit status is in the accepted range.
    """

    name: ClassVar[str | None] = None
    arguments: ClassVar[Arguments | None] = None
    allowed_exit_status: ClassVar[range] = range(0, 1)

    def __init_subclass__(cls, name: str | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("arguments") is not None and not isinstance(cls.arguments, Arguments):
            raise SpecificationError(f"{cls.__qualname__}.arguments must be an Arguments instance")
        cls.allowed_exit_status = validate_exit_status_range(cls.allowed_exit_status)
        if name is not None:
            cls.name = name
            register(name, cls)

    @classmethod
    def allow_exit_status(cls, first: int | range, last: int | None = None) -> None:
        """Set the accepted exit statuses.

        ``allow_exit_status(0, 7)`` and ``allow_exit_status(range(0, 8))``
        both accept 0 through 7 inclusive.

        Raises:
            SpecificationError: If the bounds do not form a non-empty range
        """
        if last is None:
            statuses = first
        elif all(isinstance(bound, int) and not isinstance(bound, bool) for bound in (first, last)):
            statuses = range(first, last + 1)
        else:
            raise SpecificationError(f"allowed exit status bounds must be integers, got {first!r} and {last!r}")
        cls.allowed_exit_status = validate_exit_status_range(statuses)

    @classmethod
    def spec(cls) -> Arguments:
        """Return the command's Arguments.

        Raises:
            SpecificationError: If the class does not declare arguments
        """
        if cls.arguments is None:
            raise SpecificationError(f"arguments not defined for {cls.__qualname__}")
        return cls.arguments

    def __init__(self, execution_context: CommandRunner) -> None:
        self.execution_context = execution_context
        self.logger = get_command_logger(self.name or type(self).__name__)

    def call(self, *args: Any, **kwargs: Any) -> CommandLineResult:
        """Run the command.

        Args:
            *args: Operand values
            **kwargs: Option values by name or alias

        Returns:
            The CommandLineResult, when the exit status is accepted

        Raises:
            ArgumentError: If the arguments are invalid (no process is started)
            FailedError: If the exit status is outside the accepted range
            SignaledError: If git was terminated by a signal
            GitTimeoutError: If git was killed after its timeout
        """
        return self.execute(self.bind(*args, **kwargs))

    __call__ = call

    def bind(self, *args: Any, **kwargs: Any) -> Bound:
        return self.spec().bind(*args, **kwargs)

    def execute(self, bound: Bound, **execution_options: Any) -> CommandLineResult:
        """Run an already bound command and classify the result.

        Args:
            bound: Bound arguments from ``bind``
            **execution_options: Extra execution options, e.g. ``stdin``;
                they override execution options bound from the arguments
        """
        options = {**bound.execution_options, **execution_options}
        self.logger.debug(f"{ExecutionState.EXECUTING}: {' '.join(bound)}", extra={"state": ExecutionState.EXECUTING})
        result = self.execution_context.command(*bound, raise_on_failure=False, **options)
        self.validate_exit_status(result, timeout=options.get("timeout"))
        return result

    def validate_exit_status(self, result: CommandLineResult, timeout: float | None = None) -> None:
        """Raise unless ``result`` ended in the SUCCEEDED state.

        Args:
            result: Finished process result
            timeout: Timeout requested for the call; the limit recorded on
                ``result.status`` takes precedence when present
        """
        state = classify(result, self.allowed_exit_status)
        self.logger.debug(f"{state}: {result.status}", extra={"state": state})
        if state is ExecutionState.TIMED_OUT:
            recorded = result.status.timeout
            raise GitTimeoutError(result, recorded if recorded is not None else timeout)
        if state is ExecutionState.SIGNALED:
            raise SignaledError(result)
        if state is ExecutionState.FAILED_EXIT_STATUS:
            raise FailedError(result)

    @contextmanager
    def with_stdin(self, content: str | bytes) -> Iterator[IO[bytes]]:
        """Yield a pipe whose read end receives ``content``.

        A background thread writes the content so git can consume stdin while
        its output is being read. The thread stops on its own once the content
        is written or git closes its end of the pipe, and it is joined before
        this context exits.
        """
        data = content.encode("utf-8") if isinstance(content, str) else content
        read_fd, write_fd = os.pipe()
        reader = os.fdopen(read_fd, "rb")
        writer = os.fdopen(write_fd, "wb")
        thread = threading.Thread(
            target=_write_stdin,
            args=(writer, data),
            name=f"gitcmd-stdin-{self.name or type(self).__name__}",
            daemon=True,
        )
        thread.start()
        try:
            yield reader
        finally:
            # Closing the read end first unblocks a writer git never drained
            reader.close()
            thread.join()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.execution_context!r})"


def _write_stdin(writer: IO[bytes], data: bytes) -> None:
    try:
        with writer:
            writer.write(data)
    except OSError as e:
        # BrokenPipeError included: git stopped reading, which is not an error
        logger.debug(f"stdin writer stopped early: {e}")
