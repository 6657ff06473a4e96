"""Unit tests for the Command base class and the execution contract."""

import signal

import pytest

from gitcmd.commands import Arguments, Command, classify, conflicts, flag_option, literal, operand
from gitcmd.commands.base import validate_exit_status_range
from gitcmd.commands.registry import COMMANDS
from gitcmd.constants import ExecutionState
from gitcmd.exceptions import (
    ArgumentError,
    FailedError,
    GitTimeoutError,
    SignaledError,
    SpecificationError,
)


class Diffish(Command):
    arguments = Arguments(
        literal("diff"),
        flag_option("cached"),
        flag_option("no_index"),
        operand("commit"),
        conflicts("cached", "no_index"),
    )
    allowed_exit_status = range(0, 2)


class Plain(Command):
    arguments = Arguments(literal("status"), flag_option("all"), flag_option("update"), conflicts("all", "update"))


class TestClassify:
    """Tests for exit status classification."""

    @pytest.mark.smoke
    @pytest.mark.parametrize(
        "kwargs,expected",
        [
            ({"exitstatus": 0}, ExecutionState.SUCCEEDED),
            ({"exitstatus": 1}, ExecutionState.SUCCEEDED),
            ({"exitstatus": 2}, ExecutionState.FAILED_EXIT_STATUS),
            ({"exitstatus": None, "termsig": signal.SIGTERM}, ExecutionState.SIGNALED),
            ({"exitstatus": None, "termsig": signal.SIGKILL, "timed_out": True}, ExecutionState.TIMED_OUT),
        ],
        ids=["zero", "one-accepted", "two-failed", "signaled", "timed-out"],
    )
    def test_range_zero_to_one(self, make_result, kwargs: dict, expected: ExecutionState) -> None:
        """Test classification against an accepted range of 0..1."""
        assert classify(make_result(**kwargs), range(0, 2)) is expected

    def test_terminal_states(self) -> None:
        """Test only NOT_STARTED and EXECUTING are non-terminal."""
        assert not ExecutionState.NOT_STARTED.is_terminal
        assert not ExecutionState.EXECUTING.is_terminal
        assert ExecutionState.SUCCEEDED.is_terminal
        assert ExecutionState.TIMED_OUT.is_terminal


class TestExecutionContract:
    """Tests for Command.call against a spy execution context."""

    @pytest.mark.smoke
    def test_accepted_non_zero_status_returns(self, spy_context, make_result) -> None:
        """Test exit status 1 within 0..1 returns the result."""
        spy_context.result = make_result(exitstatus=1, stdout="1\t0\tfile")
        result = Diffish(spy_context).call("HEAD")
        assert result is spy_context.result
        assert spy_context.tokens == ("diff", "HEAD")

    @pytest.mark.smoke
    def test_default_range_raises_failed(self, spy_context, make_result) -> None:
        """Test exit status 1 with the default range raises FailedError with stderr."""
        spy_context.result = make_result(exitstatus=1, stderr="fatal: bad revision")
        with pytest.raises(FailedError) as exc_info:
            Plain(spy_context).call()
        assert "fatal: bad revision" in str(exc_info.value)
        assert exc_info.value.result is spy_context.result

    def test_outside_range_raises_failed(self, spy_context, make_result) -> None:
        """Test exit status 2 outside 0..1 raises FailedError."""
        spy_context.result = make_result(exitstatus=2)
        with pytest.raises(FailedError):
            Diffish(spy_context).call()

    def test_signaled_raises_regardless_of_range(self, spy_context, make_result) -> None:
        """Test a signaled process raises SignaledError."""
        spy_context.result = make_result(exitstatus=None, termsig=signal.SIGTERM)
        with pytest.raises(SignaledError) as exc_info:
            Diffish(spy_context).call()
        assert not isinstance(exc_info.value, GitTimeoutError)

    def test_timed_out_raises_timeout(self, spy_context, make_result) -> None:
        """Test a timed-out process raises GitTimeoutError."""
        spy_context.result = make_result(exitstatus=None, termsig=signal.SIGKILL, timed_out=True)
        with pytest.raises(GitTimeoutError):
            Diffish(spy_context).call()

    def test_timeout_duration_from_status(self, spy_context, make_result) -> None:
        """Test the limit recorded on the status is reported when none was passed."""
        spy_context.result = make_result(exitstatus=None, termsig=signal.SIGKILL, timed_out=True, timeout=30)
        with pytest.raises(GitTimeoutError) as exc_info:
            Diffish(spy_context).call()
        assert exc_info.value.timeout_duration == 30
        assert "timed out after 30s" in str(exc_info.value)

    def test_runs_without_raise_on_failure(self, spy_context) -> None:
        """Test the context is asked not to raise so the command can classify."""
        Plain(spy_context).call(all=True)
        assert spy_context.calls[0]["raise_on_failure"] is False
        assert spy_context.tokens == ("status", "--all")

    @pytest.mark.parametrize(
        "kwargs",
        [{"all": True, "update": True}, {"unknown": True}, {"all": "yes"}],
        ids=["conflict", "unknown-option", "bad-type"],
    )
    def test_invalid_call_never_runs(self, spy_context, kwargs: dict) -> None:
        """Test invalid arguments raise before the context is called."""
        with pytest.raises(ArgumentError):
            Plain(spy_context).call(**kwargs)
        assert spy_context.calls == []

    def test_dunder_call(self, spy_context) -> None:
        """Test a command instance is callable."""
        Plain(spy_context)(update=True)
        assert spy_context.tokens == ("status", "--update")


class TestCommandDeclaration:
    """Tests for declaring Command subclasses."""

    def test_allow_exit_status(self) -> None:
        """Test the accepted range can be set with allow_exit_status."""

        class Fsckish(Command):
            arguments = Arguments(literal("fsck"))

        Fsckish.allow_exit_status(range(0, 8))
        assert Fsckish.allowed_exit_status == range(0, 8)

    def test_allow_exit_status_bounds(self) -> None:
        """Test first and last statuses are both accepted."""

        class Fsckish(Command):
            arguments = Arguments(literal("fsck"))

        Fsckish.allow_exit_status(0, 7)
        assert Fsckish.allowed_exit_status == range(0, 8)
        Fsckish.allow_exit_status(1, 1)
        assert Fsckish.allowed_exit_status == range(1, 2)

    @pytest.mark.parametrize(
        ("first", "last"),
        [(3, 1), (0, "1"), (True, 1)],
        ids=["reversed", "string", "bool"],
    )
    def test_allow_exit_status_bad_bounds(self, first: object, last: object) -> None:
        """Test bounds that do not form a range are rejected."""

        class Fsckish(Command):
            arguments = Arguments(literal("fsck"))

        with pytest.raises(SpecificationError):
            Fsckish.allow_exit_status(first, last)  # type: ignore[arg-type]
        assert Fsckish.allowed_exit_status == range(0, 1)

    @pytest.mark.parametrize(
        "statuses",
        [range(0, 8, 2), range(1, 1), (0, 1)],
        ids=["stepped", "empty", "tuple"],
    )
    def test_invalid_ranges(self, statuses: object) -> None:
        """Test malformed ranges are rejected."""
        with pytest.raises(SpecificationError):
            validate_exit_status_range(statuses)

    def test_invalid_range_on_class(self) -> None:
        """Test a malformed class-level range fails at class creation."""
        with pytest.raises(SpecificationError):

            class Broken(Command):
                allowed_exit_status = range(0, 0)

    def test_arguments_must_be_arguments(self) -> None:
        """Test arguments must be an Arguments instance."""
        with pytest.raises(SpecificationError, match="must be an Arguments instance"):

            class Broken(Command):
                arguments = ["status"]  # type: ignore[assignment]

    def test_spec_without_arguments(self, spy_context) -> None:
        """Test calling a command with no arguments declared fails."""

        class Empty(Command):
            pass

        with pytest.raises(SpecificationError, match="arguments not defined for"):
            Empty(spy_context).call()

    def test_unnamed_not_registered(self) -> None:
        """Test classes declared without a name stay out of the registry."""
        assert Plain not in COMMANDS.values()


class TestWithStdin:
    """Tests for feeding stdin through a pipe."""

    def test_reader_receives_content(self, spy_context) -> None:
        """Test the reader yields exactly the content written."""
        with Plain(spy_context).with_stdin("HEAD\nmain\n") as reader:
            assert reader.read() == b"HEAD\nmain\n"
        assert reader.closed

    def test_large_unread_content(self, spy_context) -> None:
        """Test exiting without reading does not hang on a full pipe."""
        with Plain(spy_context).with_stdin(b"x" * (1024 * 1024)) as reader:
            reader.read(10)
        assert reader.closed

    def test_execute_with_stdin(self, spy_context) -> None:
        """Test execution options passed to execute reach the context."""
        command = Plain(spy_context)
        bound = command.bind()
        with command.with_stdin("abc") as reader:
            command.execute(bound, stdin=reader, normalize=False)
        call = spy_context.calls[0]
        assert call["stdin"] == b"abc"
        assert call["options"]["normalize"] is False
