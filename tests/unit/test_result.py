"""Unit tests for process result types."""

import signal

import pytest

from gitcmd.constants import MAX_OUTPUT_CHARS
from gitcmd.result import CommandLineResult, ProcessStatus


class TestProcessStatus:
    """Tests for ProcessStatus."""

    @pytest.mark.smoke
    def test_from_exit_code(self) -> None:
        """Test a normal exit."""
        status = ProcessStatus.from_returncode(1, pid=10)
        assert status.exitstatus == 1
        assert not status.signaled
        assert not status.success
        assert str(status) == "pid 10 exit 1"

    def test_from_negative_code(self) -> None:
        """Test a negative return code is a signal."""
        status = ProcessStatus.from_returncode(-signal.SIGKILL, timed_out=True)
        assert status.exitstatus is None
        assert status.termsig == signal.SIGKILL
        assert status.signaled
        assert status.timed_out
        assert str(status) == "SIGKILL (signal 9)"

    def test_timeout_recorded_only_when_timed_out(self) -> None:
        """Test the timeout limit is kept only for processes that hit it."""
        assert ProcessStatus.from_returncode(-signal.SIGKILL, timed_out=True, timeout=5).timeout == 5
        assert ProcessStatus.from_returncode(0, timeout=5).timeout is None

    def test_success(self) -> None:
        """Test only exit 0 without a signal is success."""
        assert ProcessStatus(exitstatus=0).success


class TestCommandLineResult:
    """Tests for CommandLineResult."""

    def test_command_string_quotes(self) -> None:
        """Test the command string is shell-quoted."""
        result = CommandLineResult(command=("git", "commit", "-m", "two words"), status=ProcessStatus(0))
        assert result.command_string == "git commit -m 'two words'"
        assert result.exitstatus == 0
        assert result.success

    def test_to_dict_truncates(self) -> None:
        """Test to_dict truncates long output."""
        result = CommandLineResult(
            command=("git", "log"),
            status=ProcessStatus(0),
            stdout="x" * (MAX_OUTPUT_CHARS + 100),
        )
        data = result.to_dict()
        assert len(data["stdout"]) == MAX_OUTPUT_CHARS
        assert data["command"] == ["git", "log"]
        assert data["exit_status"] == 0
        assert data["success"] is True
