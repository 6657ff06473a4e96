"""Pytest configuration and fixtures for gitcmd tests."""

import os
import subprocess
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from gitcmd.config import GitCmdConfig
from gitcmd.result import CommandLineResult, ProcessStatus

ResultFactory = Callable[..., CommandLineResult]


def _run_git(*args: str, cwd: Path | None = None) -> None:
    """Run git command safely without shell=True."""
    subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        check=True,
    )


def build_result(
    exitstatus: int | None = 0,
    stdout: str = "",
    stderr: str = "",
    termsig: int | None = None,
    timed_out: bool = False,
    timeout: float | None = None,
    command: tuple[str, ...] = ("git",),
) -> CommandLineResult:
    status = ProcessStatus(exitstatus=exitstatus, termsig=termsig, timed_out=timed_out, pid=4242, timeout=timeout)
    return CommandLineResult(command=command, status=status, stdout=stdout, stderr=stderr)


class SpyExecutionContext:
    """Execution context double that records calls instead of running git."""

    def __init__(self, result: CommandLineResult | None = None) -> None:
        self.result = result or build_result()
        self.calls: list[dict[str, Any]] = []

    def command(self, *tokens: str, raise_on_failure: bool = True, **options: Any) -> CommandLineResult:
        stdin = options.get("stdin")
        self.calls.append(
            {
                "tokens": tokens,
                "raise_on_failure": raise_on_failure,
                "options": options,
                # Drain pipes so stdin writer threads can finish
                "stdin": stdin.read() if hasattr(stdin, "read") else stdin,
            }
        )
        return self.result

    @property
    def tokens(self) -> tuple[str, ...]:
        return self.calls[-1]["tokens"]


@pytest.fixture
def tmp_repo(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary git repository.

    Yields:
        Path to the temporary repository
    """
    orig_dir = os.getcwd()
    os.chdir(tmp_path)

    _run_git("init", "-q", "-b", "main", cwd=tmp_path)
    _run_git("config", "user.email", "test@test.com", cwd=tmp_path)
    _run_git("config", "user.name", "Test", cwd=tmp_path)

    # Create initial commit
    (tmp_path / "README.md").write_text("# Test Repo\n")
    _run_git("add", "-A", cwd=tmp_path)
    _run_git("commit", "-q", "-m", "Initial commit", cwd=tmp_path)

    yield tmp_path

    os.chdir(orig_dir)


@pytest.fixture
def make_result() -> ResultFactory:
    """Factory for CommandLineResult objects.

    Returns:
        Callable taking exitstatus, stdout, stderr, termsig, timed_out, command
    """
    return build_result


@pytest.fixture
def spy_context() -> SpyExecutionContext:
    """Execution context that records calls and returns exit status 0.

    Returns:
        SpyExecutionContext instance
    """
    return SpyExecutionContext()


@pytest.fixture
def default_config() -> GitCmdConfig:
    """Configuration with defaults only, independent of the working directory.

    Returns:
        GitCmdConfig instance
    """
    return GitCmdConfig()
