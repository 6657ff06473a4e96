"""Subprocess runner for the git binary."""

from __future__ import annotations

import os
import shlex
import subprocess
import time
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import IO, Any

from gitcmd.exceptions import (
    ArgumentError,
    FailedError,
    GitTimeoutError,
    ProcessIOError,
    SignaledError,
)
from gitcmd.logging import get_logger
from gitcmd.result import CommandLineResult, ProcessStatus

logger = get_logger("command_line")

StdinSource = IO[Any] | int | str | bytes | None


class CommandLine:
    """Runs git with a fixed environment and fixed global options.

    One CommandLine is shared by every command issued through an
    ExecutionContext; it holds no per-call state.
    """

    def __init__(
        self,
        env: Mapping[str, str | None] | None = None,
        binary_path: str = "git",
        global_opts: Sequence[str] = (),
    ) -> None:
        """Initialize the runner.

        Args:
            env: Environment overrides; a None value removes the variable
            binary_path: Path to (or name of) the git executable
            global_opts: Options inserted between the binary and the subcommand
        """
        self.env = dict(env or {})
        self.binary_path = binary_path
        self.global_opts = tuple(global_opts)

    def run(
        self,
        *args: str,
        stdin: StdinSource = None,
        chdir: str | Path | None = None,
        timeout: float | None = None,
        normalize: bool = True,
        chomp: bool = True,
        merge: bool = False,
        raise_on_failure: bool = True,
    ) -> CommandLineResult:
        """Run git with the given arguments and capture its output.

        Args:
            *args: Arguments following the global options
            stdin: Readable file object or fd to connect to stdin, or a
                str/bytes payload written to stdin
            chdir: Working directory for the process
            timeout: Seconds before the process is killed (None or 0 disables)
            normalize: Replace undecodable bytes instead of preserving them
            chomp: Strip one trailing line ending from stdout and stderr
            merge: Send stderr to stdout
            raise_on_failure: Raise FailedError on a non-zero exit status

        Returns:
            CommandLineResult for the finished process

        Raises:
            ArgumentError: If an argument is not a string
            ProcessIOError: If the process cannot be started
            GitTimeoutError: If the process was killed after ``timeout``
            SignaledError: If the process was terminated by a signal
            FailedError: If ``raise_on_failure`` and the exit status is non-zero
        """
        bad_args = [arg for arg in args if not isinstance(arg, str)]
        if bad_args:
            raise ArgumentError(f"git arguments must be strings, got: {bad_args!r}")

        command = (self.binary_path, *self.global_opts, *args)
        logger.debug(f"Running: {shlex.join(command)}")

        stdin_target, payload = _stdin_arguments(stdin)
        start_time = time.monotonic()
        try:
            process = subprocess.Popen(
                command,
                stdin=stdin_target,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if merge else subprocess.PIPE,
                cwd=chdir,
                env=self._build_env(),
            )
        except OSError as e:
            raise ProcessIOError(f"Failed to start {self.binary_path}: {e}", command) from e

        raw_stdout, raw_stderr, timed_out = _collect_output(process, payload, timeout or None)
        duration_ms = int((time.monotonic() - start_time) * 1000)

        result = CommandLineResult(
            command=command,
            status=ProcessStatus.from_returncode(
                process.returncode, timed_out=timed_out, pid=process.pid, timeout=timeout or None
            ),
            stdout=_decode(raw_stdout, normalize, chomp),
            stderr=_decode(raw_stderr, normalize, chomp),
            duration_ms=duration_ms,
        )
        logger.info(
            f"{result.command_string} exited with status {result.status} ({duration_ms}ms)",
            extra={"argv": list(command), "exit_status": result.status.exitstatus, "duration_ms": duration_ms},
        )
        logger.debug(f"stdout:\n{result.stdout!r}\nstderr:\n{result.stderr!r}")

        if result.status.timed_out:
            raise GitTimeoutError(result, timeout)
        if result.status.signaled:
            raise SignaledError(result)
        if raise_on_failure and not result.status.success:
            raise FailedError(result)
        return result

    def _build_env(self) -> dict[str, str]:
        env = os.environ.copy()
        for key, value in self.env.items():
            if value is None:
                env.pop(key, None)
            else:
                env[key] = value
        return env


def _stdin_arguments(stdin: StdinSource) -> tuple[Any, bytes | None]:
    """Split a stdin source into the Popen ``stdin`` argument and a payload."""
    if isinstance(stdin, str):
        return subprocess.PIPE, stdin.encode("utf-8")
    if isinstance(stdin, bytes):
        return subprocess.PIPE, stdin
    return stdin, None


def _collect_output(
    process: subprocess.Popen[bytes], payload: bytes | None, timeout: float | None
) -> tuple[bytes | None, bytes | None, bool]:
    """Wait for the process, killing it when the timeout expires."""
    try:
        stdout, stderr = process.communicate(input=payload, timeout=timeout)
        return stdout, stderr, False
    except subprocess.TimeoutExpired:
        logger.warning(f"Killing pid {process.pid} after {timeout}s timeout")
        process.kill()
        stdout, stderr = process.communicate()
        return stdout, stderr, True
    except BaseException:
        process.kill()
        process.wait()
        raise


def _decode(data: bytes | None, normalize: bool, chomp: bool) -> str:
    """Decode captured output.

    With ``normalize`` invalid UTF-8 is replaced; without it the raw bytes
    survive as surrogate escapes and can be recovered with
    ``text.encode("utf-8", "surrogateescape")``.
    """
    if not data:
        return ""
    text = data.decode("utf-8", errors="replace" if normalize else "surrogateescape")
    if chomp:
        if text.endswith("\r\n"):
            return text[:-2]
        if text.endswith(("\n", "\r")):
            return text[:-1]
    return text
