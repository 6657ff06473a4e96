"""Result types produced by running a git process."""

from __future__ import annotations

import shlex
import signal
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from gitcmd.constants import MAX_OUTPUT_CHARS


@dataclass(frozen=True)
class ProcessStatus:
    """How a git process terminated.

    Attributes:
        exitstatus: Exit code, or None when the process was killed by a signal
        termsig: Signal number that terminated the process, if any
        timed_out: True when the process was killed for exceeding its timeout
        pid: Process id, when known
        timeout: Seconds the process was allowed to run, when it timed out
    """

    exitstatus: int | None
    termsig: int | None = None
    timed_out: bool = False
    pid: int | None = None
    timeout: float | None = None

    @classmethod
    def from_returncode(
        cls,
        returncode: int,
        timed_out: bool = False,
        pid: int | None = None,
        timeout: float | None = None,
    ) -> ProcessStatus:
        """Build a status from a ``subprocess`` return code.

        Negative return codes mean the process was terminated by that signal.
        """
        timeout = timeout if timed_out else None
        if returncode < 0:
            return cls(exitstatus=None, termsig=-returncode, timed_out=timed_out, pid=pid, timeout=timeout)
        return cls(exitstatus=returncode, timed_out=timed_out, pid=pid, timeout=timeout)

    @property
    def signaled(self) -> bool:
        return self.termsig is not None

    @property
    def success(self) -> bool:
        return self.exitstatus == 0 and not self.signaled

    def __str__(self) -> str:
        prefix = f"pid {self.pid} " if self.pid is not None else ""
        if self.termsig is not None:
            try:
                name = signal.Signals(self.termsig).name
            except ValueError:
                name = "signal"
            return f"{prefix}{name} (signal {self.termsig})"
        return f"{prefix}exit {self.exitstatus}"


@dataclass(frozen=True)
class CommandLineResult:
    """Captured output and status of one git invocation."""

    command: tuple[str, ...]
    status: ProcessStatus
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def command_string(self) -> str:
        return shlex.join(self.command)

    @property
    def exitstatus(self) -> int | None:
        return self.status.exitstatus

    @property
    def success(self) -> bool:
        return self.status.success

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "command": list(self.command),
            "exit_status": self.status.exitstatus,
            "signaled": self.status.signaled,
            "timed_out": self.status.timed_out,
            "stdout": self.stdout[:MAX_OUTPUT_CHARS],
            "stderr": self.stderr[:MAX_OUTPUT_CHARS],
            "duration_ms": self.duration_ms,
            "success": self.success,
            "timestamp": self.timestamp.isoformat(),
        }
