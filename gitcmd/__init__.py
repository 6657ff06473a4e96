"""gitcmd - declarative git command wrappers.

Commands declare their command line once; calls are validated and bound
before git runs, and results are checked against each command's accepted
exit statuses.
"""

__version__ = "0.1.0"

from gitcmd.commands import COMMANDS, Arguments, Command, get_command
from gitcmd.config import GitCmdConfig
from gitcmd.constants import ExecutionState
from gitcmd.exceptions import (
    ArgumentError,
    CommandLineError,
    FailedError,
    GitCmdError,
    GitTimeoutError,
    SignaledError,
    SpecificationError,
)
from gitcmd.execution_context import ExecutionContext
from gitcmd.result import CommandLineResult, ProcessStatus

__all__ = [
    "__version__",
    "COMMANDS",
    "Arguments",
    "Command",
    "get_command",
    "GitCmdConfig",
    "ExecutionState",
    "ExecutionContext",
    "CommandLineResult",
    "ProcessStatus",
    # Errors
    "GitCmdError",
    "SpecificationError",
    "ArgumentError",
    "CommandLineError",
    "FailedError",
    "SignaledError",
    "GitTimeoutError",
]
