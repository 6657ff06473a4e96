"""gitcmd constants and enumerations."""

from enum import StrEnum

DEFAULT_BINARY_PATH = "git"
DEFAULT_LOCALE = "en_US.UTF-8"
DEFAULT_CONFIG_PATH = ".gitcmd/config.yaml"

# Output longer than this is truncated in CommandLineResult.to_dict()
MAX_OUTPUT_CHARS = 2000

# Token that ends option parsing for git
END_OF_OPTIONS = "--"

# Operand git reads as the previously checked out branch
PREVIOUS_BRANCH = "-"

# Global options that keep git output stable and machine readable
STATIC_GLOBAL_OPTS: tuple[str, ...] = (
    "-c", "core.quotePath=true",
    "-c", "color.ui=false",
    "-c", "color.advice=false",
    "-c", "color.diff=false",
    "-c", "color.grep=false",
    "-c", "color.push=false",
    "-c", "color.remote=false",
    "-c", "color.showBranch=false",
    "-c", "color.status=false",
    "-c", "color.transport=false",
)  # fmt: skip


class ExecutionState(StrEnum):
    """Lifecycle of a single command invocation."""

    NOT_STARTED = "not_started"
    EXECUTING = "executing"
    SUCCEEDED = "succeeded"
    FAILED_EXIT_STATUS = "failed_exit_status"
    SIGNALED = "signaled"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self not in (ExecutionState.NOT_STARTED, ExecutionState.EXECUTING)


class ConstraintKind(StrEnum):
    """Kinds of cross-option constraints."""

    CONFLICTS = "conflicts"
    REQUIRES = "requires"
    REQUIRES_ONE_OF = "requires_one_of"
    REQUIRES_EXACTLY_ONE_OF = "requires_exactly_one_of"
    FORBID_VALUES = "forbid_values"
    ALLOWED_VALUES = "allowed_values"
