"""Execution context: the object commands hand their argv to."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from gitcmd.command_line import CommandLine
from gitcmd.config import GitCmdConfig
from gitcmd.constants import STATIC_GLOBAL_OPTS
from gitcmd.exceptions import ArgumentError, NotARepositoryError
from gitcmd.logging import get_logger
from gitcmd.result import CommandLineResult

logger = get_logger("execution_context")

# Execution options accepted by command() and their defaults
COMMAND_OPTION_DEFAULTS: dict[str, Any] = {
    "stdin": None,
    "chdir": None,
    "timeout": None,
    "normalize": True,
    "chomp": True,
    "merge": False,
}


class ExecutionContext:
    """Repository-bound runner for git commands.

    Holds the repository location (work tree, git dir, index file) and the
    configuration, and turns them into the git environment and global options
    used for every command.
    """

    def __init__(
        self,
        work_tree: str | Path | None = None,
        git_dir: str | Path | None = None,
        index_file: str | Path | None = None,
        config: GitCmdConfig | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            work_tree: Working tree directory; exported as GIT_WORK_TREE
            git_dir: Repository directory; exported as GIT_DIR
            index_file: Index file; exported as GIT_INDEX_FILE
            config: Settings; loaded from .gitcmd/config.yaml when omitted
        """
        self.work_tree = Path(work_tree).resolve() if work_tree is not None else None
        self.git_dir = Path(git_dir).resolve() if git_dir is not None else None
        self.index_file = Path(index_file).resolve() if index_file is not None else None
        self.config = config if config is not None else GitCmdConfig.load()
        self._command_line: CommandLine | None = None

    @classmethod
    def for_repository(cls, repo_path: str | Path = ".", config: GitCmdConfig | None = None) -> ExecutionContext:
        """Create a context for an existing repository's working tree.

        Args:
            repo_path: Path to the repository root

        Raises:
            NotARepositoryError: If ``repo_path`` has no ``.git`` entry
        """
        repo = Path(repo_path).resolve()
        # .git is a directory in a normal clone and a file in a worktree
        if not (repo / ".git").exists():
            raise NotARepositoryError(str(repo))
        return cls(work_tree=repo, git_dir=repo / ".git", config=config)

    @property
    def command_line(self) -> CommandLine:
        if self._command_line is None:
            self._command_line = CommandLine(
                env=self.env_overrides(),
                binary_path=self.config.binary_path,
                global_opts=self.global_opts(),
            )
        return self._command_line

    def env_overrides(self) -> dict[str, str | None]:
        """Environment for git; None values unset inherited variables."""
        return {
            "GIT_DIR": str(self.git_dir) if self.git_dir else None,
            "GIT_WORK_TREE": str(self.work_tree) if self.work_tree else None,
            "GIT_INDEX_FILE": str(self.index_file) if self.index_file else None,
            "GIT_SSH": self.config.git_ssh,
            "LC_ALL": self.config.locale,
        }

    def global_opts(self) -> list[str]:
        opts = []
        if self.git_dir:
            opts.append(f"--git-dir={self.git_dir}")
        if self.work_tree:
            opts.append(f"--work-tree={self.work_tree}")
        opts.extend(STATIC_GLOBAL_OPTS)
        return opts

    def command(self, *tokens: str, raise_on_failure: bool = True, **options: Any) -> CommandLineResult:
        """Run ``git <global opts> <tokens>``.

        Args:
            *tokens: Subcommand and its arguments
            raise_on_failure: Raise FailedError on a non-zero exit status
            **options: Execution options (stdin, chdir, timeout, normalize,
                chomp, merge)

        Returns:
            CommandLineResult for the finished process

        Raises:
            ArgumentError: If an unknown execution option is given
        """
        unknown = sorted(set(options) - set(COMMAND_OPTION_DEFAULTS))
        if unknown:
            raise ArgumentError(f"Unknown execution options: {', '.join(unknown)}", names=unknown)

        merged = {**COMMAND_OPTION_DEFAULTS, **options}
        if merged["timeout"] is None:
            merged["timeout"] = self.config.effective_timeout

        return self.command_line.run(*tokens, raise_on_failure=raise_on_failure, **merged)

    def __repr__(self) -> str:
        return f"ExecutionContext(work_tree={self.work_tree}, git_dir={self.git_dir})"
