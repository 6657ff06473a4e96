"""gitcmd configuration management using Pydantic."""

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, Field

from gitcmd.constants import DEFAULT_BINARY_PATH, DEFAULT_CONFIG_PATH, DEFAULT_LOCALE


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="info", pattern="^(debug|info|warning|error|critical)$")
    directory: str | None = None
    json_output: bool = False
    console_output: bool = True
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=0, le=100)


class GitCmdConfig(BaseModel):
    """Settings for running the git binary."""

    binary_path: str = Field(default=DEFAULT_BINARY_PATH, min_length=1)
    timeout: float | None = Field(
        default=None,
        ge=0,
        description="Default timeout in seconds for every git command (None or 0 disables)",
    )
    git_ssh: str | None = Field(default=None, description="Value exported as GIT_SSH")
    locale: str = Field(default=DEFAULT_LOCALE, description="Value exported as LC_ALL")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "GitCmdConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Defaults to .gitcmd/config.yaml

        Returns:
            GitCmdConfig instance
        """
        config_path = Path(DEFAULT_CONFIG_PATH) if config_path is None else Path(config_path)

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GitCmdConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            GitCmdConfig instance
        """
        return cls(**data)

    def save(self, config_path: str | Path | None = None) -> None:
        """Save configuration to YAML file.

        Args:
            config_path: Path to save config. Defaults to .gitcmd/config.yaml
        """
        config_path = Path(DEFAULT_CONFIG_PATH) if config_path is None else Path(config_path)

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Configuration as dictionary
        """
        return self.model_dump()

    @property
    def effective_timeout(self) -> float | None:
        """Timeout in seconds, or None when timeouts are disabled."""
        return self.timeout or None
