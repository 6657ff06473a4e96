"""gitcmd structured logging with JSON output and execution context."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import MutableMapping
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from gitcmd.config import LoggingConfig

ROOT_LOGGER_NAME = "gitcmd"

# Fields copied from a record's ``extra`` into JSON output
EXTRA_FIELDS = ("command", "argv", "exit_status", "duration_ms", "repo", "state")

# Context added to every record while set
_log_context: dict[str, Any] = {}


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON-formatted log string
        """
        log_data: dict[str, Any] = {
            "ts": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }

        if _log_context:
            log_data.update(_log_context)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for human-readable output."""

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors.

        Args:
            record: Log record to format

        Returns:
            Colored log string
        """
        color = self.COLORS.get(record.levelname, "")
        timestamp = datetime.now().strftime("%H:%M:%S")

        context_parts = []
        if "repo" in _log_context:
            context_parts.append(str(_log_context["repo"]))
        if hasattr(record, "command"):
            context_parts.append(str(record.command))

        context = f"[{':'.join(context_parts)}] " if context_parts else ""

        return f"{color}{timestamp} {record.levelname:8s}{self.RESET} {context}{record.getMessage()}"


def set_context(repo: str | None = None, **kwargs: Any) -> None:
    """Set context for all subsequent log messages.

    Args:
        repo: Repository path to include in logs
        **kwargs: Additional context fields
    """
    global _log_context
    _log_context = {}

    if repo is not None:
        _log_context["repo"] = repo
    _log_context.update(kwargs)


def clear_context() -> None:
    """Clear all logging context."""
    global _log_context
    _log_context = {}


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the gitcmd namespace.

    Args:
        name: Logger name (typically the dotted module path below ``gitcmd``)

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logging(
    level: str = "info",
    log_dir: str | Path | None = None,
    json_output: bool = True,
    console_output: bool = True,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """Set up logging configuration.

    Args:
        level: Log level (debug, info, warning, error)
        log_dir: Directory for log files
        json_output: Whether to output JSON logs to file
        console_output: Whether to output to console
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(ConsoleFormatter())
        root_logger.addHandler(console_handler)

    if log_dir and json_output:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path / "gitcmd.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(JsonFormatter())
        root_logger.addHandler(file_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    root_logger.propagate = False


def setup_logging_from_config(config: LoggingConfig) -> None:
    """Set up logging from a loaded ``LoggingConfig``."""
    setup_logging(
        level=config.level,
        log_dir=config.directory,
        json_output=config.json_output,
        console_output=config.console_output,
        max_bytes=config.max_bytes,
        backup_count=config.backup_count,
    )


class LoggerAdapter(logging.LoggerAdapter[logging.Logger]):
    """Logger adapter that adds command context to log messages."""

    def process(self, msg: str, kwargs: MutableMapping[str, Any]) -> tuple[str, MutableMapping[str, Any]]:
        """Process log message with extra context.

        Args:
            msg: Log message
            kwargs: Keyword arguments

        Returns:
            Processed message and kwargs
        """
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs


def get_command_logger(command_name: str) -> LoggerAdapter:
    """Get a logger adapter tagged with a git command name.

    Args:
        command_name: Registered command name, e.g. ``"branch.delete"``

    Returns:
        LoggerAdapter with command context
    """
    return LoggerAdapter(get_logger("commands"), {"command": command_name})


# Library default: emit nothing until an application calls setup_logging()
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())
