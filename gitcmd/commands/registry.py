"""Read-only registry of command classes by name."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from gitcmd.exceptions import SpecificationError

if TYPE_CHECKING:
    from gitcmd.commands.base import Command

_commands: dict[str, type[Command]] = {}

# Public view; only register() adds entries
COMMANDS: Mapping[str, type[Command]] = MappingProxyType(_commands)


def register(name: str, command_type: type[Command]) -> None:
    """Register a command class under ``name``.

    Raises:
        SpecificationError: If another class already uses ``name``
    """
    existing = _commands.get(name)
    if existing is not None and existing is not command_type:
        raise SpecificationError(
            f"Command name {name!r} is already registered by {existing.__module__}.{existing.__qualname__}"
        )
    _commands[name] = command_type


def get_command(name: str) -> type[Command]:
    """Look up a command class.

    Raises:
        KeyError: If no command is registered under ``name``
    """
    try:
        return _commands[name]
    except KeyError:
        raise KeyError(f"Unknown command {name!r}; known commands: {', '.join(sorted(_commands))}") from None


def command_names() -> list[str]:
    return sorted(_commands)
