"""Flag derivation: entry names to git command-line spellings."""

from __future__ import annotations

import keyword
from collections.abc import Sequence

from gitcmd.exceptions import SpecificationError

LONG_PREFIX = "--"
SHORT_PREFIX = "-"
NEGATION_PREFIX = "--no-"

FlagOverride = str | Sequence[str] | None


def option_name(name: str) -> str:
    """Strip the trailing underscore used to dodge Python keywords.

    ``import_`` names the ``--import`` option; ``dry_run`` is unchanged.
    """
    if name.endswith("_") and keyword.iskeyword(name[:-1]):
        return name[:-1]
    return name


def derive_flag(name: str) -> str:
    """Derive the flag for an entry name.

    Single letters keep their case (``A`` -> ``-A``, ``f`` -> ``-f``); longer
    names become long options with hyphens (``dry_run`` -> ``--dry-run``).
    """
    bare = option_name(name)
    if len(bare) == 1:
        return f"{SHORT_PREFIX}{bare}"
    return f"{LONG_PREFIX}{bare.replace('_', '-')}"


def is_short_flag(flag: str) -> bool:
    return flag.startswith(SHORT_PREFIX) and not flag.startswith(LONG_PREFIX)


def negate_flag(flag: str) -> str:
    """Return the ``--no-`` form of a flag (``-f`` -> ``--no-f``)."""
    if flag.startswith(LONG_PREFIX):
        return f"{NEGATION_PREFIX}{flag[len(LONG_PREFIX):]}"
    return f"{NEGATION_PREFIX}{flag[len(SHORT_PREFIX):]}"


def inline_token(flag: str, value: str) -> str:
    """Join a flag and its value into one token (``-n3``, ``--name=x``)."""
    if is_short_flag(flag):
        return f"{flag}{value}"
    return f"{flag}={value}"


def validate_name(name: str) -> None:
    """Reject names that cannot be passed as Python keyword arguments."""
    if not isinstance(name, str) or not name.isidentifier():
        raise SpecificationError(f"Invalid entry name: {name!r}")
    if keyword.iskeyword(name):
        raise SpecificationError(f"Entry name {name!r} is a Python keyword; use {name + '_'!r}")
    if name.startswith("_"):
        raise SpecificationError(f"Entry name {name!r} must not start with an underscore")


def resolve_flag(name: str, override: FlagOverride, negatable: bool = False) -> tuple[str, ...]:
    """Resolve the flag tokens an option emits when set.

    Args:
        name: Canonical entry name
        override: Explicit flag string or token sequence, replacing derivation
        negatable: Whether the option also has a ``--no-`` form

    Returns:
        One token normally, several for a multi-token override

    Raises:
        SpecificationError: If the override is malformed or cannot be negated
    """
    if override is None:
        return (derive_flag(name),)

    tokens = (override,) if isinstance(override, str) else tuple(override)
    if not tokens:
        raise SpecificationError(f"Empty flag override for {name!r}")
    for token in tokens:
        if not isinstance(token, str) or not token.startswith(SHORT_PREFIX) or token in (SHORT_PREFIX, LONG_PREFIX):
            raise SpecificationError(f"Flag override for {name!r} must be option tokens, got {token!r}")

    if negatable:
        if len(tokens) > 1:
            raise SpecificationError(f"Multi-token override for {name!r} cannot be negatable")
        if is_short_flag(tokens[0]):
            # --no-<x> is only derivable from a long flag or a bare single-letter name
            raise SpecificationError(
                f"Short override {tokens[0]!r} for negatable {name!r} has no negated form"
            )
    return tokens
