"""Bound argument set: the result of binding one call to a specification."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import asdict
from types import MappingProxyType
from typing import Any


class Bound:
    """Immutable tokens plus named values for one command invocation.

    Iterating yields the command-line tokens, so ``ctx.command(*bound)`` runs
    the command. Values are reachable as attributes (``bound.force``), by
    name or alias (``bound["f"]``), or as the typed ``values`` object.
    """

    __slots__ = ("_tokens", "_values", "_aliases", "_execution_options")

    def __init__(
        self,
        tokens: tuple[str, ...],
        values: Any,
        aliases: Mapping[str, str],
        execution_names: tuple[str, ...] = (),
    ) -> None:
        """Initialize the bound set.

        Args:
            tokens: Command-line tokens in specification order
            values: Frozen dataclass instance holding every entry's value
            aliases: Map of every accepted name to its canonical name
            execution_names: Canonical names of execution options
        """
        object.__setattr__(self, "_tokens", tuple(tokens))
        object.__setattr__(self, "_values", values)
        object.__setattr__(self, "_aliases", aliases)
        execution_options = {
            name: getattr(values, name) for name in execution_names if getattr(values, name) is not None
        }
        object.__setattr__(self, "_execution_options", MappingProxyType(execution_options))

    @property
    def tokens(self) -> tuple[str, ...]:
        return self._tokens

    @property
    def values(self) -> Any:
        return self._values

    @property
    def execution_options(self) -> Mapping[str, Any]:
        """Execution options the caller set, without None values."""
        return self._execution_options

    def to_list(self) -> list[str]:
        return list(self._tokens)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self._values)

    def get(self, name: str, default: Any = None) -> Any:
        canonical = self._aliases.get(name)
        if canonical is None:
            return default
        return getattr(self._values, canonical)

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        values = object.__getattribute__(self, "_values")
        try:
            return getattr(values, name)
        except AttributeError:
            raise AttributeError(f"{type(self).__name__!r} has no entry named {name!r}") from None

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token: object) -> bool:
        return token in self._tokens

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Bound):
            return self._tokens == other._tokens and self._values == other._values
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._tokens)

    def __repr__(self) -> str:
        return f"Bound({list(self._tokens)!r})"
