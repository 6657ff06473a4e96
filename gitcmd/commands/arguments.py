"""Argument specification: the immutable, ordered declaration of a command's CLI."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import field, make_dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from gitcmd.commands.binder import Binder
from gitcmd.commands.constraints import Constraint
from gitcmd.commands.entries import Entry, Operand, Option
from gitcmd.exceptions import SpecificationError

if TYPE_CHECKING:
    from gitcmd.commands.bound import Bound


def _constant(value: Any) -> Callable[[], Any]:
    return lambda: value


class Arguments:
    """Ordered entries and constraints describing one git subcommand.

    Entries are emitted strictly in the order given here. Everything is
    validated on construction, so a malformed declaration fails at import
    time of the command module rather than when the command is called::

        ARGS = Arguments(
            literal("add"),
            flag_option("all"),
            flag_option("update"),
            operand("paths", repeatable=True, separator="--"),
            conflicts("all", "update"),
        )
        ARGS.bind("README.md", all=True).tokens
        # ('add', '--all', '--', 'README.md')
    """

    __slots__ = ("_entries", "_constraints", "_aliases", "_by_name", "_values_type", "_frozen")

    def __init__(self, *items: Entry | Constraint) -> None:
        """Build the specification.

        Args:
            *items: Entries and constraints; constraints may appear anywhere

        Raises:
            SpecificationError: If the declaration is malformed
        """
        self._frozen = False
        entries = tuple(item for item in items if isinstance(item, Entry))
        unknown = [item for item in items if not isinstance(item, (Entry, Constraint))]
        if unknown:
            raise SpecificationError(f"Not an entry or constraint: {unknown!r}")

        aliases: dict[str, str] = {}
        by_name: dict[str, Entry] = {}
        for entry in entries:
            for alias in entry.names:
                if alias in aliases:
                    raise SpecificationError(f"Name {alias!r} is declared more than once")
                aliases[alias] = entry.names[0]
            if entry.names:
                by_name[entry.names[0]] = entry

        _check_single_repeatable_operand(entries)
        _check_options_before_boundary(entries)

        self._entries = entries
        self._aliases = MappingProxyType(aliases)
        self._by_name = MappingProxyType(by_name)
        self._constraints = tuple(item.resolve(aliases) for item in items if isinstance(item, Constraint))
        self._values_type = make_dataclass(
            "Values",
            [(name, Any, field(default_factory=_constant(entry.unset_value))) for name, entry in by_name.items()],
            frozen=True,
        )
        self._frozen = True

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError("Arguments are immutable")
        object.__setattr__(self, name, value)

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return self._constraints

    @property
    def aliases(self) -> Mapping[str, str]:
        """Every accepted keyword name mapped to its canonical name."""
        return self._aliases

    @property
    def names(self) -> tuple[str, ...]:
        """Canonical entry names in declaration order."""
        return tuple(self._by_name)

    @property
    def values_type(self) -> type:
        """Frozen dataclass with one field per canonical entry name."""
        return self._values_type

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(entry for entry in self._entries if isinstance(entry, Option))

    @property
    def operands(self) -> tuple[Operand, ...]:
        return tuple(entry for entry in self._entries if isinstance(entry, Operand))

    def entry(self, name: str) -> Entry:
        """Look up an entry by canonical name or alias.

        Raises:
            KeyError: If no entry has that name
        """
        return self._by_name[self._aliases[name]]

    def bind(self, *positionals: Any, **options: Any) -> Bound:
        """Bind one call's arguments.

        Args:
            *positionals: Operand values in order
            **options: Option values (and operand values) by name or alias

        Returns:
            Bound argument set with tokens and values

        Raises:
            ArgumentError: If the call does not satisfy the specification
        """
        return Binder(self).bind(positionals, options)

    def build(self, *positionals: Any, **options: Any) -> list[str]:
        """Bind and return just the tokens."""
        return self.bind(*positionals, **options).to_list()

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Arguments({' '.join(entry.describe() for entry in self._entries)})"


def _check_single_repeatable_operand(entries: tuple[Entry, ...]) -> None:
    repeatable = [entry.name for entry in entries if isinstance(entry, Operand) and entry.repeatable]
    if len(repeatable) > 1:
        raise SpecificationError(
            f"Only one repeatable operand is allowed, got {', '.join(repr(name) for name in repeatable)}"
        )


def _check_options_before_boundary(entries: tuple[Entry, ...]) -> None:
    boundary_seen = False
    for entry in entries:
        if boundary_seen and not entry.allowed_after_boundary:
            raise SpecificationError(f"option {entry.name!r} cannot be defined after a '--' separator boundary")
        if entry.boundary_token:
            boundary_seen = True
