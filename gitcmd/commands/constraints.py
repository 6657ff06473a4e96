"""Cross-option constraints checked after all entries are bound."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from gitcmd.constants import ConstraintKind
from gitcmd.exceptions import ConstraintError, SpecificationError


def is_present(value: Any) -> bool:
    """Whether a bound value counts as given.

    None, False and empty collections are absent; everything else, including
    empty strings and zero, is present.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (list, tuple, dict, set, frozenset)):
        return len(value) > 0
    return True


def _quote(names: Iterable[str]) -> str:
    quoted = [repr(name) for name in names]
    if len(quoted) <= 2:
        return " and ".join(quoted)
    return f"{', '.join(quoted[:-1])} and {quoted[-1]}"


def _matches(actual: Any, forbidden: Any) -> bool:
    # True == 1, so booleans and None must match by identity
    if isinstance(forbidden, bool) or forbidden is None:
        return actual is forbidden
    return actual == forbidden


@dataclass(frozen=True)
class Constraint:
    """Base class for constraints over canonical entry names."""

    kind = ConstraintKind.CONFLICTS

    @property
    def names(self) -> tuple[str, ...]:
        raise NotImplementedError

    def resolve(self, canonical: Mapping[str, str]) -> Constraint:
        """Return a copy with aliases replaced by canonical names.

        Raises:
            SpecificationError: If a name is not declared in the specification
        """
        raise NotImplementedError

    def check(self, values: Mapping[str, Any]) -> None:
        """Raise ConstraintError if ``values`` violates this constraint."""
        raise NotImplementedError

    def describe(self) -> str:
        return f"{self.kind}({', '.join(self.names)})"

    def _fail(self, message: str, names: Sequence[str]) -> ConstraintError:
        return ConstraintError(f"{self.kind}: {message}", kind=str(self.kind), names=names)


def _canonical(canonical: Mapping[str, str], name: str, kind: str) -> str:
    try:
        return canonical[name]
    except KeyError:
        raise SpecificationError(f"{kind} references unknown entry {name!r}") from None


def _canonical_group(canonical: Mapping[str, str], names: Sequence[str], kind: str, minimum: int) -> tuple[str, ...]:
    if len(names) < minimum:
        raise SpecificationError(f"{kind} needs at least {minimum} names, got {list(names)!r}")
    resolved = tuple(_canonical(canonical, name, kind) for name in names)
    if len(set(resolved)) != len(resolved):
        raise SpecificationError(f"{kind} lists the same entry twice: {list(names)!r}")
    return resolved


@dataclass(frozen=True)
class Conflicts(Constraint):
    """At most one of the named entries may be present."""

    group: tuple[str, ...]
    kind = ConstraintKind.CONFLICTS

    @property
    def names(self) -> tuple[str, ...]:
        return self.group

    def resolve(self, canonical: Mapping[str, str]) -> Conflicts:
        return Conflicts(_canonical_group(canonical, self.group, self.kind, 2))

    def check(self, values: Mapping[str, Any]) -> None:
        present = [name for name in self.group if is_present(values.get(name))]
        if len(present) > 1:
            raise self._fail(f"cannot specify {_quote(present)} together", present)


@dataclass(frozen=True)
class Requires(Constraint):
    """``name`` must be present whenever ``when`` is present."""

    name: str
    when: str
    kind = ConstraintKind.REQUIRES

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name, self.when)

    def resolve(self, canonical: Mapping[str, str]) -> Requires:
        name, when = _canonical_group(canonical, (self.name, self.when), self.kind, 2)
        return Requires(name, when)

    def check(self, values: Mapping[str, Any]) -> None:
        if is_present(values.get(self.when)) and not is_present(values.get(self.name)):
            raise self._fail(f"{self.name!r} is required when {self.when!r} is given", self.names)

    def describe(self) -> str:
        return f"{self.kind}({self.name}, when={self.when})"


@dataclass(frozen=True)
class RequiresOneOf(Constraint):
    """At least one of the named entries must be present."""

    group: tuple[str, ...]
    kind = ConstraintKind.REQUIRES_ONE_OF

    @property
    def names(self) -> tuple[str, ...]:
        return self.group

    def resolve(self, canonical: Mapping[str, str]) -> RequiresOneOf:
        return RequiresOneOf(_canonical_group(canonical, self.group, self.kind, 1))

    def check(self, values: Mapping[str, Any]) -> None:
        if not any(is_present(values.get(name)) for name in self.group):
            raise self._fail(f"at least one of {_quote(self.group)} must be given", self.group)


@dataclass(frozen=True)
class RequiresExactlyOneOf(Constraint):
    """Exactly one of the named entries must be present."""

    group: tuple[str, ...]
    kind = ConstraintKind.REQUIRES_EXACTLY_ONE_OF

    @property
    def names(self) -> tuple[str, ...]:
        return self.group

    def resolve(self, canonical: Mapping[str, str]) -> RequiresExactlyOneOf:
        return RequiresExactlyOneOf(_canonical_group(canonical, self.group, self.kind, 2))

    def check(self, values: Mapping[str, Any]) -> None:
        present = [name for name in self.group if is_present(values.get(name))]
        if not present:
            raise self._fail(f"exactly one of {_quote(self.group)} must be given, got none", self.group)
        if len(present) > 1:
            raise self._fail(f"exactly one of {_quote(self.group)} must be given, got {_quote(present)}", present)


@dataclass(frozen=True)
class ForbidValues(Constraint):
    """The named entries may not hold all of the given values at once."""

    combination: tuple[tuple[str, Any], ...]
    kind = ConstraintKind.FORBID_VALUES

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.combination)

    def resolve(self, canonical: Mapping[str, str]) -> ForbidValues:
        names = _canonical_group(canonical, self.names, self.kind, 2)
        return ForbidValues(tuple(zip(names, (value for _, value in self.combination), strict=True)))

    def check(self, values: Mapping[str, Any]) -> None:
        if all(_matches(values.get(name), forbidden) for name, forbidden in self.combination):
            combination = ", ".join(f"{name}={forbidden!r}" for name, forbidden in self.combination)
            raise self._fail(f"cannot combine {combination}", self.names)

    def describe(self) -> str:
        return f"{self.kind}({', '.join(f'{n}={v!r}' for n, v in self.combination)})"


@dataclass(frozen=True)
class AllowedValues(Constraint):
    """A present value (each element, for lists) must be one of ``values``."""

    name: str
    values: tuple[Any, ...]
    kind = ConstraintKind.ALLOWED_VALUES

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name,)

    def resolve(self, canonical: Mapping[str, str]) -> AllowedValues:
        if not self.values:
            raise SpecificationError(f"{self.kind} for {self.name!r} needs at least one value")
        return AllowedValues(_canonical(canonical, self.name, self.kind), self.values)

    def check(self, values: Mapping[str, Any]) -> None:
        value = values.get(self.name)
        if not is_present(value):
            return
        allowed = {str(item) for item in self.values}
        items = value if isinstance(value, (list, tuple)) else [value]
        rejected = [item for item in items if str(item) not in allowed]
        if rejected:
            choices = ", ".join(repr(str(item)) for item in self.values)
            got = ", ".join(repr(str(item)) for item in rejected)
            raise self._fail(f"{self.name!r} must be one of {choices} (got {got})", self.names)

    def describe(self) -> str:
        return f"{self.kind}({self.name}, {list(self.values)!r})"


def conflicts(*names: str) -> Conflicts:
    return Conflicts(names)


def requires(name: str, *, when: str) -> Requires:
    return Requires(name, when)


def requires_one_of(*names: str) -> RequiresOneOf:
    return RequiresOneOf(names)


def requires_exactly_one_of(*names: str) -> RequiresExactlyOneOf:
    return RequiresExactlyOneOf(names)


def forbid_values(**combination: Any) -> ForbidValues:
    """Forbid one combination of values, e.g. ``forbid_values(all=True, ignore_removal=True)``."""
    return ForbidValues(tuple(combination.items()))


def allowed_values(name: str, values: Iterable[Any]) -> AllowedValues:
    return AllowedValues(name, tuple(values))
