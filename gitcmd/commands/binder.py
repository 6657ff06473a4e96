"""Binder: turns one call's positionals and keywords into a Bound set."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from gitcmd.commands.bound import Bound
from gitcmd.commands.entries import Operand, to_token
from gitcmd.constants import END_OF_OPTIONS, PREVIOUS_BRANCH
from gitcmd.exceptions import ArgumentError

if TYPE_CHECKING:
    from gitcmd.commands.arguments import Arguments

# Marks an operand slot that received no positional value
_UNSET = object()


class Binder:
    """Binds calls against one Arguments specification.

    A Binder holds no per-call state; ``bind`` can be called concurrently.
    """

    def __init__(self, arguments: Arguments) -> None:
        self.arguments = arguments

    def bind(self, positionals: Sequence[Any], options: Mapping[str, Any]) -> Bound:
        """Validate and bind one call.

        Args:
            positionals: Positional values in call order
            options: Keyword values by canonical name or alias

        Returns:
            Bound set with tokens in specification order

        Raises:
            ArgumentError: If the call is invalid in any way
        """
        self._check_unknown(options)
        self._check_alias_collisions(options)
        given = {self.arguments.aliases[name]: value for name, value in options.items()}
        self._check_required_options(given)
        self._validate_option_values(given)

        # Omitted options stay None here so a negatable flag emits nothing
        supplied = self._bind_operands(positionals, given)
        for option in self.arguments.options:
            supplied[option.name] = given.get(option.name)

        tokens = self._render(supplied)

        for constraint in self.arguments.constraints:
            constraint.check(supplied)

        values = {
            name: entry_value if entry_value is not None else self.arguments.entry(name).unset_value
            for name, entry_value in supplied.items()
        }

        execution_names = tuple(option.name for option in self.arguments.options if option.is_execution_option)
        return Bound(
            tuple(tokens),
            self.arguments.values_type(**values),
            self.arguments.aliases,
            execution_names,
        )

    def _check_unknown(self, options: Mapping[str, Any]) -> None:
        unknown = [name for name in options if name not in self.arguments.aliases]
        if unknown:
            raise ArgumentError(
                f"unknown option(s): {', '.join(repr(name) for name in unknown)}",
                names=unknown,
            )

    def _check_alias_collisions(self, options: Mapping[str, Any]) -> None:
        by_canonical: dict[str, list[str]] = {}
        for name in options:
            by_canonical.setdefault(self.arguments.aliases[name], []).append(name)
        for names in by_canonical.values():
            if len(names) > 1:
                raise ArgumentError(
                    f"Conflicting options: {' and '.join(repr(name) for name in names)}",
                    names=names,
                )

    def _check_required_options(self, given: Mapping[str, Any]) -> None:
        required = [option for option in self.arguments.options if option.required]
        missing = [option.name for option in required if option.name not in given]
        if missing:
            raise ArgumentError(
                f"Required options not provided: {', '.join(repr(name) for name in missing)}",
                names=missing,
            )
        nil = [option.name for option in required if given[option.name] is None and not option.allow_nil]
        if nil:
            raise ArgumentError(
                f"Required options cannot be None: {', '.join(repr(name) for name in nil)}",
                names=nil,
            )

    def _validate_option_values(self, given: Mapping[str, Any]) -> None:
        for option in self.arguments.options:
            if option.name in given:
                option.validate(given[option.name])

    def _bind_operands(self, positionals: Sequence[Any], given: Mapping[str, Any]) -> dict[str, Any]:
        """Allocate positionals to operands and validate the result."""
        by_keyword = [operand for operand in self.arguments.operands if operand.name in given]
        slots = [operand for operand in self.arguments.operands if operand.name not in given]

        positionals = list(positionals)
        if len(positionals) == 1 and isinstance(positionals[0], (list, tuple)):
            if any(operand.repeatable for operand in slots):
                positionals = list(positionals[0])

        allocation, leftover = allocate_positionals(slots, positionals)
        unexpected = [value for value in leftover if value is not None]
        if unexpected:
            raise ArgumentError(f"Unexpected positional arguments: {', '.join(map(str, unexpected))}")

        for operand in by_keyword:
            allocation[operand.name] = given[operand.name]

        values: dict[str, Any] = {}
        for operand in self.arguments.operands:
            value = _operand_value(operand, allocation.get(operand.name, _UNSET))
            operand.validate(value)
            if operand.required and _is_missing(operand, value):
                if operand.repeatable:
                    raise ArgumentError(f"at least one value is required for {operand.name}", names=(operand.name,))
                raise ArgumentError(f"{operand.name} is required", names=(operand.name,))
            values[operand.name] = tuple(operand.values(value)) if operand.repeatable else value
        return values

    def _render(self, values: Mapping[str, Any]) -> list[str]:
        tokens: list[str] = []
        emitted_separators: set[str] = set()
        for entry in self.arguments.entries:
            value = values.get(entry.name) if entry.name else None
            rendered = entry.render(value)
            if not rendered:
                continue
            separator = getattr(entry, "separator", None)
            if isinstance(entry, Operand) and END_OF_OPTIONS not in emitted_separators and separator != END_OF_OPTIONS:
                _check_option_like(entry, value)
            if separator and separator not in emitted_separators:
                tokens.append(separator)
                emitted_separators.add(separator)
            tokens.extend(rendered)
            if entry.boundary_token:
                emitted_separators.add(entry.boundary_token)
        return tokens


def allocate_positionals(
    operands: Sequence[Operand], positionals: Sequence[Any]
) -> tuple[dict[str, Any], list[Any]]:
    """Assign positional values to operand slots.

    Required operands are served first, optional operands take what is left
    in declaration order, and the repeatable operand (if any) takes the rest
    from the middle. ``def f(a, b=1, *middle, c)`` called as ``f(x, y)``
    gives ``a=x, c=y``.

    Returns:
        Mapping of operand name to value (lists for the repeatable operand)
        and the positional values nothing consumed
    """
    variadic_index = next((i for i, operand in enumerate(operands) if operand.repeatable), None)
    pre = list(operands if variadic_index is None else operands[:variadic_index])
    post = [] if variadic_index is None else list(operands[variadic_index + 1 :])

    available = len(positionals)
    post_required = min(available, sum(1 for operand in post if operand.required))
    available -= post_required
    pre_required = min(available, sum(1 for operand in pre if operand.required))
    available -= pre_required

    optional_budget = available
    take: dict[str, bool] = {}
    for operand in [*pre, *post]:
        if operand.required:
            continue
        take[operand.name] = optional_budget > 0
        optional_budget -= 1 if optional_budget > 0 else 0

    allocation: dict[str, Any] = {}
    position = 0
    required_left = pre_required
    for operand in pre:
        if operand.required:
            if required_left:
                allocation[operand.name] = positionals[position]
                position += 1
                required_left -= 1
        elif take[operand.name]:
            allocation[operand.name] = positionals[position]
            position += 1

    if variadic_index is not None:
        variadic = operands[variadic_index]
        middle = optional_budget
        values = list(positionals[position : position + middle])
        position += middle
        if values:
            allocation[variadic.name] = values

    required_left = post_required
    for operand in post:
        if operand.required:
            if required_left:
                allocation[operand.name] = positionals[position]
                position += 1
                required_left -= 1
        elif take[operand.name]:
            allocation[operand.name] = positionals[position]
            position += 1

    return allocation, list(positionals[position:])


def _operand_value(operand: Operand, allocated: Any) -> Any:
    """Resolve the value an operand binds to, applying its default."""
    if allocated is _UNSET or allocated is None:
        return operand.default
    if operand.repeatable:
        items = list(allocated) if isinstance(allocated, (list, tuple)) else [allocated]
        if not items or all(item is None for item in items):
            return operand.default
        return items
    return allocated


def _is_missing(operand: Operand, value: Any) -> bool:
    if operand.repeatable:
        return not operand.values(value)
    return value is None and not operand.allow_nil


def _check_option_like(operand: Operand, value: Any) -> None:
    """Reject operand values git would parse as options.

    A bare ``-`` is git's shorthand for the previous branch and is allowed.
    """
    offending = [
        to_token(item)
        for item in operand.values(value)
        if isinstance(item, str) and item.startswith("-") and item != PREVIOUS_BRANCH
    ]
    if not offending:
        return
    quoted = ", ".join(f"'{item}'" for item in offending)
    if operand.repeatable:
        raise ArgumentError(f"operand {operand.name!r} contains option-like values: {quoted}", names=(operand.name,))
    raise ArgumentError(
        f"operand {operand.name!r} value {quoted} looks like a command-line option",
        names=(operand.name,),
    )
