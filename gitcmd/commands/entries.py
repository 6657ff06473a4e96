"""Entry kinds that make up a command's argument specification.

Each entry is a frozen dataclass that validates its own declaration when it
is constructed and knows how to turn a bound value into command-line tokens.
The lowercase factory functions at the bottom are the declaration API::

    Arguments(
        literal("branch"),
        flag_option(("force", "f")),
        value_option("set_upstream_to", inline=True),
        operand("name", required=True),
    )
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar

from gitcmd.commands.flags import (
    FlagOverride,
    inline_token,
    negate_flag,
    resolve_flag,
    validate_name,
)
from gitcmd.constants import END_OF_OPTIONS
from gitcmd.exceptions import ArgumentError, SpecificationError

Names = str | Sequence[str]
Builder = Callable[[Any], str | Sequence[str] | None]
Validator = Callable[[Any], bool]

# Values accepted wherever a single command-line value is expected
SCALAR_TYPES = (str, int, float, os.PathLike)


def to_token(value: Any) -> str:
    """Convert one bound value to a command-line token."""
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return str(value)


def is_scalar(value: Any) -> bool:
    return isinstance(value, SCALAR_TYPES) and not isinstance(value, bool)


def _normalize_names(names: Names) -> tuple[str, ...]:
    result = (names,) if isinstance(names, str) else tuple(names)
    if not result:
        raise SpecificationError("An option needs at least one name")
    for name in result:
        validate_name(name)
    if len(set(result)) != len(result):
        raise SpecificationError(f"Duplicate names in {result!r}")
    return result


@dataclass(frozen=True)
class Entry:
    """Base class for all specification entries."""

    kind: ClassVar[str] = "entry"

    @property
    def names(self) -> tuple[str, ...]:
        return ()

    @property
    def name(self) -> str | None:
        return self.names[0] if self.names else None

    @property
    def unset_value(self) -> Any:
        """Value exposed on the bound set when the caller supplied nothing."""
        return None

    @property
    def is_execution_option(self) -> bool:
        return False

    @property
    def allowed_after_boundary(self) -> bool:
        """Whether this entry may follow a ``--`` token in the declaration."""
        return True

    @property
    def boundary_token(self) -> str | None:
        """The ``--`` token this entry can introduce, if any."""
        return None

    def validate(self, value: Any) -> None:
        """Raise ArgumentError if ``value`` cannot be bound to this entry."""

    def render(self, value: Any) -> list[str]:
        """Tokens for ``value``, excluding any separator."""
        return []

    def describe(self) -> str:
        return self.kind


@dataclass(frozen=True)
class Literal(Entry):
    """A fixed token that is always emitted."""

    token: str
    kind: ClassVar[str] = "literal"

    def __post_init__(self) -> None:
        if not isinstance(self.token, str) or not self.token:
            raise SpecificationError(f"Literal token must be a non-empty string, got {self.token!r}")

    @property
    def boundary_token(self) -> str | None:
        return self.token if self.token == END_OF_OPTIONS else None

    def render(self, value: Any = None) -> list[str]:
        return [self.token]

    def describe(self) -> str:
        return self.token


@dataclass(frozen=True, kw_only=True)
class Option(Entry):
    """Base class for named options.

    Attributes:
        option_names: Canonical name first, then call-time aliases
        as_: Explicit flag token(s) replacing the derived flag
        required: Caller must pass the option
        allow_nil: Caller may pass None (only meaningful with ``required``)
        type_: Type or tuple of types the value must be an instance of
        validator: Callable returning truthy for acceptable values
    """

    option_names: tuple[str, ...]
    as_: FlagOverride = None
    required: bool = False
    allow_nil: bool = False
    type_: type | tuple[type, ...] | None = None
    validator: Validator | None = None
    flag: tuple[str, ...] = field(init=False, default=())

    kind: ClassVar[str] = "option"
    multi_token_override: ClassVar[bool] = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "option_names", _normalize_names(self.option_names))
        if self.type_ is not None and self.validator is not None:
            raise SpecificationError(f"cannot specify both type_ and validator for {self.name!r}")
        if self.as_ is not None and not isinstance(self.as_, str) and not self.multi_token_override:
            raise SpecificationError(f"Multi-token as_ is only supported for flag options ({self.name!r})")
        object.__setattr__(self, "flag", self._resolve_flag())

    def _resolve_flag(self) -> tuple[str, ...]:
        return resolve_flag(self.name, self.as_, negatable=getattr(self, "negatable", False))

    @property
    def names(self) -> tuple[str, ...]:
        return self.option_names

    @property
    def aliases(self) -> tuple[str, ...]:
        return self.option_names[1:]

    @property
    def allowed_after_boundary(self) -> bool:
        return False

    def validate(self, value: Any) -> None:
        if value is None:
            return
        if self.type_ is not None and not isinstance(value, self.type_):
            expected = self.type_ if isinstance(self.type_, tuple) else (self.type_,)
            raise ArgumentError(
                f"Invalid value for option {self.name!r}: expected {' or '.join(t.__name__ for t in expected)}, "
                f"got {type(value).__name__}",
                names=(self.name,),
            )
        if self.validator is not None and not self.validator(value):
            raise ArgumentError(f"Invalid value for option {self.name!r}: {value!r}", names=(self.name,))
        self.validate_value(value)

    def validate_value(self, value: Any) -> None:
        """Kind-specific checks for a non-None value."""

    def _invalid(self, expected: str, value: Any) -> ArgumentError:
        return ArgumentError(
            f"Option {self.name!r} expects {expected}, got {value!r}",
            names=(self.name,),
        )

    def describe(self) -> str:
        return " ".join(self.flag)


@dataclass(frozen=True, kw_only=True)
class FlagOption(Option):
    """Boolean option: ``True`` emits the flag, ``False`` the negation if any."""

    negatable: bool = False

    kind: ClassVar[str] = "flag_option"
    multi_token_override: ClassVar[bool] = True

    @property
    def unset_value(self) -> Any:
        return False

    def validate_value(self, value: Any) -> None:
        if not isinstance(value, bool):
            raise self._invalid("True or False", value)

    def render(self, value: Any) -> list[str]:
        if value is True:
            return list(self.flag)
        if value is False and self.negatable:
            return [negate_flag(self.flag[0])]
        return []

    def describe(self) -> str:
        if self.negatable:
            return f"{self.flag[0]} / {negate_flag(self.flag[0])}"
        return super().describe()


@dataclass(frozen=True, kw_only=True)
class ValueOption(Option):
    """Option carrying a value.

    Attributes:
        inline: Emit ``--flag=value`` (``-nvalue`` for short flags)
        repeatable: Accept a sequence and emit the option once per value
        allow_empty: Emit empty strings instead of skipping them
        as_operand: Emit the values as bare operands (keyword-only operand)
        separator: Token emitted before the operand values (``as_operand`` only)
    """

    inline: bool = False
    repeatable: bool = False
    allow_empty: bool = False
    as_operand: bool = False
    separator: str | None = None

    kind: ClassVar[str] = "value_option"

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.inline and self.as_operand:
            raise SpecificationError(f"inline and as_operand cannot both be true for {self.name!r}")
        if self.separator is not None and not self.as_operand:
            raise SpecificationError(f"separator is only valid with as_operand=True for {self.name!r}")

    @property
    def allowed_after_boundary(self) -> bool:
        return self.as_operand

    @property
    def boundary_token(self) -> str | None:
        return self.separator if self.separator == END_OF_OPTIONS else None

    def _values(self, value: Any) -> list[Any]:
        if self.repeatable and isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    def validate_value(self, value: Any) -> None:
        if isinstance(value, (list, tuple)) and not self.repeatable:
            raise self._invalid("a single value (declare repeatable=True to pass a list)", value)
        for item in self._values(value):
            if not is_scalar(item):
                raise self._invalid("a string, number, or path", item)

    def render(self, value: Any) -> list[str]:
        if value is None:
            return []
        tokens: list[str] = []
        for item in self._values(value):
            text = to_token(item)
            if text == "" and not self.allow_empty:
                continue
            if self.as_operand:
                tokens.append(text)
            elif self.inline:
                tokens.append(inline_token(self.flag[0], text))
            else:
                tokens.extend((self.flag[0], text))
        return tokens

    def describe(self) -> str:
        if self.as_operand:
            prefix = f"{self.separator} " if self.separator else ""
            return f"{prefix}<{self.name}>{'...' if self.repeatable else ''}"
        if self.inline:
            return inline_token(self.flag[0], f"<{self.name}>")
        return f"{self.flag[0]} <{self.name}>"


@dataclass(frozen=True, kw_only=True)
class FlagOrValueOption(Option):
    """Option that is either a bare flag (``True``) or carries a value."""

    negatable: bool = False
    inline: bool = False

    kind: ClassVar[str] = "flag_or_value_option"

    def validate_value(self, value: Any) -> None:
        if not isinstance(value, bool) and not is_scalar(value):
            raise self._invalid("True, False, or a value", value)

    def render(self, value: Any) -> list[str]:
        flag = self.flag[0]
        if value is True:
            return [flag]
        if value is False:
            return [negate_flag(flag)] if self.negatable else []
        if value is None:
            return []
        text = to_token(value)
        if self.inline:
            return [inline_token(flag, text)]
        return [flag, text]

    def describe(self) -> str:
        flag = self.flag[0]
        value = inline_token(flag, f"<{self.name}>") if self.inline else f"{flag} <{self.name}>"
        return f"{flag} | {value}"


@dataclass(frozen=True, kw_only=True)
class KeyValueOption(Option):
    """Option emitted once per key/value pair (``--trailer key=value``).

    Accepts a mapping (sequence values fan out into one pair each), a
    sequence of ``(key, value)`` pairs (order and duplicates preserved), or a
    single ``(key, value)`` pair. A None value emits the key alone.
    """

    key_separator: str = "="
    inline: bool = False

    kind: ClassVar[str] = "key_value_option"

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.key_separator:
            raise SpecificationError(f"key_separator must not be empty for {self.name!r}")

    def pairs(self, value: Any) -> list[tuple[Any, Any]]:
        if isinstance(value, Mapping):
            pairs: list[tuple[Any, Any]] = []
            for key, item in value.items():
                if isinstance(item, (list, tuple)):
                    pairs.extend((key, sub) for sub in item)
                else:
                    pairs.append((key, item))
            return pairs
        if isinstance(value, (list, tuple)):
            if len(value) == 2 and isinstance(value[0], str):
                return [(value[0], value[1])]
            pairs = []
            for pair in value:
                if not isinstance(pair, (list, tuple)) or len(pair) != 2:
                    raise self._invalid("[key, value] pairs", pair)
                pairs.append((pair[0], pair[1]))
            return pairs
        raise self._invalid("a mapping or a list of [key, value] pairs", value)

    def validate_value(self, value: Any) -> None:
        for key, item in self.pairs(value):
            if not isinstance(key, str) or not key:
                raise self._invalid("non-empty string keys", key)
            if self.key_separator in key:
                raise self._invalid(f"keys without {self.key_separator!r}", key)
            if item is not None and not is_scalar(item):
                raise self._invalid("string, number, or None values", item)

    def render(self, value: Any) -> list[str]:
        if value is None:
            return []
        tokens: list[str] = []
        for key, item in self.pairs(value):
            pair = key if item is None else f"{key}{self.key_separator}{to_token(item)}"
            if self.inline:
                tokens.append(inline_token(self.flag[0], pair))
            else:
                tokens.extend((self.flag[0], pair))
        return tokens

    def describe(self) -> str:
        return f"{self.flag[0]} <key>{self.key_separator}<value>"


@dataclass(frozen=True, kw_only=True)
class CustomOption(Option):
    """Option whose tokens come from a builder callable."""

    builder: Builder

    kind: ClassVar[str] = "custom_option"

    def __post_init__(self) -> None:
        super().__post_init__()
        if not callable(self.builder):
            raise SpecificationError(f"builder for {self.name!r} must be callable")

    def render(self, value: Any) -> list[str]:
        if value is None:
            return []
        try:
            built = self.builder(value)
        except (TypeError, ValueError) as e:
            raise ArgumentError(f"Invalid value for option {self.name!r}: {value!r} ({e})", names=(self.name,)) from e
        if built is None:
            return []
        if isinstance(built, str):
            return [built]
        return [to_token(token) for token in built]

    def describe(self) -> str:
        return f"<{self.name}: custom>"


@dataclass(frozen=True, kw_only=True)
class ExecutionOption(Option):
    """Option forwarded to the process runner instead of the command line."""

    kind: ClassVar[str] = "execution_option"

    @property
    def is_execution_option(self) -> bool:
        return True

    @property
    def allowed_after_boundary(self) -> bool:
        return True

    def describe(self) -> str:
        return f"({self.name})"


@dataclass(frozen=True)
class Operand(Entry):
    """Positional argument.

    Attributes:
        operand_name: Name used for keyword passing and accessors
        repeatable: Accept any number of values (at most one per specification)
        separator: Token emitted once before the first value
        skip_cli: Bind and expose the value without emitting it
        required: At least one non-None value must be supplied
        allow_nil: Accept an explicit None for a required operand
        default: Value used when none is supplied
    """

    operand_name: str
    repeatable: bool = False
    separator: str | None = None
    skip_cli: bool = False
    required: bool = False
    allow_nil: bool = False
    default: Any = None

    kind: ClassVar[str] = "operand"

    def __post_init__(self) -> None:
        validate_name(self.operand_name)
        if self.separator is not None and (not isinstance(self.separator, str) or not self.separator):
            raise SpecificationError(f"separator for {self.operand_name!r} must be a non-empty string")
        if self.repeatable and self.default is not None and not isinstance(self.default, (list, tuple)):
            raise SpecificationError(f"default for repeatable {self.operand_name!r} must be a list")

    @property
    def names(self) -> tuple[str, ...]:
        return (self.operand_name,)

    @property
    def unset_value(self) -> Any:
        if self.repeatable:
            return tuple(self.default or ())
        return self.default

    @property
    def boundary_token(self) -> str | None:
        return self.separator if self.separator == END_OF_OPTIONS else None

    def values(self, value: Any) -> list[Any]:
        if value is None:
            return []
        if self.repeatable:
            return list(value) if isinstance(value, (list, tuple)) else [value]
        return [value]

    def validate(self, value: Any) -> None:
        if isinstance(value, (list, tuple)) and not self.repeatable:
            raise ArgumentError(f"operand {self.operand_name!r} takes a single value, got {value!r}", (self.name,))
        for item in self.values(value):
            if item is None:
                raise ArgumentError(
                    f"None values are not allowed in repeatable operand {self.operand_name!r}",
                    names=(self.name,),
                )
            if not is_scalar(item):
                raise ArgumentError(
                    f"operand {self.operand_name!r} expects a string, number, or path, got {item!r}",
                    names=(self.name,),
                )

    def render(self, value: Any) -> list[str]:
        if self.skip_cli:
            return []
        return [to_token(item) for item in self.values(value)]

    def describe(self) -> str:
        text = f"<{self.operand_name}>{'...' if self.repeatable else ''}"
        if not self.required:
            text = f"[{text}]"
        if self.skip_cli:
            text = f"({text})"
        return f"{self.separator} {text}" if self.separator else text


def literal(token: str) -> Literal:
    return Literal(token)


def flag_option(
    names: Names,
    *,
    negatable: bool = False,
    as_: FlagOverride = None,
    required: bool = False,
    allow_nil: bool = False,
    type_: type | tuple[type, ...] | None = None,
    validator: Validator | None = None,
) -> FlagOption:
    """Declare a boolean option; ``names`` may be a name or ``(name, *aliases)``."""
    return FlagOption(
        option_names=names,
        negatable=negatable,
        as_=as_,
        required=required,
        allow_nil=allow_nil,
        type_=type_,
        validator=validator,
    )


def value_option(
    names: Names,
    *,
    inline: bool = False,
    as_: str | None = None,
    repeatable: bool = False,
    allow_empty: bool = False,
    as_operand: bool = False,
    separator: str | None = None,
    required: bool = False,
    allow_nil: bool = False,
    type_: type | tuple[type, ...] | None = None,
    validator: Validator | None = None,
) -> ValueOption:
    return ValueOption(
        option_names=names,
        inline=inline,
        as_=as_,
        repeatable=repeatable,
        allow_empty=allow_empty,
        as_operand=as_operand,
        separator=separator,
        required=required,
        allow_nil=allow_nil,
        type_=type_,
        validator=validator,
    )


def flag_or_value_option(
    names: Names,
    *,
    negatable: bool = False,
    inline: bool = False,
    as_: str | None = None,
    required: bool = False,
    allow_nil: bool = False,
    type_: type | tuple[type, ...] | None = None,
    validator: Validator | None = None,
) -> FlagOrValueOption:
    return FlagOrValueOption(
        option_names=names,
        negatable=negatable,
        inline=inline,
        as_=as_,
        required=required,
        allow_nil=allow_nil,
        type_=type_,
        validator=validator,
    )


def key_value_option(
    names: Names,
    *,
    key_separator: str = "=",
    inline: bool = False,
    as_: str | None = None,
    required: bool = False,
    allow_nil: bool = False,
) -> KeyValueOption:
    return KeyValueOption(
        option_names=names,
        key_separator=key_separator,
        inline=inline,
        as_=as_,
        required=required,
        allow_nil=allow_nil,
    )


def custom_option(
    names: Names,
    builder: Builder,
    *,
    required: bool = False,
    allow_nil: bool = False,
    type_: type | tuple[type, ...] | None = None,
    validator: Validator | None = None,
) -> CustomOption:
    return CustomOption(
        option_names=names,
        builder=builder,
        required=required,
        allow_nil=allow_nil,
        type_=type_,
        validator=validator,
    )


def execution_option(
    names: Names,
    *,
    type_: type | tuple[type, ...] | None = None,
    validator: Validator | None = None,
) -> ExecutionOption:
    return ExecutionOption(option_names=names, type_=type_, validator=validator)


def operand(
    name: str,
    *,
    repeatable: bool = False,
    separator: str | None = None,
    skip_cli: bool = False,
    required: bool = False,
    allow_nil: bool = False,
    default: Any = None,
) -> Operand:
    return Operand(
        operand_name=name,
        repeatable=repeatable,
        separator=separator,
        skip_cli=skip_cli,
        required=required,
        allow_nil=allow_nil,
        default=default,
    )
