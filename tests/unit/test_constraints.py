"""Unit tests for cross-option constraints."""

import pytest

from gitcmd.commands import (
    Arguments,
    allowed_values,
    conflicts,
    flag_option,
    forbid_values,
    literal,
    operand,
    requires,
    requires_exactly_one_of,
    requires_one_of,
    value_option,
)
from gitcmd.commands.constraints import is_present
from gitcmd.constants import ConstraintKind
from gitcmd.exceptions import ArgumentError, ConstraintError, SpecificationError


class TestIsPresent:
    """Tests for presence semantics."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, False),
            (False, False),
            ((), False),
            ([], False),
            ({}, False),
            (True, True),
            ("", True),
            (0, True),
            (["a"], True),
        ],
        ids=["none", "false", "empty-tuple", "empty-list", "empty-dict", "true", "empty-string", "zero", "list"],
    )
    def test_presence(self, value: object, expected: bool) -> None:
        """Test which values count as given."""
        assert is_present(value) is expected


class TestConflicts:
    """Tests for conflicts."""

    @pytest.fixture
    def args(self) -> Arguments:
        return Arguments(
            literal("reset"),
            flag_option("hard"),
            flag_option("soft"),
            flag_option(("mixed", "m")),
            conflicts("hard", "soft", "m"),
        )

    @pytest.mark.smoke
    def test_violation(self, args: Arguments) -> None:
        """Test two present members raise a ConstraintError."""
        with pytest.raises(ConstraintError) as exc_info:
            args.bind(hard=True, soft=True)
        assert exc_info.value.kind == ConstraintKind.CONFLICTS
        assert exc_info.value.names == ("hard", "soft")
        assert "cannot specify 'hard' and 'soft' together" in str(exc_info.value)

    def test_is_argument_error(self, args: Arguments) -> None:
        """Test constraint errors are argument errors."""
        with pytest.raises(ArgumentError):
            args.bind(hard=True, mixed=True)

    def test_false_is_absent(self, args: Arguments) -> None:
        """Test False does not count toward a conflict."""
        assert args.build(hard=True, soft=False) == ["reset", "--hard"]

    def test_alias_resolved(self, args: Arguments) -> None:
        """Test constraints declared with aliases use canonical names."""
        assert args.constraints[0].names == ("hard", "soft", "mixed")

    def test_needs_two_names(self) -> None:
        """Test a conflict group needs at least two names."""
        with pytest.raises(SpecificationError):
            Arguments(flag_option("hard"), conflicts("hard"))

    def test_operand_participates(self) -> None:
        """Test operands take part in constraints."""
        args = Arguments(
            literal("checkout-index"),
            flag_option("all"),
            operand("file", repeatable=True, separator="--"),
            conflicts("all", "file"),
        )
        assert args.build(all=True) == ["checkout-index", "--all"]
        with pytest.raises(ConstraintError):
            args.bind("a.txt", all=True)


class TestRequires:
    """Tests for requires."""

    @pytest.fixture
    def args(self) -> Arguments:
        return Arguments(
            literal("stash"),
            value_option("pathspec_from_file", inline=True),
            flag_option("pathspec_file_nul"),
            requires("pathspec_from_file", when="pathspec_file_nul"),
        )

    def test_missing_dependency(self, args: Arguments) -> None:
        """Test the trigger without its requirement is rejected."""
        with pytest.raises(ConstraintError, match="'pathspec_from_file' is required when 'pathspec_file_nul'"):
            args.bind(pathspec_file_nul=True)

    def test_satisfied(self, args: Arguments) -> None:
        """Test the pair together is accepted."""
        tokens = args.build(pathspec_file_nul=True, pathspec_from_file="list.txt")
        assert tokens == ["stash", "--pathspec-from-file=list.txt", "--pathspec-file-nul"]

    def test_requirement_alone(self, args: Arguments) -> None:
        """Test the requirement alone is fine."""
        assert args.build(pathspec_from_file="list.txt") == ["stash", "--pathspec-from-file=list.txt"]


class TestRequiresOneOf:
    """Tests for requires_one_of."""

    def test_none_given(self) -> None:
        """Test at least one member must be present."""
        args = Arguments(
            flag_option("batch_all_objects"),
            operand("objects", repeatable=True, skip_cli=True),
            requires_one_of("objects", "batch_all_objects"),
        )
        with pytest.raises(ConstraintError, match="at least one of 'objects' and 'batch_all_objects'"):
            args.bind()
        assert args.build("HEAD") == []


class TestRequiresExactlyOneOf:
    """Tests for requires_exactly_one_of."""

    @pytest.fixture
    def args(self) -> Arguments:
        return Arguments(
            literal("merge"),
            flag_option("abort"),
            flag_option("continue_"),
            flag_option("quit"),
            requires_exactly_one_of("abort", "continue_", "quit"),
        )

    def test_exactly_one(self, args: Arguments) -> None:
        """Test one member is accepted and renders its flag."""
        assert args.build(continue_=True) == ["merge", "--continue"]

    @pytest.mark.parametrize(
        "kwargs,message",
        [({}, "got none"), ({"abort": True, "quit": True}, "got 'abort' and 'quit'")],
        ids=["none", "two"],
    )
    def test_violations(self, args: Arguments, kwargs: dict, message: str) -> None:
        """Test zero or several members are rejected."""
        with pytest.raises(ConstraintError, match=message):
            args.bind(**kwargs)


class TestForbidValues:
    """Tests for forbid_values."""

    @pytest.fixture
    def args(self) -> Arguments:
        return Arguments(
            literal("add"),
            flag_option("all"),
            flag_option("ignore_removal", negatable=True),
            forbid_values(all=True, ignore_removal=True),
        )

    def test_combination_forbidden(self, args: Arguments) -> None:
        """Test the exact combination is rejected."""
        with pytest.raises(ConstraintError, match="cannot combine all=True, ignore_removal=True"):
            args.bind(all=True, ignore_removal=True)

    def test_partial_match_allowed(self, args: Arguments) -> None:
        """Test every named value must match for the rule to fire."""
        assert args.build(all=True, ignore_removal=False) == ["add", "--all", "--no-ignore-removal"]
        assert args.build(ignore_removal=True) == ["add", "--ignore-removal"]

    def test_bool_matched_by_identity(self) -> None:
        """Test True does not match the integer 1."""
        args = Arguments(
            value_option("depth"),
            flag_option("shallow"),
            forbid_values(depth=True, shallow=True),
        )
        assert args.build(depth=1, shallow=True) == ["--depth", "1", "--shallow"]


class TestAllowedValues:
    """Tests for allowed_values."""

    @pytest.fixture
    def args(self) -> Arguments:
        return Arguments(
            literal("checkout-index"),
            value_option("stage", inline=True),
            allowed_values("stage", ("1", "2", "3", "all")),
        )

    @pytest.mark.parametrize("stage", ["all", 2, "3"], ids=["word", "int", "string"])
    def test_allowed(self, args: Arguments, stage: object) -> None:
        """Test values are compared by their string form."""
        assert args.build(stage=stage) == ["checkout-index", f"--stage={stage}"]

    def test_rejected(self, args: Arguments) -> None:
        """Test a value outside the set is rejected."""
        with pytest.raises(ConstraintError, match="'stage' must be one of"):
            args.bind(stage="4")

    def test_absent_skipped(self, args: Arguments) -> None:
        """Test an absent value is not checked."""
        assert args.build() == ["checkout-index"]

    def test_list_checked_per_element(self) -> None:
        """Test every element of a repeatable value is checked."""
        args = Arguments(
            value_option("sort", repeatable=True, inline=True),
            allowed_values("sort", ("refname", "-refname")),
        )
        assert args.build(sort=["refname", "-refname"]) == ["--sort=refname", "--sort=-refname"]
        with pytest.raises(ConstraintError, match="got 'date'"):
            args.bind(sort=["refname", "date"])

    def test_needs_values(self) -> None:
        """Test an empty allowed set is a declaration error."""
        with pytest.raises(SpecificationError):
            Arguments(value_option("stage"), allowed_values("stage", ()))
