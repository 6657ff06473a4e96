"""Unit tests for the Bound argument set."""

import dataclasses

import pytest

from gitcmd.commands import Arguments, execution_option, flag_option, literal, operand, value_option
from gitcmd.commands.bound import Bound


@pytest.fixture
def bound() -> Bound:
    args = Arguments(
        literal("branch"),
        flag_option(("force", "f")),
        value_option("format", inline=True),
        operand("names", repeatable=True),
        execution_option("timeout"),
    )
    return args.bind("a", "b", f=True, timeout=5)


class TestBoundAccess:
    """Tests for reading a Bound set."""

    @pytest.mark.smoke
    def test_iterates_tokens(self, bound: Bound) -> None:
        """Test iteration yields the tokens."""
        assert list(bound) == ["branch", "--force", "a", "b"]
        assert bound.to_list() == ["branch", "--force", "a", "b"]
        assert len(bound) == 4
        assert "--force" in bound

    def test_attribute_access(self, bound: Bound) -> None:
        """Test values are readable as attributes."""
        assert bound.force is True
        assert bound.format is None
        assert bound.names == ("a", "b")

    def test_alias_lookup(self, bound: Bound) -> None:
        """Test item access resolves aliases."""
        assert bound["f"] is True
        assert bound.get("force") is True
        assert bound["missing"] is None
        assert bound.get("missing", "default") == "default"

    def test_unknown_attribute(self, bound: Bound) -> None:
        """Test unknown attributes raise AttributeError."""
        with pytest.raises(AttributeError, match="no entry named 'missing'"):
            _ = bound.missing

    def test_to_dict(self, bound: Bound) -> None:
        """Test to_dict returns every canonical value."""
        assert bound.to_dict() == {"force": True, "format": None, "names": ("a", "b"), "timeout": 5}

    def test_execution_options(self, bound: Bound) -> None:
        """Test execution options are exposed separately."""
        assert dict(bound.execution_options) == {"timeout": 5}

    def test_values_dataclass(self, bound: Bound) -> None:
        """Test the typed values object is a dataclass instance."""
        assert dataclasses.is_dataclass(bound.values)
        assert bound.values.force is True


class TestBoundImmutability:
    """Tests that a Bound set cannot be changed."""

    def test_setattr(self, bound: Bound) -> None:
        """Test attribute assignment is rejected."""
        with pytest.raises(AttributeError, match="immutable"):
            bound.force = False

    def test_delattr(self, bound: Bound) -> None:
        """Test attribute deletion is rejected."""
        with pytest.raises(AttributeError, match="immutable"):
            del bound.force

    def test_tokens_tuple(self, bound: Bound) -> None:
        """Test tokens are a tuple."""
        assert isinstance(bound.tokens, tuple)

    def test_hashable_and_equal(self, bound: Bound) -> None:
        """Test equal bound sets hash the same."""
        other = Bound(bound.tokens, bound.values, {"force": "force"})
        assert other == bound
        assert hash(other) == hash(bound)
        assert repr(bound) == "Bound(['branch', '--force', 'a', 'b'])"
