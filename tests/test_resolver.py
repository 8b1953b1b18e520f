"""Tests for structval.resolver module."""

import pytest

from structval.errors import IndexOutOfBounds, MissingField
from structval.resolver import resolve_named, resolve_positional
from structval.values import Array, Dictionary, Int, String


class TestResolveNamed:
    """Test field lookup by name."""

    def test_present(self) -> None:
        """Test that a present key yields its value."""
        d = Dictionary({"a": Int(1), "b": String("x")})
        assert resolve_named(d, "b") == String("x")

    def test_missing(self) -> None:
        """Test that an absent key raises MissingField with the name."""
        with pytest.raises(MissingField) as exc_info:
            resolve_named(Dictionary({"a": Int(1)}), "b")
        assert exc_info.value.name == "b"
        assert str(exc_info.value) == "Missing field 'b'"


class TestResolvePositional:
    """Test field lookup by position."""

    def test_in_bounds(self) -> None:
        """Test that an index inside the array yields its element."""
        assert resolve_positional(Array((Int(0), Int(1))), 1) == Int(1)

    @pytest.mark.parametrize("index", [2, 5, -1])
    def test_out_of_bounds(self, index: int) -> None:
        """Test that indexes outside the array are rejected."""
        with pytest.raises(IndexOutOfBounds) as exc_info:
            resolve_positional(Array((Int(0), Int(1))), index)
        assert exc_info.value.index == index
        assert exc_info.value.length == 2
