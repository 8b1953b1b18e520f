"""Tests for structval.formats.json module."""

import json

import pytest

from structval.errors import ContainerCapacityError
from structval.formats.json import from_builtins, from_json, to_builtins, to_json
from structval.params import Params
from structval.values import Array, Bool, Dictionary, Int, Set, String


class TestToBuiltins:
    """Test the kind-tagged builtin form."""

    def test_primitives(self) -> None:
        """Test that primitives are wrapped in their kind."""
        assert to_builtins(Int(5)) == {"Int": "5"}
        assert to_builtins(Bool(False)) == {"Bool": False}
        assert to_builtins(String("x")) == {"String": "x"}

    def test_containers(self) -> None:
        """Test nested containers."""
        value = Dictionary({"b": Array((Int(1),)), "a": Set(frozenset({Int(2)}))})
        assert to_builtins(value) == {
            "Dictionary": {
                "a": {"Set": [{"Int": "2"}]},
                "b": {"Array": [{"Int": "1"}]},
            },
        }

    def test_big_int_kept_exact(self) -> None:
        """Test that integers beyond float precision survive."""
        big = 2**80 + 1
        assert to_builtins(Int(big)) == {"Int": str(big)}


class TestFromBuiltins:
    """Test rebuilding values from builtins."""

    def test_nested(self) -> None:
        """Test a nested structure."""
        data = {"Array": [{"Int": "1"}, {"Dictionary": {"k": {"Bool": True}}}]}
        assert from_builtins(data) == Array((Int(1), Dictionary({"k": Bool(True)})))

    @pytest.mark.parametrize(
        "data",
        [
            {"Float": 1.0},
            {"Int": 1},
            {"Bool": "yes"},
            {"String": 3},
            {"Array": {"a": 1}},
            {"Dictionary": []},
            {"Int": "1", "String": "x"},
            [1, 2],
        ],
    )
    def test_malformed(self, data: object) -> None:
        """Test that malformed data is rejected."""
        with pytest.raises(ValueError):
            from_builtins(data)

    def test_params_bound_capacity(self) -> None:
        """Test that parsed containers respect the configured depth."""
        data = {"Set": [{"Int": "1"}, {"Int": "2"}]}
        with pytest.raises(ContainerCapacityError):
            from_builtins(data, Params(max_depth_containers=0))


class TestJsonText:
    """Test JSON string conversion."""

    def test_round_trip(self) -> None:
        """Test that a value survives to_json/from_json."""
        value = Dictionary(
            {
                "name": String("svc"),
                "ports": Array((Int(80), Int(443))),
                "flags": Set(frozenset({Bool(True), String("x")})),
                "big": Int(-(2**70)),
            },
        )
        assert from_json(to_json(value)) == value

    def test_compact(self) -> None:
        """Test that indent=None gives single-line output."""
        assert to_json(Int(1), indent=None) == '{"Int": "1"}'

    def test_stable_set_order(self) -> None:
        """Test that sets serialize identically regardless of build order."""
        first = Set(frozenset({Int(3), Int(1), Int(2)}))
        second = Set(frozenset({Int(2), Int(3), Int(1)}))
        assert to_json(first) == to_json(second)

    def test_invalid_json(self) -> None:
        """Test that invalid JSON text raises."""
        with pytest.raises(json.JSONDecodeError):
            from_json("{not json")
