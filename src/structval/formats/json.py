"""JSON format adapter.

Each value becomes a one-key object naming its kind, so the text decodes
without a schema:

    {"Dictionary": {"a": {"Int": "1"}, "b": {"Array": [{"Bool": true}]}}}

Integers are written as decimal strings to keep arbitrary precision.
"""

from __future__ import annotations

import json
from typing import Any

from structval.params import Params
from structval.values import (
    Array,
    Bool,
    Dictionary,
    Int,
    Key,
    Kind,
    Set,
    String,
    Value,
)


def to_builtins(value: Value) -> dict[str, Any]:
    """Convert a value to its kind-tagged JSON-compatible form."""
    if isinstance(value, Int):
        return {Kind.INT.value: str(value.value)}
    if isinstance(value, Bool | String):
        return {value.kind.value: value.value}
    if isinstance(value, Array):
        return {Kind.ARRAY.value: [to_builtins(item) for item in value]}
    if isinstance(value, Set):
        # Sorted for stable output; Sets are unordered.
        items = [to_builtins(item) for item in value]
        items.sort(key=lambda item: json.dumps(item, sort_keys=True))
        return {Kind.SET.value: items}
    if isinstance(value, Dictionary):
        return {
            Kind.DICTIONARY.value: {
                key.name: to_builtins(item)
                for key, item in sorted(value.items(), key=lambda kv: kv[0].name)
            },
        }
    msg = f"Cannot serialize {type(value).__name__}"
    raise TypeError(msg)


def from_builtins(data: Any, params: Params | None = None) -> Value:
    """Rebuild a value from its kind-tagged form.

    Raises:
        ValueError: If the data is not a well-formed tagged value
        ContainerCapacityError: If a container exceeds the configured depth

    """
    depth = (params or Params()).max_depth_containers

    if not isinstance(data, dict) or len(data) != 1:
        msg = f"Expected an object with exactly one kind tag, got {data!r}"
        raise ValueError(msg)
    ((tag, raw),) = data.items()

    try:
        kind = Kind(tag)
    except ValueError:
        msg = f"Unknown value kind '{tag}'"
        raise ValueError(msg) from None

    if kind is Kind.INT:
        if not isinstance(raw, str):
            msg = f"Int must be encoded as a decimal string, got {raw!r}"
            raise ValueError(msg)
        return Int(int(raw))
    if kind is Kind.BOOL:
        if not isinstance(raw, bool):
            msg = f"Bool must be encoded as true or false, got {raw!r}"
            raise ValueError(msg)
        return Bool(raw)
    if kind is Kind.STRING:
        if not isinstance(raw, str):
            msg = f"String must be encoded as a string, got {raw!r}"
            raise ValueError(msg)
        return String(raw)
    if kind is Kind.DICTIONARY:
        if not isinstance(raw, dict):
            msg = f"Dictionary must be encoded as an object, got {raw!r}"
            raise ValueError(msg)
        return Dictionary(
            {Key(name): from_builtins(item, params) for name, item in raw.items()},
            max_depth=depth,
        )

    if not isinstance(raw, list):
        msg = f"{kind.value} must be encoded as a list, got {raw!r}"
        raise ValueError(msg)
    items = [from_builtins(item, params) for item in raw]
    if kind is Kind.ARRAY:
        return Array(tuple(items), max_depth=depth)
    return Set(frozenset(items), max_depth=depth)


def to_json(value: Value, *, indent: int | None = 2) -> str:
    """Serialize a value to a JSON string.

    Args:
        value: The value to serialize
        indent: JSON indentation level (default 2, None for compact)

    Returns:
        JSON string representation

    """
    return json.dumps(to_builtins(value), indent=indent)


def from_json(s: str, *, params: Params | None = None) -> Value:
    """Deserialize a JSON string to a value.

    Raises:
        json.JSONDecodeError: If the string is not valid JSON
        ValueError: If the JSON is not a well-formed tagged value

    """
    return from_builtins(json.loads(s), params)
