"""Dynamic value model: a closed tagged union of primitives and containers."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator, Mapping
from collections.abc import Set as AbstractSet
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, dataclass_transform

from structval.errors import ContainerCapacityError
from structval.params import DEFAULT_MAX_DEPTH_CONTAINERS, Params


class Kind(enum.Enum):
    """Discriminant of a dynamic value."""

    INT = "Int"
    BOOL = "Bool"
    STRING = "String"
    ARRAY = "Array"
    DICTIONARY = "Dictionary"
    SET = "Set"


@dataclass(frozen=True)
class Key:
    """String-like dictionary key."""

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            msg = f"Key name must be str, got {type(self.name).__name__}"
            raise TypeError(msg)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Value:
    """Base for dynamic values. Each subclass declares its kind."""

    kind: ClassVar[Kind]

    def __init_subclass__(cls, kind: Kind) -> None:
        """Make the subclass a frozen dataclass tagged with its kind."""
        dataclass(frozen=True)(cls)
        cls.kind = kind


def _check_capacity(kind: Kind, size: int, max_depth: int) -> None:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
        msg = f"max_depth must be a non-negative int, got {max_depth!r}"
        raise ValueError(msg)
    if size > 2**max_depth:
        raise ContainerCapacityError(kind, size, max_depth)


def _check_values(kind: Kind, items: Iterable[Any]) -> None:
    for item in items:
        if not isinstance(item, Value):
            msg = f"{kind.value} entries must be Values, got {type(item).__name__}"
            raise TypeError(msg)


class Int(Value, kind=Kind.INT):
    """Arbitrary precision integer."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            msg = f"Int requires an int, got {type(self.value).__name__}"
            raise TypeError(msg)


class Bool(Value, kind=Kind.BOOL):
    """Boolean."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            msg = f"Bool requires a bool, got {type(self.value).__name__}"
            raise TypeError(msg)


class String(Value, kind=Kind.STRING):
    """Text string."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            msg = f"String requires a str, got {type(self.value).__name__}"
            raise TypeError(msg)


class Array(Value, kind=Kind.ARRAY):
    """Ordered sequence of values with a bounded capacity."""

    elements: tuple[Value, ...]
    max_depth: int = field(default=DEFAULT_MAX_DEPTH_CONTAINERS, compare=False)

    def __post_init__(self) -> None:
        elements = tuple(self.elements)
        _check_values(Kind.ARRAY, elements)
        _check_capacity(Kind.ARRAY, len(elements), self.max_depth)
        object.__setattr__(self, "elements", elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, index: int) -> Value:
        return self.elements[index]

    def __iter__(self) -> Iterator[Value]:
        return iter(self.elements)


class Dictionary(Value, kind=Kind.DICTIONARY):
    """Mapping from unique keys to values with a bounded capacity.

    Keys may be given as ``Key`` or plain ``str``; both are stored as ``Key``.
    Equality ignores insertion order.
    """

    kvs: Mapping[Key, Value]
    max_depth: int = field(default=DEFAULT_MAX_DEPTH_CONTAINERS, compare=False)

    def __post_init__(self) -> None:
        normalized: dict[Key, Value] = {}
        for raw_key, item in self.kvs.items():
            key = raw_key if isinstance(raw_key, Key) else Key(raw_key)
            if key in normalized:
                msg = f"Duplicate dictionary key '{key}'"
                raise ValueError(msg)
            normalized[key] = item
        _check_values(Kind.DICTIONARY, normalized.values())
        _check_capacity(Kind.DICTIONARY, len(normalized), self.max_depth)
        object.__setattr__(self, "kvs", MappingProxyType(normalized))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dictionary):
            return NotImplemented
        return dict(self.kvs) == dict(other.kvs)

    def __hash__(self) -> int:
        return hash(frozenset(self.kvs.items()))

    def __len__(self) -> int:
        return len(self.kvs)

    def get(self, key: Key | str) -> Value | None:
        """Look up a key, returning None when absent."""
        return self.kvs.get(key if isinstance(key, Key) else Key(key))

    def items(self) -> Iterable[tuple[Key, Value]]:
        """Iterate over key/value entries."""
        return self.kvs.items()


class Set(Value, kind=Kind.SET):
    """Unordered collection of distinct values with a bounded capacity."""

    elements: frozenset[Value]
    max_depth: int = field(default=DEFAULT_MAX_DEPTH_CONTAINERS, compare=False)

    def __post_init__(self) -> None:
        elements = frozenset(self.elements)
        _check_values(Kind.SET, elements)
        _check_capacity(Kind.SET, len(elements), self.max_depth)
        object.__setattr__(self, "elements", elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.elements)

    def __contains__(self, item: object) -> bool:
        return item in self.elements


def value_of(obj: Any, params: Params | None = None) -> Value:
    """Lift a tree of Python builtins into a dynamic value.

    Values pass through unchanged. ``list`` and ``tuple`` become Arrays,
    ``set`` and ``frozenset`` become Sets, ``dict`` with ``str`` keys becomes a
    Dictionary.

    Raises:
        TypeError: If the object (or something nested in it) has no dynamic
            representation.
        ContainerCapacityError: If a container exceeds the configured depth.

    """
    depth = (params or Params()).max_depth_containers

    if isinstance(obj, Value):
        return obj
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, int):
        return Int(obj)
    if isinstance(obj, str):
        return String(obj)
    if isinstance(obj, list | tuple):
        return Array(tuple(value_of(item, params) for item in obj), max_depth=depth)
    if isinstance(obj, AbstractSet):
        return Set(frozenset(value_of(item, params) for item in obj), max_depth=depth)
    if isinstance(obj, Mapping):
        return Dictionary({k: value_of(v, params) for k, v in obj.items()}, max_depth=depth)
    msg = f"Cannot convert {type(obj).__name__} to a Value"
    raise TypeError(msg)
