"""Shape dispatch: the decode and encode rule for every kind of shape."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from collections.abc import Set as AbstractSet
from typing import Any

from structval.errors import ArityMismatch, EncodeError, KindMismatch
from structval.params import Params
from structval.resolver import resolve_named, resolve_positional
from structval.schema import resolve
from structval.shapes import (
    ArrayShape,
    BoolShape,
    DictShape,
    EnumShape,
    IntShape,
    NamedShape,
    PositionalShape,
    SetShape,
    Shape,
    StrShape,
    UnitShape,
    ValueShape,
)
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
from structval.variants import select_variant, wrap_variant


def _require[V: Value](value: Value, cls: type[V]) -> V:
    if not isinstance(value, cls):
        raise KindMismatch(cls.kind.value, value.kind)
    return value


def decode(value: Value, shape: Shape) -> Any:
    """Convert a dynamic value to the native form ``shape`` describes.

    Raises:
        DecodeError: The first failure met in a depth-first, declaration-order
            walk. Nothing is returned partially.

    """
    shape = resolve(shape)

    if isinstance(shape, IntShape):
        return _require(value, Int).value
    if isinstance(shape, BoolShape):
        return _require(value, Bool).value
    if isinstance(shape, StrShape):
        return _require(value, String).value
    if isinstance(shape, ValueShape):
        if shape.value_type is Value:
            return value
        return _require(value, shape.value_type)

    if isinstance(shape, ArrayShape):
        return [decode(item, shape.element) for item in _require(value, Array)]
    if isinstance(shape, SetShape):
        return frozenset(decode(item, shape.element) for item in _require(value, Set))
    if isinstance(shape, DictShape):
        return {
            key.name: decode(item, shape.value)
            for key, item in _require(value, Dictionary).items()
        }

    # Shapes without fields accept any value and discard it.
    if isinstance(shape, UnitShape):
        return shape.construct()
    if isinstance(shape, NamedShape):
        return _decode_named(value, shape)
    if isinstance(shape, PositionalShape):
        return _decode_positional(value, shape)
    if isinstance(shape, EnumShape):
        variant, payload = select_variant(value, shape)
        return decode(value if payload is None else payload, variant.shape)

    msg = f"Unsupported shape: {shape!r}"
    raise TypeError(msg)


def _decode_named(value: Value, shape: NamedShape) -> Any:
    if not shape.fields:
        return shape.construct({})
    dictionary = _require(value, Dictionary)
    return shape.construct(
        {f.name: decode(resolve_named(dictionary, f.name), f.shape) for f in shape.fields},
    )


def _decode_positional(value: Value, shape: PositionalShape) -> Any:
    if shape.arity == 0:
        return shape.construct([])
    if shape.arity == 1:
        # Newtype passthrough: the single field reads the whole value.
        return shape.construct([decode(value, shape.fields[0].shape)])
    array = _require(value, Array)
    if len(array) != shape.arity:
        raise ArityMismatch(shape.arity, len(array))
    return shape.construct(
        [decode(resolve_positional(array, i), f.shape) for i, f in enumerate(shape.fields)],
    )


def _check_instance(obj: Any, shape: UnitShape | NamedShape | PositionalShape) -> None:
    if not isinstance(obj, shape.record):
        msg = f"Expected {shape.record.__qualname__}, got {type(obj).__name__}"
        raise EncodeError(msg)
    if shape.record is tuple and len(obj) != len(shape.fields):
        msg = f"Expected a tuple of length {len(shape.fields)}, got length {len(obj)}"
        raise EncodeError(msg)


def _check_type(obj: Any, expected: type | tuple[type, ...], kind: Kind) -> None:
    if not isinstance(obj, expected) or (kind is Kind.INT and isinstance(obj, bool)):
        msg = f"Cannot encode {type(obj).__name__} as {kind.value}"
        raise EncodeError(msg)


def encode(obj: Any, shape: Shape, params: Params) -> Value:
    """Convert a native object to the dynamic value ``shape`` describes.

    Raises:
        EncodeError: If the object does not fit the shape.
        ContainerCapacityError: If a built container exceeds
            ``params.max_depth_containers``.

    """
    shape = resolve(shape)
    depth = params.max_depth_containers

    if isinstance(shape, IntShape):
        _check_type(obj, int, Kind.INT)
        return Int(obj)
    if isinstance(shape, BoolShape):
        _check_type(obj, bool, Kind.BOOL)
        return Bool(obj)
    if isinstance(shape, StrShape):
        _check_type(obj, str, Kind.STRING)
        return String(obj)
    if isinstance(shape, ValueShape):
        if not isinstance(obj, shape.value_type):
            msg = f"Expected {shape.value_type.__name__}, got {type(obj).__name__}"
            raise EncodeError(msg)
        return obj

    if isinstance(shape, ArrayShape):
        if isinstance(obj, str | bytes) or not isinstance(obj, Sequence):
            msg = f"Cannot encode {type(obj).__name__} as Array"
            raise EncodeError(msg)
        return Array(tuple(encode(item, shape.element, params) for item in obj), max_depth=depth)
    if isinstance(shape, SetShape):
        _check_type(obj, AbstractSet, Kind.SET)
        return Set(frozenset(encode(item, shape.element, params) for item in obj), max_depth=depth)
    if isinstance(shape, DictShape):
        _check_type(obj, Mapping, Kind.DICTIONARY)
        entries: dict[Key, Value] = {}
        for name, item in obj.items():
            _check_type(name, str, Kind.STRING)
            entries[Key(name)] = encode(item, shape.value, params)
        return Dictionary(entries, max_depth=depth)

    if isinstance(shape, UnitShape):
        _check_instance(obj, shape)
        return Dictionary({}, max_depth=depth)
    if isinstance(shape, NamedShape):
        _check_instance(obj, shape)
        return Dictionary(
            {Key(f.name): encode(getattr(obj, f.name), f.shape, params) for f in shape.fields},
            max_depth=depth,
        )
    if isinstance(shape, PositionalShape):
        _check_instance(obj, shape)
        values = shape.field_values(obj)
        if shape.arity == 1:
            return encode(values[0], shape.fields[0].shape, params)
        return Array(
            tuple(encode(v, f.shape, params) for v, f in zip(values, shape.fields, strict=True)),
            max_depth=depth,
        )
    if isinstance(shape, EnumShape):
        variant = shape.variant_for(obj)
        if variant is None:
            msg = f"{type(obj).__name__} is not a variant of {shape.name}"
            raise EncodeError(msg)
        payload = None if variant.is_bare else encode(obj, variant.shape, params)
        return wrap_variant(variant, payload, params)

    msg = f"Unsupported shape: {shape!r}"
    raise TypeError(msg)
