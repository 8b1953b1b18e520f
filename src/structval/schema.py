"""Shape extraction: turn record declarations and annotations into shapes."""

from __future__ import annotations

import logging
from dataclasses import fields, is_dataclass
from typing import Any, TypeAliasType, get_args, get_origin, get_type_hints

from structval.errors import SchemaError
from structval.records import Record
from structval.shapes import (
    ArrayShape,
    BoolShape,
    DictShape,
    EnumShape,
    FieldSpec,
    IntShape,
    NamedShape,
    PositionalShape,
    RecordRef,
    SetShape,
    Shape,
    StrShape,
    UnitShape,
    ValueShape,
    VariantSpec,
)
from structval.values import Value

logger = logging.getLogger(__name__)

# Record class -> shape, filled on first use. Entries are never replaced, so
# concurrent first uses at worst compute equal shapes twice.
_SHAPES: dict[type, Shape] = {}


def _is_named_tuple(py_type: Any) -> bool:
    return (
        isinstance(py_type, type)
        and issubclass(py_type, tuple)
        and hasattr(py_type, "_fields")
    )


def is_record_type(py_type: Any) -> bool:
    """Whether ``py_type`` is a class that converts as a record."""
    if not isinstance(py_type, type) or issubclass(py_type, Value):
        return False
    return issubclass(py_type, Record) or is_dataclass(py_type) or _is_named_tuple(py_type)


def shape_of(py_type: Any) -> Shape:
    """Convert a Python type annotation to a shape.

    Record classes (``Record``/``Choice`` subclasses, plain dataclasses and
    NamedTuples) become ``RecordRef`` so annotations may refer back to the
    class that declares them. Shapes pass through unchanged.

    Raises:
        SchemaError: If the annotation has no dynamic counterpart.

    """
    if isinstance(py_type, Shape):
        return py_type

    origin = get_origin(py_type)
    args = get_args(py_type)

    if isinstance(py_type, TypeAliasType):
        return shape_of(py_type.__value__)

    if py_type is bool:
        return BoolShape()
    if py_type is int:
        return IntShape()
    if py_type is str:
        return StrShape()
    if isinstance(py_type, type) and issubclass(py_type, Value):
        return ValueShape(value_type=py_type)

    if origin is list:
        if len(args) != 1:
            msg = "list type must have an element type"
            raise SchemaError(msg)
        return ArrayShape(element=shape_of(args[0]))

    if origin in (set, frozenset):
        if len(args) != 1:
            msg = f"{origin.__name__} type must have an element type"
            raise SchemaError(msg)
        return SetShape(element=shape_of(args[0]))

    if origin is dict:
        if len(args) != 2:
            msg = "dict type must have key and value types"
            raise SchemaError(msg)
        if args[0] is not str:
            msg = f"dict keys must be str, got {args[0]!r}"
            raise SchemaError(msg)
        return DictShape(value=shape_of(args[1]))

    if origin is tuple:
        if Ellipsis in args:
            msg = f"tuple type must list a fixed number of element types, got {py_type!r}"
            raise SchemaError(msg)
        return PositionalShape(
            record=tuple,
            fields=tuple(FieldSpec(str(i), shape_of(arg)) for i, arg in enumerate(args)),
        )

    if is_record_type(py_type):
        return RecordRef(py_type)

    msg = f"Cannot extract shape from: {py_type!r}"
    raise SchemaError(msg)


def record_shape(cls: type) -> Shape:
    """Get the cached shape of a record class, deriving it on first use."""
    if (cached := _SHAPES.get(cls)) is not None:
        return cached
    if not is_record_type(cls):
        msg = f"{cls!r} is not a record class"
        raise SchemaError(msg)

    shape = _derive(cls)
    logger.debug("Derived %s shape for %s", shape.tag, cls.__qualname__)
    return _SHAPES.setdefault(cls, shape)


def resolve(shape: Shape) -> Shape:
    """Follow a ``RecordRef`` to the shape it names."""
    if isinstance(shape, RecordRef):
        return record_shape(shape.record)
    return shape


def _field_specs(cls: type) -> tuple[FieldSpec, ...]:
    hints = get_type_hints(cls)
    if _is_named_tuple(cls):
        names: tuple[str, ...] = cls._fields
    else:
        names = tuple(f.name for f in fields(cls) if f.init)
    try:
        return tuple(FieldSpec(name, shape_of(hints[name])) for name in names)
    except SchemaError as e:
        msg = f"In {cls.__qualname__}: {e}"
        raise SchemaError(msg) from e


def _derive(cls: type) -> Shape:
    if _is_named_tuple(cls):
        return PositionalShape(record=cls, fields=_field_specs(cls))

    if not (isinstance(cls, type) and issubclass(cls, Record)):
        return NamedShape(record=cls, fields=_field_specs(cls))

    if cls.enum_root is cls:
        cls.sealed = True
        return EnumShape(
            name=cls.__name__,
            variants=tuple(
                VariantSpec(name=name, shape=_variant_shape(variant))
                for name, variant in cls.variants.items()
            ),
        )

    if cls.layout == "unit":
        return UnitShape(record=cls)
    if cls.layout == "positional":
        return PositionalShape(record=cls, fields=_field_specs(cls))
    return NamedShape(record=cls, fields=_field_specs(cls))


def _variant_shape(cls: type[Record]) -> UnitShape | NamedShape | PositionalShape:
    shape = record_shape(cls)
    if not isinstance(shape, UnitShape | NamedShape | PositionalShape):
        msg = f"Variant {cls.__qualname__} must be a unit, named or positional record"
        raise SchemaError(msg)
    return shape
