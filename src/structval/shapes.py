"""Shape descriptors: the static structure a conversion follows."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, dataclass_transform

from structval.values import Value


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Shape:
    """Base for shape descriptors."""

    tag: ClassVar[str]

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Make the subclass a frozen dataclass and derive its tag."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.lower().removesuffix("shape")


class IntShape(Shape, tag="int"):
    """Integer leaf: Int ↔ int."""


class BoolShape(Shape, tag="bool"):
    """Boolean leaf: Bool ↔ bool."""


class StrShape(Shape, tag="str"):
    """String leaf: String ↔ str."""


class ValueShape(Shape, tag="value"):
    """Raw passthrough: the dynamic value itself is the native value.

    ``value_type`` narrows the accepted kind, e.g. ``ValueShape(Int)``.
    """

    value_type: type[Value] = Value


class ArrayShape(Shape, tag="array"):
    """Homogeneous Array of any length: list[int] → ArrayShape(element=IntShape())."""

    element: Shape


class SetShape(Shape, tag="set"):
    """Set of elements: frozenset[int] → SetShape(element=IntShape())."""

    element: Shape


class DictShape(Shape, tag="dict"):
    """Dictionary with uniform values: dict[str, int] → DictShape(value=IntShape())."""

    value: Shape


@dataclass(frozen=True)
class FieldSpec:
    """A record field: attribute name plus the shape of its contents."""

    name: str
    shape: Shape


class UnitShape(Shape, tag="unit"):
    """Record carrying no data."""

    record: type

    def construct(self) -> Any:
        return self.record()


class NamedShape(Shape, tag="named"):
    """Record whose fields are keyed by name in a Dictionary."""

    record: type
    fields: tuple[FieldSpec, ...]

    def construct(self, values: dict[str, Any]) -> Any:
        return self.record(**values)


class PositionalShape(Shape, tag="positional"):
    """Record whose fields are laid out by position.

    Field names are only used to read attributes back off the record when
    encoding; they never appear in the dynamic value. A ``tuple`` record is
    built from and read as a plain tuple.
    """

    record: type
    fields: tuple[FieldSpec, ...]

    @property
    def arity(self) -> int:
        return len(self.fields)

    def construct(self, values: list[Any]) -> Any:
        if self.record is tuple:
            return tuple(values)
        return self.record(*values)

    def field_values(self, obj: Any) -> tuple[Any, ...]:
        if self.record is tuple:
            return tuple(obj)
        return tuple(getattr(obj, f.name) for f in self.fields)


@dataclass(frozen=True)
class VariantSpec:
    """A named enum alternative and the shape of its payload."""

    name: str
    shape: UnitShape | NamedShape | PositionalShape

    @property
    def is_bare(self) -> bool:
        """Whether the variant carries no payload and encodes as a bare tag."""
        shape = self.shape
        return isinstance(shape, UnitShape) or (
            isinstance(shape, PositionalShape) and shape.arity == 0
        )

    @property
    def record(self) -> type:
        return self.shape.record


class EnumShape(Shape, tag="enum"):
    """Ordered named variants; exactly one is present in any value."""

    name: str
    variants: tuple[VariantSpec, ...]
    _by_name: dict[str, VariantSpec] = field(
        init=False,
        repr=False,
        compare=False,
        hash=False,
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_name", {v.name: v for v in self.variants})

    def variant(self, name: str) -> VariantSpec | None:
        """Look up a variant by exact name."""
        return self._by_name.get(name)

    def variant_for(self, obj: Any) -> VariantSpec | None:
        """Find the variant whose record class is exactly ``type(obj)``."""
        for variant in self.variants:
            if type(obj) is variant.record:
                return variant
        return None


class RecordRef(Shape, tag="ref"):
    """Deferred reference to a declared record class.

    Resolved through the shape cache when a conversion reaches it, so record
    classes may refer to each other (and to themselves) in annotations.
    """

    record: type
