"""Record declaration bases with automatic registration."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Literal, dataclass_transform

from structval.errors import SchemaError

type Layout = Literal["named", "positional", "unit"]

_LAYOUTS: frozenset[str] = frozenset({"named", "positional", "unit"})


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Record:
    """Base for records converted to and from dynamic values.

    The class keyword ``layout`` picks the wire shape:

    - ``"named"`` (default): fields keyed by name in a Dictionary.
    - ``"positional"``: fields laid out in an Array, in declaration order.
      A single field is encoded as the field itself.
    - ``"unit"``: no fields; any value decodes to the record.

    Example:
        class Point(Record):
            x: int
            y: int

        class Pair(Record, layout="positional"):
            left: int
            right: str

    """

    layout: ClassVar[Layout] = "named"
    variant_name: ClassVar[str | None] = None
    enum_root: ClassVar[type[Choice] | None] = None

    def __init_subclass__(
        cls,
        layout: Layout | None = None,
        name: str | None = None,
        **kwargs: Any,
    ) -> None:
        """Turn the subclass into a frozen dataclass and register variants."""
        super().__init_subclass__(**kwargs)
        dataclass(frozen=True)(cls)

        if cls.__dict__.get("is_choice_base"):
            return
        if any(base.__dict__.get("is_choice_base") for base in cls.__bases__):
            _init_enum_root(cls, layout, name)
            return

        if layout is not None:
            if layout not in _LAYOUTS:
                msg = f"Unknown layout '{layout}' for {cls.__name__}"
                raise SchemaError(msg)
            cls.layout = layout
        elif "layout" not in cls.__dict__:
            cls.layout = "named"

        if cls.layout == "unit" and fields(cls):
            msg = f"Unit record {cls.__name__} cannot declare fields"
            raise SchemaError(msg)

        root = cls.enum_root
        if root is None:
            if name is not None:
                msg = f"{cls.__name__} is not an enum variant and cannot take a name"
                raise SchemaError(msg)
            return

        if root.sealed:
            msg = (
                f"Cannot add variant {cls.__name__} to enum {root.__name__}: "
                "its shape was already derived"
            )
            raise SchemaError(msg)

        cls.variant_name = name if name is not None else cls.__name__
        if (existing := root.variants.get(cls.variant_name)) and existing is not cls:
            msg = (
                f"Variant '{cls.variant_name}' already registered to {existing} "
                f"in enum {root.__name__}."
            )
            raise SchemaError(msg)
        root.variants[cls.variant_name] = cls


def _init_enum_root(cls: type[Record], layout: str | None, name: str | None) -> None:
    if layout is not None or name is not None:
        msg = f"Enum {cls.__name__} cannot take a layout or name"
        raise SchemaError(msg)
    if fields(cls):
        msg = f"Enum {cls.__name__} cannot declare fields; declare them on variants"
        raise SchemaError(msg)
    cls.enum_root = cls
    cls.variants = {}
    cls.sealed = False


class Choice(Record):
    """Base for enums: each subclass of a direct ``Choice`` subclass is a variant.

    Variants are tried by exact name, in declaration order. The name defaults
    to the class name and can be overridden with the ``name`` keyword. The
    enum is sealed the first time its shape is derived; declaring another
    variant after that raises ``SchemaError``.

    Example:
        class Shape(Choice):
            pass

        class Empty(Shape, layout="unit"):
            pass

        class Circle(Shape):
            radius: int

    """

    is_choice_base: ClassVar[bool] = True
    variants: ClassVar[dict[str, type[Record]]] = {}
    sealed: ClassVar[bool] = False
