"""Enum variant disambiguation.

An enum value takes one of two forms:

- a bare tag, ``String("A")``, for variants that carry nothing (unit
  variants and zero-arity positional variants);
- a one-entry Dictionary, ``{"B": <payload>}``, for every other variant.

Variant identity is the declared name, compared exactly. This module only
decides which variant a value denotes and builds the wrapper on the way back;
decoding and encoding the payload itself is left to the dispatcher.
"""

from __future__ import annotations

from structval.errors import (
    AmbiguousDictionary,
    EmptyEnum,
    KindMismatch,
    UnknownVariant,
)
from structval.params import Params
from structval.shapes import EnumShape, VariantSpec
from structval.values import Dictionary, Key, String, Value

_EXPECT_STRING = "a String"
_EXPECT_DICT = "a Dictionary with one entry"
_EXPECT_EITHER = "a String or Dictionary with one entry"


def expectation(shape: EnumShape) -> str:
    """Describe the forms this enum accepts, for error messages."""
    has_bare = any(v.is_bare for v in shape.variants)
    has_dict = any(not v.is_bare for v in shape.variants)
    if has_bare and has_dict:
        return _EXPECT_EITHER
    if has_dict:
        return _EXPECT_DICT
    return _EXPECT_STRING


def select_variant(value: Value, shape: EnumShape) -> tuple[VariantSpec, Value | None]:
    """Pick the variant ``value`` denotes.

    Returns:
        The chosen variant and its payload. The payload is None for bare-tag
        variants.

    Raises:
        EmptyEnum: Always, if the enum declares no variants.
        UnknownVariant: If the tag or key names no eligible variant.
        AmbiguousDictionary: If a Dictionary does not have exactly one entry.
        KindMismatch: If the value is of a form this enum never accepts.

    """
    if not shape.variants:
        raise EmptyEnum(shape.name)

    expected = expectation(shape)

    if isinstance(value, String) and expected != _EXPECT_DICT:
        variant = shape.variant(value.value)
        if variant is None or not variant.is_bare:
            raise UnknownVariant(value.value, expected)
        return variant, None

    if isinstance(value, Dictionary) and expected != _EXPECT_STRING:
        if len(value) != 1:
            raise AmbiguousDictionary(len(value))
        ((key, payload),) = value.items()
        variant = shape.variant(key.name)
        if variant is None or variant.is_bare:
            raise UnknownVariant(key.name, expected)
        return variant, payload

    raise KindMismatch(expected, value.kind)


def wrap_variant(
    variant: VariantSpec,
    payload: Value | None,
    params: Params,
) -> Value:
    """Build the dynamic form of a variant around its encoded payload."""
    if variant.is_bare:
        return String(variant.name)
    if payload is None:
        msg = f"Variant '{variant.name}' requires a payload"
        raise ValueError(msg)
    return Dictionary(
        {Key(variant.name): payload},
        max_depth=params.max_depth_containers,
    )
