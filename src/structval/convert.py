"""Public conversion entry points."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from structval import dispatch
from structval.errors import DecodeError, SchemaError
from structval.params import Params
from structval.records import Record
from structval.schema import is_record_type, record_shape, shape_of
from structval.shapes import Shape
from structval.values import Value

logger = logging.getLogger(__name__)


def target_shape(target: Any) -> Shape:
    """Resolve a conversion target (shape, record class or annotation)."""
    if isinstance(target, Shape):
        return target
    if is_record_type(target):
        return record_shape(target)
    return shape_of(target)


def from_value(value: Value, target: Any) -> Any:
    """Decode a dynamic value into ``target``.

    Args:
        value: The dynamic value to decode
        target: A record class, a type annotation such as ``list[int]``, or a
            ``Shape``

    Returns:
        The decoded native object

    Raises:
        DecodeError: If the value does not fit the target's shape
        SchemaError: If the target cannot be described as a shape

    Example:
        class Point(Record):
            x: int
            y: int

        from_value(value_of({"x": 1, "y": 2}), Point)  # Point(x=1, y=2)

    """
    if not isinstance(value, Value):
        msg = f"from_value() requires a Value, got {type(value).__name__}"
        raise TypeError(msg)
    return dispatch.decode(value, target_shape(target))


def to_value(obj: Any, target: Any = None, *, params: Params | None = None) -> Value:
    """Encode a native object as a dynamic value.

    Args:
        obj: The object to encode
        target: Shape, record class or annotation to encode with. Defaults to
            ``type(obj)``, which must then be a record class or a Value. Enum
            variants default to their enum, so they are wrapped with their name.
        params: Container limits (defaults to ``Params()``)

    Raises:
        EncodeError: If the object does not fit the target's shape
        ContainerCapacityError: If a container exceeds the configured depth
        SchemaError: If no shape can be derived for the target

    """
    if target is None:
        target = type(obj)
        if issubclass(target, Record) and target.enum_root is not None:
            target = target.enum_root
        elif not (is_record_type(target) or issubclass(target, Value)):
            msg = (
                f"Cannot infer a shape for {target.__name__}; "
                "pass target= explicitly"
            )
            raise SchemaError(msg)
    return dispatch.encode(obj, target_shape(target), params or Params())


@dataclass(frozen=True)
class DecodeResult[T]:
    """Outcome of a non-raising decode."""

    record: T | None = None
    error: DecodeError | None = None

    @property
    def ok(self) -> bool:
        """Return True if decoding succeeded."""
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """Return the record, re-raising the failure if there is one."""
        if self.error is not None:
            raise self.error
        return self.record  # type: ignore[return-value]

    def __str__(self) -> str:
        if self.error is None:
            return f"DecodeResult: ok {self.record!r}"
        return f"DecodeResult: {type(self.error).__name__}: {self.error}"


def try_from_value(value: Value, target: Any) -> DecodeResult[Any]:
    """Decode like ``from_value`` but return failures instead of raising them.

    Only decode failures are captured; schema errors still raise.
    """
    if not isinstance(value, Value):
        msg = f"try_from_value() requires a Value, got {type(value).__name__}"
        raise TypeError(msg)
    shape = target_shape(target)
    try:
        return DecodeResult(record=dispatch.decode(value, shape))
    except DecodeError as e:
        logger.debug("Decoding %s as %s failed: %s", value.kind.value, shape.tag, e)
        return DecodeResult(error=e)
