"""Error types raised by the value model and the structural codec.

Every failure is a recoverable exception carrying structured attributes.
Decode failures share the ``DecodeError`` base (a ``ValueError``), so callers
can catch a whole conversion with one clause. Recursive conversions re-raise
the innermost error unchanged: the caller sees exactly which leaf failed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from structval.values import Kind


class CodecError(Exception):
    """Base class for all structval errors."""


class DecodeError(CodecError, ValueError):
    """A dynamic value could not be converted into the requested record."""


class KindMismatch(DecodeError):
    """The value's kind is not the one the target shape requires."""

    def __init__(self, expected: str, actual: Kind) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected}, got {actual.value}")


class ArityMismatch(DecodeError):
    """An Array's length differs from the declared positional arity."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected an Array of length {expected}, got length {actual}",
        )


class MissingField(DecodeError):
    """A named field has no entry in the source Dictionary."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing field '{name}'")


class IndexOutOfBounds(DecodeError):
    """A positional field index lies beyond the end of the source Array."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"Index {index} out of bounds for Array of length {length}")


class UnknownVariant(DecodeError):
    """A tag or dictionary key does not name a suitable enum variant."""

    def __init__(self, name: str, expected: str) -> None:
        self.name = name
        self.expected = expected
        super().__init__(f"Expected {expected}, got unknown variant '{name}'")


class EmptyEnum(DecodeError):
    """An enum with no variants can never be decoded."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Cannot instantiate an empty enum ({name})")


class AmbiguousDictionary(DecodeError):
    """An enum payload Dictionary does not have exactly one entry."""

    def __init__(self, actual: int) -> None:
        self.actual = actual
        super().__init__(f"Expected a Dictionary with one entry, got {actual} entries")


class EncodeError(CodecError, TypeError):
    """A native object does not fit the shape it is being encoded with."""


class ContainerCapacityError(CodecError, ValueError):
    """A container holds more entries than its maximum depth allows."""

    def __init__(self, kind: Kind, size: int, max_depth: int) -> None:
        self.kind = kind
        self.size = size
        self.max_depth = max_depth
        super().__init__(
            f"{kind.value} with {size} entries exceeds capacity "
            f"{2**max_depth} (max depth {max_depth})",
        )


class SchemaError(CodecError, TypeError):
    """A record declaration cannot be turned into a shape."""
