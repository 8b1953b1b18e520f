"""structval - structural codec between tagged dynamic values and records."""

from structval.convert import (
    DecodeResult,
    from_value,
    to_value,
    try_from_value,
)
from structval.errors import (
    AmbiguousDictionary,
    ArityMismatch,
    CodecError,
    ContainerCapacityError,
    DecodeError,
    EmptyEnum,
    EncodeError,
    IndexOutOfBounds,
    KindMismatch,
    MissingField,
    SchemaError,
    UnknownVariant,
)
from structval.formats.json import (
    from_json,
    to_json,
)
from structval.params import Params
from structval.records import (
    Choice,
    Record,
)
from structval.schema import (
    record_shape,
    shape_of,
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
    value_of,
)

__all__ = [
    # Errors
    "AmbiguousDictionary",
    "ArityMismatch",
    # Values
    "Array",
    "Bool",
    # Declaration
    "Choice",
    "CodecError",
    "ContainerCapacityError",
    "DecodeError",
    # Conversion
    "DecodeResult",
    "Dictionary",
    "EmptyEnum",
    "EncodeError",
    "IndexOutOfBounds",
    "Int",
    "Key",
    "Kind",
    "KindMismatch",
    "MissingField",
    # Configuration
    "Params",
    "Record",
    "SchemaError",
    "Set",
    "String",
    "UnknownVariant",
    "Value",
    "from_json",
    "from_value",
    "record_shape",
    "shape_of",
    "to_json",
    "to_value",
    "try_from_value",
    "value_of",
]
