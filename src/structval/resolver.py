"""Field resolution: pull one field's sub-value out of a container."""

from __future__ import annotations

from structval.errors import IndexOutOfBounds, MissingField
from structval.values import Array, Dictionary, Key, Value


def resolve_named(dictionary: Dictionary, field_name: str) -> Value:
    """Return the value stored under ``field_name``.

    Raises:
        MissingField: If the dictionary has no such key.

    """
    found = dictionary.get(Key(field_name))
    if found is None:
        raise MissingField(field_name)
    return found


def resolve_positional(array: Array, index: int) -> Value:
    """Return the value at ``index``.

    Raises:
        IndexOutOfBounds: If the array is too short. Callers that check arity
            first never see this.

    """
    if not 0 <= index < len(array):
        raise IndexOutOfBounds(index, len(array))
    return array[index]
