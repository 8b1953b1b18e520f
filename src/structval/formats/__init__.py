"""Format adapters for serialization.

Each format module provides to_<format> and from_<format> functions that
render dynamic values as text and parse them back.
"""

from structval.formats.json import from_json, to_json

__all__ = ["from_json", "to_json"]
