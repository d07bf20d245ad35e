"""
JSON marshaling with explicit schemas.

Values are written with ``DataMarshaller.marshal`` and read back against a
schema describing the exact shape expected in the file:

    ListSchema(str)                      -> list[str]
    MapSchema(int, BackgroundUpload)     -> dict[int, BackgroundUpload]
    RecordSchema(BackgroundUpload)       -> BackgroundUpload
    ObjectSchema()                       -> dict[str, Any]

Item types may be ``str``, ``int``, ``float``, ``bool``, any record class
with ``from_dict``, or another schema. JSON object keys are always strings;
``int`` map keys are parsed back on read.
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from .exceptions import DeserializationError
from .uploads import BackgroundUpload

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")

_PRIMITIVES = (str, int, float, bool)


class Schema(Generic[T]):
    """Shape of a persisted JSON value."""

    def decode(self, raw: Any) -> T:
        raise NotImplementedError

    def describe(self) -> str:
        raise NotImplementedError


class PrimitiveSchema(Schema[T]):
    """A JSON scalar of a fixed Python type."""

    def __init__(self, kind: type[T]):
        if kind not in _PRIMITIVES:
            raise TypeError(f"Unsupported primitive type: {kind!r}")
        self.kind = kind

    def decode(self, raw: Any) -> T:
        # bool is an int subclass; never accept it for numeric fields
        if isinstance(raw, bool) and self.kind is not bool:
            raise DeserializationError(f"got boolean {raw!r}", self.describe())
        if self.kind is float and isinstance(raw, int):
            return float(raw)  # type: ignore[return-value]
        if not isinstance(raw, self.kind):
            raise DeserializationError(f"got {type(raw).__name__}", self.describe())
        return raw

    def describe(self) -> str:
        return self.kind.__name__


class RecordSchema(Schema[T]):
    """A JSON object decoded through the record class's ``from_dict``."""

    def __init__(self, record: type[T]):
        if not hasattr(record, "from_dict"):
            raise TypeError(f"{record!r} has no from_dict")
        self.record = record

    def decode(self, raw: Any) -> T:
        if not isinstance(raw, dict):
            raise DeserializationError(f"got {type(raw).__name__}", self.describe())
        try:
            return self.record.from_dict(raw)  # type: ignore[attr-defined]
        except (KeyError, TypeError, ValueError) as e:
            raise DeserializationError(f"invalid record: {e}", self.describe(), e) from e

    def describe(self) -> str:
        return self.record.__name__


class ObjectSchema(Schema[dict[str, Any]]):
    """Any JSON object, returned as a plain dict."""

    def decode(self, raw: Any) -> dict[str, Any]:
        if not isinstance(raw, dict):
            raise DeserializationError(f"got {type(raw).__name__}", self.describe())
        return raw

    def describe(self) -> str:
        return "object"


class ListSchema(Schema[list[T]]):
    """An ordered JSON array with uniformly typed items."""

    def __init__(self, item: type[T] | Schema[T]):
        self.item = as_schema(item)

    def decode(self, raw: Any) -> list[T]:
        if not isinstance(raw, list):
            raise DeserializationError(f"got {type(raw).__name__}", self.describe())
        return [self.item.decode(entry) for entry in raw]

    def describe(self) -> str:
        return f"list[{self.item.describe()}]"


class MapSchema(Schema[dict[K, V]]):
    """A JSON object with typed keys and uniformly typed values."""

    def __init__(self, key: type[K], value: type[V] | Schema[V]):
        if key not in (str, int):
            raise TypeError(f"Map keys must be str or int, got {key!r}")
        self.key = key
        self.value = as_schema(value)

    def decode(self, raw: Any) -> dict[K, V]:
        if not isinstance(raw, dict):
            raise DeserializationError(f"got {type(raw).__name__}", self.describe())
        return {self._decode_key(k): self.value.decode(v) for k, v in raw.items()}

    def _decode_key(self, raw_key: str) -> K:
        if self.key is str:
            return raw_key  # type: ignore[return-value]
        try:
            return int(raw_key)  # type: ignore[return-value]
        except ValueError as e:
            raise DeserializationError(f"non-integer key {raw_key!r}", self.describe(), e) from e

    def describe(self) -> str:
        return f"map[{self.key.__name__}, {self.value.describe()}]"


def as_schema(item: type[T] | Schema[T]) -> Schema[T]:
    """Build the schema for an item type."""
    if isinstance(item, Schema):
        return item
    if item in _PRIMITIVES:
        return PrimitiveSchema(item)
    return RecordSchema(item)


UPLOADS_SCHEMA: MapSchema[int, BackgroundUpload] = MapSchema(int, BackgroundUpload)
SESSION_IDS_SCHEMA: ListSchema[str] = ListSchema(str)


class DataMarshaller:
    """Serializes values to JSON text and back."""

    def __init__(self, indent: int | None = None):
        self.indent = indent

    def marshal(self, value: Any) -> str:
        """Serialize a value into JSON text.

        Raises TypeError for values with no JSON representation.
        """
        return json.dumps(value, indent=self.indent, ensure_ascii=False, default=_json_serializer)

    def unmarshal(self, text: str, schema: Schema[T]) -> T:
        """Parse JSON text and decode it against a schema.

        Raises DeserializationError when the text is malformed or has
        a different shape.
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise DeserializationError(f"malformed JSON: {e.msg}", schema.describe(), e) from e
        return schema.decode(raw)

    def unmarshal_list(self, text: str, item: type[T] | Schema[T]) -> list[T]:
        return self.unmarshal(text, ListSchema(item))

    def unmarshal_map(self, text: str, key: type[K], value: type[V] | Schema[V]) -> dict[K, V]:
        return self.unmarshal(text, MapSchema(key, value))


def _json_serializer(obj: Any) -> Any:
    """Custom JSON serializer for types not handled by default.

    Args:
        obj: Object to serialize

    Returns:
        JSON-serializable representation
    """
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
