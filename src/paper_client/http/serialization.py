"""JSON encoding and decoding helpers for API types.

Dropbox API unions are encoded as ``{".tag": "variant", ...}``. Variants
without a payload may also appear as a bare ``"variant"`` string, which is
also how request arguments send them.

A *decoder* is any callable turning parsed JSON into a typed value; the
``from_dict`` classmethods of the model classes are decoders, and so is
:func:`void` for endpoints with an empty result or error type.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Callable
from enum import Enum
from typing import Any, ClassVar, TypeVar

from paper_client.http.exceptions import DecodeError, SerializationError

T = TypeVar("T")
Decoder = Callable[[Any], T]

TAG_KEY = ".tag"


def void(data: Any) -> None:
    """Decode the unit type: only JSON ``null`` (or an empty body) is accepted."""
    if data is not None:
        raise ValueError(f"Expected null, got {type(data).__name__}")
    return None


def string(data: Any) -> str:
    """Decode a JSON string without coercing other types."""
    if not isinstance(data, str):
        raise ValueError(f"Expected a string, got {type(data).__name__}")
    return data


def list_of(decoder: Decoder[T]) -> Decoder[list[T]]:
    """Build a decoder for a JSON array whose items use *decoder*."""

    def decode(data: Any) -> list[T]:
        if not isinstance(data, list):
            raise ValueError(f"Expected a list, got {type(data).__name__}")
        return [decoder(item) for item in data]

    return decode


def optional(decoder: Decoder[T]) -> Decoder[T | None]:
    """Build a decoder that passes ``None`` through untouched."""

    def decode(data: Any) -> T | None:
        return None if data is None else decoder(data)

    return decode


def read_tag(data: Any) -> str:
    """Return the variant name of a union value."""
    if isinstance(data, str):
        return data
    if isinstance(data, dict) and isinstance(data.get(TAG_KEY), str):
        return data[TAG_KEY]
    raise ValueError(f"Expected a tagged union, got {data!r}")


class TaggedEnum(str, Enum):
    """A union whose variants carry no payload."""

    @classmethod
    def from_dict(cls, data: Any):
        return cls(read_tag(data))

    def to_dict(self) -> dict[str, str]:
        return {TAG_KEY: self.value}


class TaggedUnion:
    """A union where at least one variant carries a payload.

    Subclasses list their payload-free variants in ``void_tags`` and map
    each payload variant to the decoder for its value in ``value_tags``.
    On the wire the payload sits under the key named after the variant,
    e.g. ``{".tag": "email", "email": "a@b.c"}``.
    """

    void_tags: ClassVar[frozenset[str]] = frozenset()
    value_tags: ClassVar[dict[str, Decoder[Any]]] = {}

    __slots__ = ("tag", "value")

    def __init__(self, tag: str, value: Any = None):
        if tag in self.void_tags:
            if value is not None:
                raise ValueError(f"{type(self).__name__}.{tag} takes no value")
        elif tag in self.value_tags:
            if value is None:
                raise ValueError(f"{type(self).__name__}.{tag} requires a value")
        else:
            raise ValueError(f"Unknown {type(self).__name__} variant: {tag}")
        self.tag = tag
        self.value = value

    @classmethod
    def from_dict(cls, data: Any):
        if isinstance(data, str):
            return cls(data)
        if not isinstance(data, dict):
            raise ValueError(f"Expected a tagged union, got {data!r}")

        tag = data.get(TAG_KEY)
        if tag is None:
            # Untagged objects are accepted when exactly one payload key is present
            keys = [key for key in data if key in cls.value_tags]
            if len(keys) != 1:
                raise ValueError(f"Cannot determine {cls.__name__} variant from {data!r}")
            tag = keys[0]

        if tag in cls.value_tags:
            if tag not in data:
                raise ValueError(f"Missing payload for {cls.__name__}.{tag}")
            return cls(tag, cls.value_tags[tag](data[tag]))
        return cls(tag)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {TAG_KEY: self.tag}
        if self.value is not None:
            result[self.tag] = to_json_value(self.value)
        return result

    def is_(self, tag: str) -> bool:
        return self.tag == tag

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.tag == other.tag and self.value == other.value

    def __hash__(self) -> int:
        return hash((type(self), self.tag, self.value))

    def __repr__(self) -> str:
        if self.value is None:
            return f"{type(self).__name__}({self.tag!r})"
        return f"{type(self).__name__}({self.tag!r}, {self.value!r})"


def to_json_value(value: Any) -> Any:
    """Convert an API value into plain JSON-compatible data.

    Dataclass fields set to ``None`` are omitted.
    """
    if isinstance(value, TaggedUnion):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_json_value(getattr(value, f.name))
            for f in dataclasses.fields(value)
            if getattr(value, f.name) is not None
        }
    if isinstance(value, (list, tuple)):
        return [to_json_value(item) for item in value]
    if isinstance(value, dict):
        return {key: to_json_value(item) for key, item in value.items()}
    return value


def encode_json(value: Any) -> str:
    """Serialize an API value to JSON text.

    Non-ASCII characters are escaped so the text is also a valid header value.

    Raises:
        SerializationError: If the value cannot be represented as JSON.
    """
    try:
        return json.dumps(to_json_value(value))
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode {type(value).__name__}: {e}") from e


def parse_json(text: str, what: str) -> Any:
    """Parse JSON text; an empty document reads as ``None``.

    Raises:
        DecodeError: If *text* is not valid JSON.
    """
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid JSON in {what}: {e}", body=text) from e


def run_decoder(decoder: Decoder[T], data: Any, what: str, raw: str | None = None) -> T:
    """Apply *decoder*, reporting any shape mismatch as a DecodeError."""
    try:
        return decoder(data)
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"Unexpected {what}: {e!r}", body=raw) from e
