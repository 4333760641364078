"""Decode error hierarchy.

Every failure raised while turning a Histogrammar JSON document into a
snapshot tree derives from :class:`DecodeError`. Errors carry the JSON
location (``path``) where the problem was found, e.g. ``data.values[3].sum``,
plus the offending raw value so a message is diagnosable without the input.

Errors are terminal: the decoder never recovers locally and never returns a
partial tree.
"""
from __future__ import annotations

from typing import Any

__all__ = [
    "DecodeError",
    "MalformedJson",
    "IncompatibleVersion",
    "MalformedVersion",
    "UnknownAggregatorType",
    "MissingField",
    "TypeMismatch",
    "InvalidNumber",
    "InvalidRangeSpecifier",
    "VectorLengthMismatch",
    "InvalidBinKey",
]


def _kind_of(value: Any) -> str:
    """Name the JSON kind of a parsed value (for messages)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


class DecodeError(ValueError):
    """Base class for all decoding failures."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


class MalformedJson(DecodeError):
    """Input bytes are not a JSON document."""


class IncompatibleVersion(DecodeError):
    def __init__(self, got: tuple[int, int], path: str = "version") -> None:
        self.got = got
        super().__init__(f"incompatible specification version {got[0]}.{got[1]} (expected 1.0)", path)


class MalformedVersion(DecodeError):
    def __init__(self, raw: str, path: str = "version") -> None:
        self.raw = raw
        super().__init__(f"malformed version string {raw!r} (expected '<major>.<minor>')", path)


class UnknownAggregatorType(DecodeError):
    def __init__(self, tag: str, path: str = "") -> None:
        self.tag = tag
        super().__init__(f"unknown aggregator type {tag!r}", path)


class MissingField(DecodeError):
    def __init__(self, field: str, path: str = "") -> None:
        self.field = field
        super().__init__(f"missing required field {field!r}", path)


class TypeMismatch(DecodeError):
    def __init__(self, expected: str, value: Any, path: str = "") -> None:
        self.expected = expected
        self.value = value
        super().__init__(f"expected {expected}, got {_kind_of(value)} {value!r}", path)


class InvalidNumber(DecodeError):
    """A histogrammar-float field holds neither a number nor inf/-inf/nan."""

    def __init__(self, value: Any, path: str = "", reason: str | None = None) -> None:
        self.value = value
        super().__init__(reason or f"invalid number {value!r}", path)


class InvalidRangeSpecifier(DecodeError):
    def __init__(self, raw: Any, path: str = "") -> None:
        self.raw = raw
        super().__init__(f"invalid Bag range specifier {raw!r} (expected 'N', 'N<k>' or 'S')", path)


class VectorLengthMismatch(DecodeError):
    def __init__(self, dimension: int, length: int, path: str = "") -> None:
        self.dimension = dimension
        self.length = length
        super().__init__(f"vector of length {length} does not match declared dimension {dimension}", path)


class InvalidBinKey(DecodeError):
    def __init__(self, key: str, path: str = "") -> None:
        self.key = key
        super().__init__(f"bin key {key!r} is not an integer", path)
