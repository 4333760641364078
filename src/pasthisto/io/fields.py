"""Typed access to fields of parsed JSON objects.

All helpers take the JSON ``path`` of the enclosing value so that raised
errors point at the exact location (``data.bins[2].data``).
"""
from __future__ import annotations

from typing import Any

from .errors import MissingField, TypeMismatch

__all__ = [
    "child_path",
    "index_path",
    "require_object",
    "get_field",
    "get_string",
    "get_optional_string",
    "get_array",
    "get_object",
]


def child_path(path: str, field: str) -> str:
    return f"{path}.{field}" if path else field


def index_path(path: str, index: int) -> str:
    return f"{path}[{index}]"


def require_object(value: Any, path: str) -> dict:
    if not isinstance(value, dict):
        raise TypeMismatch("object", value, path)
    return value


def get_field(obj: dict, field: str, path: str) -> Any:
    """Return ``obj[field]``; raise :class:`MissingField` when absent."""
    try:
        return obj[field]
    except KeyError:
        raise MissingField(field, path) from None


def get_string(obj: dict, field: str, path: str) -> str:
    value = get_field(obj, field, path)
    if not isinstance(value, str):
        raise TypeMismatch("string", value, child_path(path, field))
    return value


def get_optional_string(obj: dict, field: str, path: str) -> str | None:
    # absent and null both mean "not declared"
    value = obj.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeMismatch("string", value, child_path(path, field))
    return value


def get_array(obj: dict, field: str, path: str) -> list:
    value = get_field(obj, field, path)
    if not isinstance(value, list):
        raise TypeMismatch("array", value, child_path(path, field))
    return value


def get_object(obj: dict, field: str, path: str) -> dict:
    return require_object(get_field(obj, field, path), child_path(path, field))
