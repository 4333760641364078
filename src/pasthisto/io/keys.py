"""Mapping key transforms used by keyed containers.

Both helpers are all-or-nothing: they build a fresh dict and raise on the
first failing entry, so no partially converted mapping ever escapes.
"""
from __future__ import annotations

from typing import Callable, Mapping, TypeVar

from pasthisto.domain.model import PastTenseHistogram
from pasthisto.domain.naming import apply_name

from .errors import InvalidBinKey
from .fields import child_path

__all__ = ["parse_keys", "rename_values", "parse_int_key"]

K = TypeVar("K")
V = TypeVar("V")


def parse_int_key(key: str, path: str = "") -> int:
    """Parse a sparse-bin key (decimal integer, optional sign)."""
    digits = key[1:] if key[:1] in ("+", "-") else key
    if not digits or not digits.isascii() or not digits.isdigit():
        raise InvalidBinKey(key, child_path(path, key))
    try:
        return int(key)
    except ValueError as e:
        # digit strings past the interpreter's int conversion limit
        raise InvalidBinKey(key, child_path(path, key)) from e


def parse_keys(
    mapping: Mapping[str, V],
    parse: Callable[[str, str], K],
    path: str = "",
) -> dict[K, V]:
    """Re-key ``mapping`` through ``parse(key, path)``; last duplicate wins."""
    out: dict[K, V] = {}
    for key, value in mapping.items():
        out[parse(key, path)] = value
    return out


def rename_values(
    mapping: Mapping[K, PastTenseHistogram], name: str | None
) -> dict[K, PastTenseHistogram]:
    """Stamp ``name`` onto every value, keys untouched."""
    return {k: apply_name(name, v) for k, v in mapping.items()}
