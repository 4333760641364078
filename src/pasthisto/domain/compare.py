"""Structural comparison and traversal of snapshot trees.

Dataclass ``==`` follows IEEE semantics, so any tree holding a NaN statistic
compares unequal to itself. :func:`trees_equal` treats NaN as equal to NaN
(including NaN components inside bag vectors) and is what tests use to check
that decoding is deterministic.
"""
from __future__ import annotations

import math
from dataclasses import fields, is_dataclass
from typing import Any, Iterator, Mapping

from .model import PastTenseHistogram

__all__ = ["trees_equal", "walk"]


def _floats_equal(a: float, b: float) -> bool:
    if math.isnan(a) and math.isnan(b):
        return True
    return a == b


def _keys_equal(a: Any, b: Any) -> bool:
    if isinstance(a, float) and isinstance(b, float):
        return _floats_equal(a, b)
    if isinstance(a, tuple) and isinstance(b, tuple):
        return len(a) == len(b) and all(_keys_equal(x, y) for x, y in zip(a, b))
    return type(a) is type(b) and a == b


def _values_equal(a: Any, b: Any) -> bool:
    if is_dataclass(a) and is_dataclass(b):
        if type(a) is not type(b):
            return False
        return all(_values_equal(getattr(a, f.name), getattr(b, f.name)) for f in fields(a))
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if len(a) != len(b):
            return False
        # keys may be NaN-bearing tuples, so match entries pairwise in order
        return all(
            _keys_equal(ka, kb) and _values_equal(va, vb)
            for (ka, va), (kb, vb) in zip(a.items(), b.items())
        )
    if isinstance(a, tuple) and isinstance(b, tuple):
        return len(a) == len(b) and all(_values_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, float) and isinstance(b, float):
        return _floats_equal(a, b)
    return type(a) is type(b) and a == b


def trees_equal(a: PastTenseHistogram, b: PastTenseHistogram) -> bool:
    """NaN-aware structural equality (mapping order is significant)."""
    return _values_equal(a, b)


def walk(tree: PastTenseHistogram, path: str = "") -> Iterator[tuple[str, PastTenseHistogram]]:
    """Yield ``(path, node)`` depth-first, root first."""
    yield path, tree
    children = getattr(tree, "children", None)
    if children is None:
        return
    for label, child in children():
        yield from walk(child, f"{path}.{label}" if path else label)
