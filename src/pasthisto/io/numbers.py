"""Numeric field decoding.

Histogrammar writes non-finite floats as the JSON strings ``"inf"``,
``"-inf"`` and ``"nan"``. Only fields carrying accumulated statistics
(entries, sum, mean, variance, min, max, bin thresholds) use that
convention; structural fields such as ``low``/``high``/``binWidth``/``origin``
must be plain JSON numbers.
"""
from __future__ import annotations

import math
from typing import Any

from .errors import InvalidNumber, TypeMismatch
from .fields import child_path, get_field

__all__ = [
    "SPECIAL_FLOATS",
    "is_json_number",
    "decode_histogrammar_float",
    "decode_plain_number",
    "get_histogrammar_float",
    "get_plain_number",
]

# case-sensitive, nothing else is accepted
SPECIAL_FLOATS: dict[str, float] = {
    "inf": math.inf,
    "-inf": -math.inf,
    "nan": math.nan,
}


def is_json_number(value: Any) -> bool:
    # bool is a subclass of int but JSON true/false are not numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float(value: int | float, path: str) -> float:
    try:
        return float(value)
    except OverflowError as e:
        # integer literals beyond the float range
        raise InvalidNumber(value, path, reason="integer literal out of float range") from e


def decode_histogrammar_float(value: Any, path: str = "") -> float:
    """Decode a number or one of the ``inf``/``-inf``/``nan`` sentinels."""
    if is_json_number(value):
        return _to_float(value, path)
    if isinstance(value, str):
        try:
            return SPECIAL_FLOATS[value]
        except KeyError:
            pass
    raise InvalidNumber(value, path)


def decode_plain_number(value: Any, path: str = "") -> float:
    """Decode a JSON number; sentinel strings are rejected."""
    if not is_json_number(value):
        raise TypeMismatch("number", value, path)
    return _to_float(value, path)


def get_histogrammar_float(obj: dict, field: str, path: str) -> float:
    return decode_histogrammar_float(get_field(obj, field, path), child_path(path, field))


def get_plain_number(obj: dict, field: str, path: str) -> float:
    return decode_plain_number(get_field(obj, field, path), child_path(path, field))
