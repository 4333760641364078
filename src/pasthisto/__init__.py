"""Decoder for Histogrammar JSON snapshots.

Typical use::

    from pasthisto import load
    hist = load("histogram.json")
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .domain import *  # noqa: F401,F403
from .domain import __all__ as _domain_all
from .io.decoder import DecodeOptions, HistogramDecoder
from .io.errors import (
    DecodeError,
    IncompatibleVersion,
    InvalidBinKey,
    InvalidNumber,
    InvalidRangeSpecifier,
    MalformedJson,
    MalformedVersion,
    MissingField,
    TypeMismatch,
    UnknownAggregatorType,
    VectorLengthMismatch,
)
from .io.loader import decode, decode_json, load
from .io.registry import AggregatorKind

try:
    __version__ = version("pasthisto")
except PackageNotFoundError:  # pragma: no cover - fallback when package not installed
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "decode",
    "decode_json",
    "load",
    "DecodeOptions",
    "HistogramDecoder",
    "AggregatorKind",
    "DecodeError",
    "IncompatibleVersion",
    "InvalidBinKey",
    "InvalidNumber",
    "InvalidRangeSpecifier",
    "MalformedJson",
    "MalformedVersion",
    "MissingField",
    "TypeMismatch",
    "UnknownAggregatorType",
    "VectorLengthMismatch",
    *_domain_all,
]
