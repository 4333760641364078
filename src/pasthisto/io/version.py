"""Specification version gate.

Only documents declaring version ``1.0`` are accepted; there is no forward or
backward compatibility.
"""
from __future__ import annotations

import re
from typing import Any

from .errors import IncompatibleVersion, MalformedVersion, TypeMismatch

__all__ = ["SUPPORTED_VERSION", "parse_version", "check_version"]

SUPPORTED_VERSION: tuple[int, int] = (1, 0)

_COMPONENT = re.compile(r"[+-]?[0-9]+")


def parse_version(raw: str, path: str = "version") -> tuple[int, int]:
    parts = raw.split(".")
    if len(parts) != 2 or not all(_COMPONENT.fullmatch(p) for p in parts):
        raise MalformedVersion(raw, path)
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as e:
        raise MalformedVersion(raw, path) from e


def check_version(raw: Any, path: str = "version") -> tuple[int, int]:
    if not isinstance(raw, str):
        raise TypeMismatch("string", raw, path)
    got = parse_version(raw, path)
    if got != SUPPORTED_VERSION:
        raise IncompatibleVersion(got, path)
    return got
