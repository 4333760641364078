"""Name propagation onto freshly decoded aggregators."""
from __future__ import annotations

from dataclasses import replace

from .model import (
    Averaged,
    Bagged,
    Binned,
    Categorized,
    CentrallyBinned,
    Counted,
    Deviated,
    Fractioned,
    IrregularlyBinned,
    Maximized,
    Minimized,
    PastTenseHistogram,
    SparselyBinned,
    Summed,
    VARIANTS,
)

__all__ = ["apply_name", "NAMED_VARIANTS"]

# every variant except Counted carries a name
NAMED_VARIANTS: tuple[type, ...] = (
    Summed,
    Averaged,
    Deviated,
    Minimized,
    Maximized,
    Bagged,
    Binned,
    SparselyBinned,
    CentrallyBinned,
    IrregularlyBinned,
    Categorized,
    Fractioned,
)

if set(NAMED_VARIANTS) | {Counted} != set(VARIANTS.values()):  # pragma: no cover - import-time guard
    raise ImportError("apply_name does not cover every aggregator variant")


def apply_name(name: str | None, value: PastTenseHistogram) -> PastTenseHistogram:
    """Return ``value`` with its own ``name`` replaced by ``name``.

    ``None`` leaves the value untouched, as does a :class:`Counted` (it has no
    name). Nested children are never visited.
    """
    if name is None or isinstance(value, Counted):
        return value
    if isinstance(value, NAMED_VARIANTS):
        return replace(value, name=name)
    raise TypeError(f"not an aggregator snapshot: {type(value).__name__}")
