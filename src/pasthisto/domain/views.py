"""Read-only numpy views over decoded binning aggregators.

These helpers only derive arrays from an existing snapshot; they never
accumulate or modify anything.
"""
from __future__ import annotations

import numpy as np

from .model import (
    Binned,
    Categorized,
    CentrallyBinned,
    IrregularlyBinned,
    SparselyBinned,
)

__all__ = [
    "bin_edges",
    "bin_centers",
    "sparse_bin_edges",
    "thresholds",
    "child_entries",
]


def bin_edges(h: Binned) -> np.ndarray:
    """``num + 1`` equally spaced edges from ``low`` to ``high``."""
    return np.linspace(h.low, h.high, h.num + 1)


def bin_centers(h: Binned) -> np.ndarray:
    edges = bin_edges(h)
    return 0.5 * (edges[:-1] + edges[1:])


def sparse_bin_edges(h: SparselyBinned, index: int) -> tuple[float, float]:
    """Interval ``[low, high)`` covered by sparse bin ``index``."""
    low = h.origin + index * h.bin_width
    return low, low + h.bin_width


def thresholds(h: CentrallyBinned | IrregularlyBinned) -> np.ndarray:
    """Bin centers (central) or lower edges (irregular), ascending."""
    return np.sort(np.fromiter(h.bins.keys(), dtype=float, count=len(h.bins)))


def child_entries(
    h: Binned | SparselyBinned | CentrallyBinned | IrregularlyBinned | Categorized,
) -> np.ndarray:
    """Per-bin ``entries`` in bin order (flow bins excluded).

    Numeric keys are ordered ascending; categories keep their stored order.
    """
    if isinstance(h, Binned):
        children = list(h.values)
    elif isinstance(h, Categorized):
        children = list(h.bins.values())
    elif isinstance(h, (SparselyBinned, CentrallyBinned, IrregularlyBinned)):
        children = [h.bins[k] for k in sorted(h.bins)]
    else:
        raise TypeError(f"no bins on {type(h).__name__}")
    return np.array([c.entries for c in children], dtype=float)
