"""Snapshot aggregator model and read-only helpers."""

from .model import (
    Averaged,
    BagOfFloatToFloat,
    BagOfFloatToFloatVector,
    BagOfFloatToString,
    BagValues,
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
from .naming import apply_name
from .compare import trees_equal, walk

__all__ = [
    "Averaged",
    "BagOfFloatToFloat",
    "BagOfFloatToFloatVector",
    "BagOfFloatToString",
    "BagValues",
    "Bagged",
    "Binned",
    "Categorized",
    "CentrallyBinned",
    "Counted",
    "Deviated",
    "Fractioned",
    "IrregularlyBinned",
    "Maximized",
    "Minimized",
    "PastTenseHistogram",
    "SparselyBinned",
    "Summed",
    "VARIANTS",
    "apply_name",
    "trees_equal",
    "walk",
]
