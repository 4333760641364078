"""Wire type tags of the thirteen supported aggregators."""
from __future__ import annotations

from enum import Enum

from .errors import UnknownAggregatorType

__all__ = ["AggregatorKind", "kind_from_tag"]


class AggregatorKind(str, Enum):
    """Aggregator variant, valued by its wire tag."""

    COUNT = "Count"
    SUM = "Sum"
    AVERAGE = "Average"
    DEVIATE = "Deviate"
    MINIMIZE = "Minimize"
    MAXIMIZE = "Maximize"
    BAG = "Bag"
    BIN = "Bin"
    SPARSELY_BIN = "SparselyBin"
    CENTRALLY_BIN = "CentrallyBin"
    IRREGULARLY_BIN = "IrregularlyBin"
    CATEGORIZE = "Categorize"
    FRACTION = "Fraction"

    @property
    def tag(self) -> str:
        return self.value


_BY_TAG: dict[str, AggregatorKind] = {k.value: k for k in AggregatorKind}


def kind_from_tag(tag: str, path: str = "") -> AggregatorKind:
    """Resolve a wire tag such as ``"SparselyBin"``; tags are case-sensitive."""
    try:
        return _BY_TAG[tag]
    except (KeyError, TypeError):
        raise UnknownAggregatorType(tag, path) from None
