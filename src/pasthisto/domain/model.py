"""Immutable snapshot ("past-tense") aggregator tree.

A decoded Histogrammar document is one of thirteen frozen dataclasses. The
set of variants is fixed by the interchange format, so the union type
:data:`PastTenseHistogram` is closed and code dispatching over it is expected
to be exhaustive (see :func:`pasthisto.domain.naming.apply_name`).

Containers hold children in tuples and read-only mappings; a decoded tree
owns all of its nodes and shares none of them.

Nodes compare by value but are not hashable when they hold a mapping (bag
domains, keyed bins and :class:`Bagged`); the remaining variants hash like
any frozen dataclass, which fails once a child is unhashable.

Attributes common to all variants
---------------------------------
entries : float
    Total weight observed (may be ``inf`` or ``nan`` on the wire).
name : str | None
    Optional label; absent on :class:`Counted`.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, ClassVar, Iterable, Iterator, Mapping, Tuple, Union

from pasthisto.io.registry import AggregatorKind

__all__ = [
    "Counted",
    "Summed",
    "Averaged",
    "Deviated",
    "Minimized",
    "Maximized",
    "Bagged",
    "Binned",
    "SparselyBinned",
    "CentrallyBinned",
    "IrregularlyBinned",
    "Categorized",
    "Fractioned",
    "BagOfFloatToFloat",
    "BagOfFloatToFloatVector",
    "BagOfFloatToString",
    "BagValues",
    "PastTenseHistogram",
    "VARIANTS",
    "frozen_mapping",
]


def frozen_mapping(items: Mapping | Iterable[tuple[Any, Any]]) -> Mapping:
    """Copy ``items`` (mapping or pairs) into a read-only mapping, order kept."""
    return MappingProxyType(dict(items))


# -----------------
# Bag domains
# -----------------

@dataclass(frozen=True)
class BagOfFloatToFloat:
    values: Mapping[float, float]

    range_spec: ClassVar[str] = "N"
    __hash__ = None


@dataclass(frozen=True)
class BagOfFloatToFloatVector:
    dimension: int
    values: Mapping[Tuple[float, ...], float]

    __hash__ = None

    @property
    def range_spec(self) -> str:
        return f"N{self.dimension}"


@dataclass(frozen=True)
class BagOfFloatToString:
    values: Mapping[str, float]

    range_spec: ClassVar[str] = "S"
    __hash__ = None


BagValues = Union[BagOfFloatToFloat, BagOfFloatToFloatVector, BagOfFloatToString]


# -----------------
# Leaf aggregators
# -----------------

@dataclass(frozen=True)
class Counted:
    entries: float

    kind: ClassVar[AggregatorKind] = AggregatorKind.COUNT


@dataclass(frozen=True)
class Summed:
    entries: float
    sum: float
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.SUM


@dataclass(frozen=True)
class Averaged:
    entries: float
    mean: float
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.AVERAGE


@dataclass(frozen=True)
class Deviated:
    entries: float
    mean: float
    variance: float
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.DEVIATE


@dataclass(frozen=True)
class Minimized:
    entries: float
    min: float
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.MINIMIZE


@dataclass(frozen=True)
class Maximized:
    entries: float
    max: float
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.MAXIMIZE


@dataclass(frozen=True)
class Bagged:
    entries: float
    values: BagValues
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.BAG
    __hash__ = None


# -----------------
# Containers
# -----------------

@dataclass(frozen=True)
class Binned:
    """Fixed-range, equal-width binning with under/over/nan-flow children."""

    entries: float
    low: float
    high: float
    values: Tuple["PastTenseHistogram", ...]
    underflow: "PastTenseHistogram"
    overflow: "PastTenseHistogram"
    nanflow: "PastTenseHistogram"
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.BIN

    @property
    def num(self) -> int:
        return len(self.values)

    def children(self) -> Iterator[tuple[str, "PastTenseHistogram"]]:
        for i, v in enumerate(self.values):
            yield f"values[{i}]", v
        yield "underflow", self.underflow
        yield "overflow", self.overflow
        yield "nanflow", self.nanflow


@dataclass(frozen=True)
class SparselyBinned:
    """Sparse integer-indexed bins; only bins present on the wire exist."""

    entries: float
    bin_width: float
    origin: float
    bins: Mapping[int, "PastTenseHistogram"]
    nanflow: "PastTenseHistogram"
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.SPARSELY_BIN
    __hash__ = None

    def children(self) -> Iterator[tuple[str, "PastTenseHistogram"]]:
        for k, v in self.bins.items():
            yield f"bins[{k}]", v
        yield "nanflow", self.nanflow


@dataclass(frozen=True)
class CentrallyBinned:
    """Bins keyed by bin center."""

    entries: float
    bins: Mapping[float, "PastTenseHistogram"]
    nanflow: "PastTenseHistogram"
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.CENTRALLY_BIN
    __hash__ = None

    def children(self) -> Iterator[tuple[str, "PastTenseHistogram"]]:
        for k, v in self.bins.items():
            yield f"bins[{k!r}]", v
        yield "nanflow", self.nanflow


@dataclass(frozen=True)
class IrregularlyBinned:
    """Bins keyed by lower edge; the leftmost edge may be ``-inf``."""

    entries: float
    bins: Mapping[float, "PastTenseHistogram"]
    nanflow: "PastTenseHistogram"
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.IRREGULARLY_BIN
    __hash__ = None

    def children(self) -> Iterator[tuple[str, "PastTenseHistogram"]]:
        for k, v in self.bins.items():
            yield f"bins[{k!r}]", v
        yield "nanflow", self.nanflow


@dataclass(frozen=True)
class Categorized:
    entries: float
    bins: Mapping[str, "PastTenseHistogram"]
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.CATEGORIZE
    __hash__ = None

    def children(self) -> Iterator[tuple[str, "PastTenseHistogram"]]:
        for k, v in self.bins.items():
            yield f"bins[{k!r}]", v


@dataclass(frozen=True)
class Fractioned:
    """Numerator/denominator pair of the same aggregator kind."""

    entries: float
    numerator: "PastTenseHistogram"
    denominator: "PastTenseHistogram"
    name: str | None = None

    kind: ClassVar[AggregatorKind] = AggregatorKind.FRACTION

    def children(self) -> Iterator[tuple[str, "PastTenseHistogram"]]:
        yield "numerator", self.numerator
        yield "denominator", self.denominator


PastTenseHistogram = Union[
    Counted,
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
]

# one entry per AggregatorKind, in wire-tag order
VARIANTS: dict[AggregatorKind, type] = {
    cls.kind: cls
    for cls in (
        Counted,
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
}
