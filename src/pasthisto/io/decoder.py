"""Histogrammar JSON -> snapshot tree decoder.

Document shape::

    {"version": "1.0", "type": "<Tag>", "data": <payload>}

Container payloads declare the kind of their children out of band, through
sibling fields next to the child slot::

    "values:type": "Count"      # required: wire tag of the child(ren)
    "values:name": "x"          # optional: name stamped on the child(ren)
    "values": [...]             # the child payload(s)

:meth:`HistogramDecoder.resolve` reads such a sibling pair once and returns a
:class:`SubDecoder`; every container goes through it, only the shape of the
payload (single value, list, keyed object, record array) differs.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, ClassVar

from pasthisto.domain.model import (
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
    frozen_mapping,
)
from pasthisto.domain.naming import apply_name

from .errors import (
    DecodeError,
    InvalidNumber,
    InvalidRangeSpecifier,
    TypeMismatch,
    VectorLengthMismatch,
)
from .fields import (
    child_path,
    get_array,
    get_field,
    get_object,
    get_optional_string,
    get_string,
    index_path,
    require_object,
)
from .keys import parse_int_key, parse_keys, rename_values
from .numbers import (
    decode_histogrammar_float,
    get_histogrammar_float,
    get_plain_number,
)
from .registry import AggregatorKind, kind_from_tag
from .version import check_version

__all__ = ["DecodeOptions", "SubDecoder", "HistogramDecoder"]

logger = logging.getLogger(__name__)

VariantDecoder = Callable[[Any, str], PastTenseHistogram]

_VECTOR_RANGE = re.compile(r"N([1-9][0-9]*)")


@dataclass(frozen=True)
class DecodeOptions:
    """Decoder switches.

    Attributes
    ----------
    finite_centers : bool, default True
        Reject ``inf``/``-inf`` as CentrallyBin centers. NaN thresholds are
        rejected regardless.
    """

    finite_centers: bool = True


@dataclass(frozen=True)
class SubDecoder:
    """Resolved ``<prefix>:type`` / ``<prefix>:name`` sibling pair."""

    kind: AggregatorKind
    name: str | None
    decode: VariantDecoder

    def decode_named(self, payload: Any, path: str) -> PastTenseHistogram:
        return apply_name(self.name, self.decode(payload, path))


class HistogramDecoder:
    """Stateless decoder; one instance may be shared between threads."""

    _DISPATCH: ClassVar[dict[AggregatorKind, str]] = {
        AggregatorKind.COUNT: "_decode_count",
        AggregatorKind.SUM: "_decode_sum",
        AggregatorKind.AVERAGE: "_decode_average",
        AggregatorKind.DEVIATE: "_decode_deviate",
        AggregatorKind.MINIMIZE: "_decode_minimize",
        AggregatorKind.MAXIMIZE: "_decode_maximize",
        AggregatorKind.BAG: "_decode_bag",
        AggregatorKind.BIN: "_decode_bin",
        AggregatorKind.SPARSELY_BIN: "_decode_sparsely_bin",
        AggregatorKind.CENTRALLY_BIN: "_decode_centrally_bin",
        AggregatorKind.IRREGULARLY_BIN: "_decode_irregularly_bin",
        AggregatorKind.CATEGORIZE: "_decode_categorize",
        AggregatorKind.FRACTION: "_decode_fraction",
    }

    def __init__(self, options: DecodeOptions | None = None) -> None:
        self.options = options or DecodeOptions()

    # ------------------------------------------------------------------
    # Entry point / dispatch
    # ------------------------------------------------------------------

    def decode(self, document: Any) -> PastTenseHistogram:
        """Decode a parsed top-level document.

        The version is validated before ``type`` and ``data`` are looked at.
        """
        try:
            doc = require_object(document, "")
            check_version(get_field(doc, "version", ""))
            kind = kind_from_tag(get_string(doc, "type", ""), "type")
            result = self.decode_kind(kind, get_field(doc, "data", ""), "data")
        except DecodeError as e:
            logger.debug("[decode] rejected document: %s at %r", type(e).__name__, e.path)
            raise
        logger.debug("[decode] accepted %s document (entries=%r)", kind.tag, result.entries)
        return result

    def decoder_for(self, kind: AggregatorKind) -> VariantDecoder:
        return getattr(self, self._DISPATCH[kind])

    def decode_kind(self, kind: AggregatorKind, payload: Any, path: str) -> PastTenseHistogram:
        return self.decoder_for(kind)(payload, path)

    def resolve(self, obj: dict, prefix: str, path: str) -> SubDecoder:
        """Read ``<prefix>:type`` (required) and ``<prefix>:name`` (optional)."""
        type_field = f"{prefix}:type"
        kind = kind_from_tag(get_string(obj, type_field, path), child_path(path, type_field))
        name = get_optional_string(obj, f"{prefix}:name", path)
        return SubDecoder(kind=kind, name=name, decode=self.decoder_for(kind))

    def _sub_value(self, obj: dict, prefix: str, path: str) -> PastTenseHistogram:
        sub = self.resolve(obj, prefix, path)
        return sub.decode_named(get_field(obj, prefix, path), child_path(path, prefix))

    # ------------------------------------------------------------------
    # Leaf aggregators
    # ------------------------------------------------------------------

    def _decode_count(self, data: Any, path: str) -> Counted:
        # the payload *is* the entries value
        return Counted(entries=decode_histogrammar_float(data, path))

    def _decode_sum(self, data: Any, path: str) -> Summed:
        obj = require_object(data, path)
        return Summed(
            entries=get_histogrammar_float(obj, "entries", path),
            sum=get_histogrammar_float(obj, "sum", path),
            name=get_optional_string(obj, "name", path),
        )

    def _decode_average(self, data: Any, path: str) -> Averaged:
        obj = require_object(data, path)
        return Averaged(
            entries=get_histogrammar_float(obj, "entries", path),
            mean=get_histogrammar_float(obj, "mean", path),
            name=get_optional_string(obj, "name", path),
        )

    def _decode_deviate(self, data: Any, path: str) -> Deviated:
        obj = require_object(data, path)
        return Deviated(
            entries=get_histogrammar_float(obj, "entries", path),
            mean=get_histogrammar_float(obj, "mean", path),
            variance=get_histogrammar_float(obj, "variance", path),
            name=get_optional_string(obj, "name", path),
        )

    def _decode_minimize(self, data: Any, path: str) -> Minimized:
        obj = require_object(data, path)
        return Minimized(
            entries=get_histogrammar_float(obj, "entries", path),
            min=get_histogrammar_float(obj, "min", path),
            name=get_optional_string(obj, "name", path),
        )

    def _decode_maximize(self, data: Any, path: str) -> Maximized:
        obj = require_object(data, path)
        return Maximized(
            entries=get_histogrammar_float(obj, "entries", path),
            max=get_histogrammar_float(obj, "max", path),
            name=get_optional_string(obj, "name", path),
        )

    # ------------------------------------------------------------------
    # Bag
    # ------------------------------------------------------------------

    def _decode_bag(self, data: Any, path: str) -> Bagged:
        obj = require_object(data, path)
        entries = get_histogrammar_float(obj, "entries", path)
        range_spec = get_string(obj, "range", path)
        records = get_array(obj, "values", path)
        values_path = child_path(path, "values")

        weighted: list[tuple[Any, float]] = []
        for i, item in enumerate(records):
            rp = index_path(values_path, i)
            rec = require_object(item, rp)
            weighted.append((get_field(rec, "v", rp), get_plain_number(rec, "w", rp)))

        return Bagged(
            entries=entries,
            values=self._bag_values(range_spec, weighted, path),
            name=get_optional_string(obj, "name", path),
        )

    def _bag_values(self, range_spec: str, weighted: list[tuple[Any, float]], path: str) -> BagValues:
        values_path = child_path(path, "values")
        if range_spec == "N":
            return BagOfFloatToFloat(
                values=frozen_mapping(
                    (decode_histogrammar_float(v, child_path(index_path(values_path, i), "v")), w)
                    for i, (v, w) in enumerate(weighted)
                )
            )
        if range_spec == "S":
            out: dict[str, float] = {}
            for i, (v, w) in enumerate(weighted):
                if not isinstance(v, str):
                    raise TypeMismatch("string", v, child_path(index_path(values_path, i), "v"))
                out[v] = w
            return BagOfFloatToString(values=frozen_mapping(out))
        m = _VECTOR_RANGE.fullmatch(range_spec)
        if m is None:
            raise InvalidRangeSpecifier(range_spec, child_path(path, "range"))
        try:
            dimension = int(m.group(1))
        except ValueError as e:
            raise InvalidRangeSpecifier(range_spec, child_path(path, "range")) from e
        vectors: dict[tuple[float, ...], float] = {}
        for i, (v, w) in enumerate(weighted):
            vp = child_path(index_path(values_path, i), "v")
            if not isinstance(v, list):
                raise TypeMismatch("array", v, vp)
            if len(v) != dimension:
                raise VectorLengthMismatch(dimension, len(v), vp)
            key = tuple(decode_histogrammar_float(x, index_path(vp, j)) for j, x in enumerate(v))
            vectors[key] = w
        return BagOfFloatToFloatVector(dimension=dimension, values=frozen_mapping(vectors))

    # ------------------------------------------------------------------
    # Binning containers
    # ------------------------------------------------------------------

    def _decode_bin(self, data: Any, path: str) -> Binned:
        obj = require_object(data, path)
        sub = self.resolve(obj, "values", path)
        values_path = child_path(path, "values")
        values = tuple(
            sub.decode_named(item, index_path(values_path, i))
            for i, item in enumerate(get_array(obj, "values", path))
        )
        return Binned(
            entries=get_histogrammar_float(obj, "entries", path),
            low=get_plain_number(obj, "low", path),
            high=get_plain_number(obj, "high", path),
            values=values,
            underflow=self._sub_value(obj, "underflow", path),
            overflow=self._sub_value(obj, "overflow", path),
            nanflow=self._sub_value(obj, "nanflow", path),
            name=get_optional_string(obj, "name", path),
        )

    def _decode_sparsely_bin(self, data: Any, path: str) -> SparselyBinned:
        obj = require_object(data, path)
        sub = self.resolve(obj, "bins", path)
        bins_path = child_path(path, "bins")
        keyed = parse_keys(get_object(obj, "bins", path), parse_int_key, bins_path)
        decoded = {k: sub.decode(keyed[k], index_path(bins_path, k)) for k in sorted(keyed)}
        return SparselyBinned(
            entries=get_histogrammar_float(obj, "entries", path),
            bin_width=get_plain_number(obj, "binWidth", path),
            origin=get_plain_number(obj, "origin", path),
            bins=frozen_mapping(rename_values(decoded, sub.name)),
            nanflow=self._sub_value(obj, "nanflow", path),
            name=get_optional_string(obj, "name", path),
        )

    def _threshold_bins(self, obj: dict, key_field: str, path: str, allow_inf: bool) -> dict:
        """Decode ``[{key_field: x, "data": ...}, ...]`` into ``{x: child}``."""
        sub = self.resolve(obj, "bins", path)
        bins_path = child_path(path, "bins")
        out: dict[float, PastTenseHistogram] = {}
        for i, item in enumerate(get_array(obj, "bins", path)):
            rp = index_path(bins_path, i)
            rec = require_object(item, rp)
            key = get_histogrammar_float(rec, key_field, rp)
            if math.isnan(key):
                raise InvalidNumber(rec[key_field], child_path(rp, key_field), f"bin {key_field} must not be nan")
            if math.isinf(key) and not allow_inf:
                raise InvalidNumber(rec[key_field], child_path(rp, key_field), f"bin {key_field} must be finite")
            out[key] = sub.decode(get_field(rec, "data", rp), child_path(rp, "data"))
        return rename_values(dict(sorted(out.items())), sub.name)

    def _decode_centrally_bin(self, data: Any, path: str) -> CentrallyBinned:
        obj = require_object(data, path)
        bins = self._threshold_bins(obj, "center", path, allow_inf=not self.options.finite_centers)
        return CentrallyBinned(
            entries=get_histogrammar_float(obj, "entries", path),
            bins=frozen_mapping(bins),
            nanflow=self._sub_value(obj, "nanflow", path),
            name=get_optional_string(obj, "name", path),
        )

    def _decode_irregularly_bin(self, data: Any, path: str) -> IrregularlyBinned:
        obj = require_object(data, path)
        bins = self._threshold_bins(obj, "atleast", path, allow_inf=True)
        return IrregularlyBinned(
            entries=get_histogrammar_float(obj, "entries", path),
            bins=frozen_mapping(bins),
            nanflow=self._sub_value(obj, "nanflow", path),
            name=get_optional_string(obj, "name", path),
        )

    def _decode_categorize(self, data: Any, path: str) -> Categorized:
        obj = require_object(data, path)
        sub = self.resolve(obj, "bins", path)
        bins_path = child_path(path, "bins")
        # category keys are kept verbatim, in wire order
        decoded = {
            k: sub.decode(v, child_path(bins_path, k))
            for k, v in get_object(obj, "bins", path).items()
        }
        return Categorized(
            entries=get_histogrammar_float(obj, "entries", path),
            bins=frozen_mapping(rename_values(decoded, sub.name)),
            name=get_optional_string(obj, "name", path),
        )

    def _decode_fraction(self, data: Any, path: str) -> Fractioned:
        obj = require_object(data, path)
        # numerator and denominator share one sub:type / sub:name pair
        sub = self.resolve(obj, "sub", path)
        return Fractioned(
            entries=get_histogrammar_float(obj, "entries", path),
            numerator=sub.decode_named(get_field(obj, "numerator", path), child_path(path, "numerator")),
            denominator=sub.decode_named(get_field(obj, "denominator", path), child_path(path, "denominator")),
            name=get_optional_string(obj, "name", path),
        )


if set(HistogramDecoder._DISPATCH) != set(AggregatorKind):  # pragma: no cover - import-time guard
    raise ImportError("HistogramDecoder does not handle every AggregatorKind")
