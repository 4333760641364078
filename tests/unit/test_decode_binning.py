import math

import pytest

from pasthisto import (
    Binned,
    CentrallyBinned,
    Counted,
    DecodeOptions,
    InvalidBinKey,
    InvalidNumber,
    IrregularlyBinned,
    MissingField,
    SparselyBinned,
    Summed,
    TypeMismatch,
    UnknownAggregatorType,
    decode,
)
from tests.helpers.documents import binned_data, document, irregular_data, sparse_data


# ---------------------------------------------------------------------------
# Bin


def test_bin_of_counts():
    h = decode(document("Bin", binned_data()))
    assert isinstance(h, Binned)
    assert (h.low, h.high, h.num) == (0.0, 3.0, 3)
    assert h.values == (Counted(1.0), Counted(2.0), Counted(3.0))
    assert h.underflow == Counted(1.0)


def test_bin_values_name_stamped_on_every_element():
    data = binned_data(values_name="X")
    data["values:type"] = "Sum"
    data["values"] = [{"entries": 1, "sum": 1}, {"entries": 2, "sum": 2, "name": "own"}]
    h = decode(document("Bin", data))
    assert [v.name for v in h.values] == ["X", "X"]
    assert isinstance(h.values[1], Summed)


def test_bin_without_values_name_keeps_own_names():
    data = binned_data()
    data["values:type"] = "Sum"
    data["values"] = [{"entries": 1, "sum": 1, "name": "own"}]
    h = decode(document("Bin", data))
    assert h.values[0].name == "own"


def test_bin_flow_bins_are_independent_aggregators():
    data = binned_data()
    data["underflow:type"] = "Sum"
    data["underflow"] = {"entries": 4.0, "sum": 8.0}
    data["underflow:name"] = "under"
    h = decode(document("Bin", data))
    assert h.underflow == Summed(entries=4.0, sum=8.0, name="under")
    assert h.overflow == Counted(1.0)


def test_bin_low_high_reject_sentinels():
    data = binned_data()
    data["high"] = "inf"
    with pytest.raises(TypeMismatch) as exc:
        decode(document("Bin", data))
    assert exc.value.path == "data.high"


def test_bin_missing_type_sibling():
    data = binned_data()
    del data["nanflow:type"]
    with pytest.raises(MissingField) as exc:
        decode(document("Bin", data))
    assert exc.value.field == "nanflow:type"


def test_bin_unknown_child_type():
    data = binned_data()
    data["values:type"] = "Counter"
    with pytest.raises(UnknownAggregatorType) as exc:
        decode(document("Bin", data))
    assert exc.value.path == "data.values:type"


def test_bin_error_path_points_into_list():
    data = binned_data(values=(1.0, 2.0, 3.0))
    data["values"][2] = "three"
    with pytest.raises(InvalidNumber) as exc:
        decode(document("Bin", data))
    assert exc.value.path == "data.values[2]"


def test_nested_bin_of_bins():
    inner = binned_data(values=(1.0,))
    data = binned_data()
    data["values:type"] = "Bin"
    data["values:name"] = "inner"
    data["values"] = [inner, inner]
    h = decode(document("Bin", data))
    assert [v.name for v in h.values] == ["inner", "inner"]
    assert h.values[0].values == (Counted(1.0),)
    assert h.values[0] is not h.values[1]


# ---------------------------------------------------------------------------
# SparselyBin


def test_sparse_integer_keys():
    h = decode(document("SparselyBin", sparse_data()))
    assert isinstance(h, SparselyBinned)
    assert dict(h.bins) == {-4: Counted(10.0), 2: Counted(30.0)}
    assert (h.bin_width, h.origin) == (2.0, 0.0)
    assert list(h.bins) == [-4, 2]


def test_sparse_only_present_keys():
    h = decode(document("SparselyBin", sparse_data({"5": 1.0})))
    assert list(h.bins) == [5]


def test_sparse_non_integer_key():
    with pytest.raises(InvalidBinKey) as exc:
        decode(document("SparselyBin", sparse_data({"1.5": 1.0, "2": 1.0})))
    assert exc.value.key == "1.5"


def test_sparse_key_with_too_many_digits(int_digit_limit):
    key = "1" * (int_digit_limit + 700)
    with pytest.raises(InvalidBinKey) as exc:
        decode(document("SparselyBin", sparse_data({key: 1.0})))
    assert exc.value.key == key


def test_keyed_bins_are_not_hashable():
    h = decode(document("SparselyBin", sparse_data()))
    with pytest.raises(TypeError):
        hash(h)
    with pytest.raises(TypeError):
        hash(decode(document("IrregularlyBin", irregular_data())))


def test_sparse_bins_name():
    data = sparse_data()
    data["bins:type"] = "Sum"
    data["bins:name"] = "b"
    data["bins"] = {"0": {"entries": 1, "sum": 2}}
    h = decode(document("SparselyBin", data))
    assert h.bins[0] == Summed(1.0, 2.0, "b")


def test_sparse_bins_must_be_object():
    data = sparse_data()
    data["bins"] = [1.0]
    with pytest.raises(TypeMismatch):
        decode(document("SparselyBin", data))


# ---------------------------------------------------------------------------
# CentrallyBin / IrregularlyBin


def centrally(bins):
    return document("CentrallyBin", {
        "entries": 10.0,
        "bins:type": "Count",
        "bins": bins,
        "nanflow:type": "Count",
        "nanflow": 0.0,
    })


def test_centrally_bin():
    h = decode(centrally([{"center": 1.5, "data": 3.0}, {"center": -2.0, "data": 7.0}]))
    assert isinstance(h, CentrallyBinned)
    assert dict(h.bins) == {-2.0: Counted(7.0), 1.5: Counted(3.0)}
    assert list(h.bins) == [-2.0, 1.5]


def test_centrally_bin_centers_are_finite_only_by_default():
    # assumption: no evidence of infinite centers on the wire
    with pytest.raises(InvalidNumber) as exc:
        decode(centrally([{"center": "inf", "data": 1.0}]))
    assert exc.value.path == "data.bins[0].center"


def test_centrally_bin_infinite_centers_opt_in():
    h = decode(centrally([{"center": "-inf", "data": 1.0}]), DecodeOptions(finite_centers=False))
    assert list(h.bins) == [-math.inf]


def test_nan_threshold_always_rejected():
    with pytest.raises(InvalidNumber):
        decode(centrally([{"center": "nan", "data": 1.0}]), DecodeOptions(finite_centers=False))
    with pytest.raises(InvalidNumber):
        decode(document("IrregularlyBin", irregular_data([{"atleast": "nan", "data": 1.0}])))


def test_irregular_bin_negative_infinity_edge():
    h = decode(document("IrregularlyBin", irregular_data()))
    assert isinstance(h, IrregularlyBinned)
    assert h.bins[-math.inf] == Counted(23.0)
    assert list(h.bins) == [-math.inf, 1.0, 4.0]


def test_irregular_bin_record_missing_data():
    with pytest.raises(MissingField) as exc:
        decode(document("IrregularlyBin", irregular_data([{"atleast": 1.0}])))
    assert exc.value.path == "data.bins[0]"


def test_irregular_bins_name():
    data = irregular_data()
    data["bins:type"] = "Average"
    data["bins:name"] = "avg"
    data["bins"] = [{"atleast": 0, "data": {"entries": 2, "mean": 0.5, "name": "mine"}}]
    h = decode(document("IrregularlyBin", data))
    assert h.bins[0.0].name == "avg"
