import logging
import math

import pytest

from pasthisto import (
    Averaged,
    Counted,
    DecodeError,
    Deviated,
    IncompatibleVersion,
    InvalidNumber,
    Maximized,
    MissingField,
    Minimized,
    Summed,
    TypeMismatch,
    UnknownAggregatorType,
    decode,
)
from tests.helpers.documents import count_doc, document, sum_data


def test_count():
    assert decode(count_doc(123.0)) == Counted(entries=123.0)


def test_count_accepts_integer_and_sentinel():
    assert decode(count_doc(5)).entries == 5.0
    assert decode(count_doc("inf")).entries == math.inf


def test_sum_with_infinite_and_nan_entries():
    assert decode(document("Sum", sum_data(entries="inf"))).entries == math.inf
    nan_sum = decode(document("Sum", sum_data(entries="nan")))
    assert math.isnan(nan_sum.entries)


def test_sum_name_optional():
    assert decode(document("Sum", sum_data())) == Summed(entries=10.0, sum=3.5)
    assert decode(document("Sum", sum_data(name="px"))).name == "px"


def test_average_deviate_minimize_maximize():
    assert decode(document("Average", {"entries": 10, "mean": 4.2, "name": "a"})) == Averaged(10.0, 4.2, "a")
    assert decode(document("Deviate", {"entries": 10, "mean": 4.2, "variance": "nan"})).variance != 0.0
    d = decode(document("Deviate", {"entries": 10, "mean": 4.2, "variance": 1.5}))
    assert d == Deviated(entries=10.0, mean=4.2, variance=1.5)
    assert decode(document("Minimize", {"entries": 0, "min": "inf"})) == Minimized(0.0, math.inf)
    assert decode(document("Maximize", {"entries": 0, "max": "-inf"})) == Maximized(0.0, -math.inf)


def test_version_checked_before_payload():
    # payload and type are garbage, the version failure must win
    with pytest.raises(IncompatibleVersion):
        decode({"version": "2.0", "type": "Nope", "data": None})


def test_version_two_fails_even_for_valid_payload():
    with pytest.raises(IncompatibleVersion):
        decode(count_doc() | {"version": "2.0"})


def test_unknown_top_level_type():
    with pytest.raises(UnknownAggregatorType) as exc:
        decode(document("Histogram", 1.0))
    assert exc.value.path == "type"


@pytest.mark.parametrize("missing", ["version", "type", "data"])
def test_missing_top_level_field(missing):
    doc = count_doc()
    del doc[missing]
    with pytest.raises(MissingField) as exc:
        decode(doc)
    assert exc.value.field == missing


def test_document_must_be_object():
    with pytest.raises(TypeMismatch):
        decode([1, 2, 3])


def test_missing_statistic():
    with pytest.raises(MissingField) as exc:
        decode(document("Average", {"entries": 1.0}))
    assert exc.value.field == "mean"
    assert exc.value.path == "data"


def test_invalid_number_carries_path():
    with pytest.raises(InvalidNumber) as exc:
        decode(document("Sum", sum_data(total="lots")))
    assert exc.value.path == "data.sum"
    assert "lots" in str(exc.value)


def test_name_must_be_string():
    with pytest.raises(TypeMismatch):
        decode(document("Sum", {"entries": 1, "sum": 1, "name": 3}))


def test_payload_of_wrong_kind():
    with pytest.raises(TypeMismatch):
        decode(document("Sum", [1.0, 2.0]))


def test_all_errors_share_a_base_class():
    for doc in ({"version": "x"}, document("Sum", {}), document("Count", "many")):
        with pytest.raises(DecodeError):
            decode(doc)


def test_oversized_integer_literal_is_a_decode_error():
    with pytest.raises(InvalidNumber) as exc:
        decode(document("Sum", {"entries": 10**400, "sum": 1.0}))
    assert exc.value.path == "data.entries"


def test_rejected_document_logged_at_debug(caplog):
    caplog.set_level(logging.DEBUG, logger="pasthisto.io.decoder")
    with pytest.raises(MissingField):
        decode(document("Average", {"entries": 1.0}))
    assert "[decode] rejected document: MissingField at 'data'" in caplog.text
    assert all(r.levelno == logging.DEBUG for r in caplog.records)


def test_leaf_snapshots_are_hashable():
    assert hash(Counted(2.0)) == hash(decode(count_doc(2.0)))
    assert len({Summed(1.0, 2.0, "a"), Summed(1.0, 2.0, "a")}) == 1
