from __future__ import annotations

from types import SimpleNamespace

import pytest

from chartpipeline.domain.record import MISSING, FieldPath, ensure_records, is_missing
from chartpipeline.errors import InvalidInputError


def test_field_path_reads_nested_mappings():
    record = {"orderInformation": {"orderDate": "2024-01-01"}}
    assert FieldPath("orderInformation.orderDate").read(record) == "2024-01-01"


def test_field_path_reads_attribute_objects():
    record = SimpleNamespace(approval=SimpleNamespace(buyerApprovalDate="2024-02-02"))
    assert FieldPath("approval.buyerApprovalDate").read(record) == "2024-02-02"


@pytest.mark.parametrize(
    "record",
    [
        {},
        {"orderInformation": {}},
        {"orderInformation": None},
        {"orderInformation": {"orderDate": None}},
    ],
)
def test_field_path_returns_missing_marker(record):
    value = FieldPath("orderInformation.orderDate").read(record)
    assert value is MISSING
    assert is_missing(value)
    assert not value


def test_field_path_rejects_descending_into_scalars():
    with pytest.raises(InvalidInputError):
        FieldPath("orderInformation.orderDate").read({"orderInformation": "2024-01-01"})


@pytest.mark.parametrize("path", ["", "a..b", ".a", "a."])
def test_field_path_validates_syntax(path):
    with pytest.raises(ValueError):
        FieldPath(path)


@pytest.mark.parametrize("records", [None, "abc", {"a": 1}, 42])
def test_ensure_records_rejects_non_arrays(records):
    with pytest.raises(InvalidInputError):
        ensure_records(records)


def test_ensure_records_accepts_lists_and_tuples():
    assert ensure_records([]) == []
    assert ensure_records(({"a": 1},)) == ({"a": 1},)
