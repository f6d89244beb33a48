"""Unit tests for the value-to-code table."""

import pytest

from forest_data.data import CodeTable


def test_codes_follow_first_occurrence():
    table = CodeTable()
    assert [table.add(v) for v in ["red", "blue", "red", "green", "blue"]] == [0, 1, 0, 2, 1]
    assert table.to_list() == ["red", "blue", "green"]
    assert len(table) == 3
    assert table["green"] == 2
    assert table.value_of(1) == "blue"
    assert "red" in table and "pink" not in table


def test_unknown_lookups_raise():
    table = CodeTable.from_values(["a"])
    with pytest.raises(KeyError):
        table.code_of("b")
    with pytest.raises(IndexError):
        table.value_of(1)
    with pytest.raises(IndexError):
        table.value_of(-1)


def test_merge_appends_only_new_values_in_order():
    first = CodeTable.from_values(["x", "y"])
    second = CodeTable.from_values(["z", "x", "w"])
    first.merge(second)
    assert first.to_list() == ["x", "y", "z", "w"]


def test_from_values_rejects_duplicates():
    with pytest.raises(ValueError):
        CodeTable.from_values(["a", "b", "a"])


def test_equality_depends_on_code_order():
    assert CodeTable.from_values(["a", "b"]) == CodeTable.from_values(["a", "b"])
    assert CodeTable.from_values(["a", "b"]) != CodeTable.from_values(["b", "a"])
