"""Unit tests for descriptor parsing."""

import pytest

from forest_data.data import AttributeKind, format_descriptor, parse_descriptor
from forest_data.errors import MalformedDescriptor

N = AttributeKind.NUMERICAL
C = AttributeKind.CATEGORICAL
L = AttributeKind.LABEL
I = AttributeKind.IGNORED  # noqa: E741


def test_parse_descriptor_comma_and_space_separated():
    assert parse_descriptor("N,C,L") == [N, C, L]
    assert parse_descriptor("I N  C L") == [I, N, C, L]
    assert parse_descriptor(" n, c , l ,") == [N, C, L]


def test_parse_descriptor_expands_repeat_counts():
    assert parse_descriptor("2 N, C, 3 I, L") == [N, N, C, I, I, I, L]


@pytest.mark.parametrize(
    "descriptor",
    ["", "   ", "N,C", "N,L,L", "N,X,L", "N,3", "2 3 N L", "0 N L", "² N, L", "٣ N, L"],
)
def test_parse_descriptor_rejects_malformed(descriptor):
    with pytest.raises(MalformedDescriptor):
        parse_descriptor(descriptor)


def test_malformed_descriptor_is_a_value_error():
    with pytest.raises(ValueError, match="exactly one label"):
        parse_descriptor("N,C")


def test_format_descriptor_round_trips_kinds():
    kinds = parse_descriptor("I, 2 N, C, L")
    assert format_descriptor(kinds) == "I,N,N,C,L"
    assert parse_descriptor(format_descriptor(kinds)) == kinds


def test_kind_predicates():
    assert C.is_coded and L.is_coded
    assert not N.is_coded and not I.is_coded
    assert I.is_ignored and N.is_numerical and C.is_categorical and L.is_label
