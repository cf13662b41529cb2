"""
Tests for IDS decomposition parsing
"""
import pytest

from hanzidb.decomposition import is_description_operator, parse_decomposition


def test_above_below_yields_components_in_order():
    assert parse_decomposition("⿱日十") == ["日", "十"]


def test_duplicates_are_kept():
    assert parse_decomposition("⿰木木") == ["木", "木"]


def test_nested_sequence_drops_every_operator():
    # 碧 = ⿱⿰王白石
    assert parse_decomposition("⿱⿰王白石") == ["王", "白", "石"]


@pytest.mark.parametrize("sequence", ["", None, "⿰", "⿰⿱⿻"])
def test_empty_or_operator_only_input(sequence):
    assert parse_decomposition(sequence) == []


def test_malformed_sequence_keeps_non_operators():
    assert parse_decomposition("木⿰?木") == ["木", "?", "木"]


def test_operator_range_boundaries():
    assert is_description_operator("⿰")
    assert is_description_operator("⿻")
    assert not is_description_operator("⿯")
    assert not is_description_operator("⿼")
    # outside the range, kept as literal components
    assert parse_decomposition("⿼⿯") == ["⿼", "⿯"]
