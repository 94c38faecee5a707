import numpy as np
import pytest

from owacoverage.errors import InvalidValuationError
from owacoverage.valuation import (
    FALSE, TRUE, UNKNOWN, Valuation,
    count_unknowns, format_tag_vector, is_concrete, parse_tag_vector,
    tag_vector, truth_vector, unknown_positions,
)


def test_three_legal_states():
    assert UNKNOWN.is_unknown and not UNKNOWN.is_true and not UNKNOWN.is_false
    assert TRUE.is_true and not TRUE.is_unknown
    assert FALSE.is_false and not FALSE.is_unknown
    assert [str(x) for x in (UNKNOWN, TRUE, FALSE)] == ["?", "T", "F"]


def test_illegal_fourth_combination_rejected():
    with pytest.raises(InvalidValuationError):
        Valuation(True, True)
    # also a ValueError for callers that only know the builtin
    with pytest.raises(ValueError):
        Valuation(True, True, ground_truth=False)


def test_non_boolean_flags_rejected():
    with pytest.raises(InvalidValuationError):
        Valuation(1, 0)


def test_numpy_booleans_normalized():
    v = Valuation(np.bool_(True), np.bool_(False))
    assert v == TRUE
    assert type(v.condition) is bool


def test_ground_truth_ignored_by_equality_and_hash():
    a = Valuation.unknown(True)
    b = Valuation.unknown(False)
    assert a == b == UNKNOWN
    assert len({a, b, UNKNOWN}) == 1
    assert len({(a, TRUE), (b, TRUE)}) == 1


def test_resolved_truth():
    assert TRUE.resolved_truth() is True
    assert FALSE.resolved_truth() is False
    assert UNKNOWN.resolved_truth() is None
    assert Valuation.unknown(False).resolved_truth() is False


def test_tag_vector_coercions():
    v = tag_vector([TRUE, False, None, "?", (True, False)])
    assert format_tag_vector(v) == "TF??T"
    assert isinstance(v, tuple)


def test_tag_vector_bad_symbol():
    with pytest.raises(InvalidValuationError):
        tag_vector(["X"])
    with pytest.raises(InvalidValuationError):
        tag_vector([3.5])


def test_parse_and_helpers():
    v = parse_tag_vector("T?, F?")
    assert format_tag_vector(v) == "T?F?"
    assert count_unknowns(v) == 2
    assert unknown_positions(v) == (1, 3)
    assert not is_concrete(v)
    assert is_concrete(parse_tag_vector("TF"))


def test_truth_vector():
    v = (TRUE, Valuation.unknown(True), FALSE)
    assert truth_vector(v) == (True, True, False)
    assert truth_vector((TRUE, UNKNOWN)) is None
