from __future__ import annotations

from hypothesis import given, strategies as st

from housie_gen.feasibility import check_distribution
from housie_gen.layout import DEFAULT_COLUMN_COUNTS


def test_default_distribution_always_succeeds():
    result = check_distribution(DEFAULT_COLUMN_COUNTS)
    assert result.feasible
    assert result.reasons == []


def test_wrong_total_is_infeasible():
    result = check_distribution([2, 2, 2, 2, 2, 2, 1, 1, 0])
    assert not result.feasible
    assert any("sum" in r for r in result.reasons)


def test_wrong_length_is_infeasible():
    assert not check_distribution([3, 3, 3, 3, 3]).feasible


def test_count_above_three_is_infeasible():
    assert not check_distribution([4, 2, 2, 2, 1, 1, 1, 1, 1]).feasible


def test_too_few_columns_of_two_is_infeasible():
    # Row 1 can only ever hold 3 values.
    result = check_distribution([3, 3, 3, 1, 1, 1, 1, 1, 1])
    assert not result.feasible
    assert any("row 1" in r for r in result.reasons)


def test_columns_of_three_block_row_two():
    # Rows 0 and 1 hold 5 each already, row 2 holds 5 columns of three.
    result = check_distribution([3, 3, 3, 3, 3, 0, 0, 0, 0])
    assert result.feasible


@given(st.lists(st.integers(min_value=0, max_value=3), min_size=9, max_size=9))
def test_infeasible_layouts_explain_themselves(counts):
    result = check_distribution(counts)
    assert result.feasible == (not result.reasons)
