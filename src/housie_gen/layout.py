from __future__ import annotations

from typing import List, Tuple

ROWS = 3
COLUMNS = 9
NUMBERS_PER_ROW = 5
NUMBERS_PER_TICKET = ROWS * NUMBERS_PER_ROW
MIN_NUMBER = 1
MAX_NUMBER = 90

# Inclusive (lo, hi) per column. Column 8 also takes 90, so it spans 11 values.
COLUMN_RANGES: Tuple[Tuple[int, int], ...] = (
    (1, 9),
    (10, 19),
    (20, 29),
    (30, 39),
    (40, 49),
    (50, 59),
    (60, 69),
    (70, 79),
    (80, 90),
)

# Six columns of two and three columns of one: 6*2 + 3*1 == 15.
DEFAULT_COLUMN_COUNTS: Tuple[int, ...] = (2, 2, 2, 2, 2, 2, 1, 1, 1)


def column_values(col: int) -> List[int]:
    """All numbers column `col` may hold, ascending."""
    lo, hi = COLUMN_RANGES[col]
    return list(range(lo, hi + 1))


def column_size(col: int) -> int:
    lo, hi = COLUMN_RANGES[col]
    return hi - lo + 1


def in_column_range(col: int, number: int) -> bool:
    lo, hi = COLUMN_RANGES[col]
    return lo <= number <= hi


def column_of(number: int) -> int:
    """Map a number in 1..90 to the column that owns it."""
    if not MIN_NUMBER <= number <= MAX_NUMBER:
        raise ValueError(f"Number out of range {MIN_NUMBER}..{MAX_NUMBER}: {number}")
    if number == MAX_NUMBER:
        return COLUMNS - 1
    return number // 10
