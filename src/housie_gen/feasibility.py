from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from .layout import COLUMNS, NUMBERS_PER_ROW, NUMBERS_PER_TICKET, ROWS, column_size


@dataclass
class Feasibility:
    feasible: bool
    reasons: List[str] = field(default_factory=list)


def check_distribution(counts: Sequence[int]) -> Feasibility:
    """Check a per-column count layout against the two-phase build.

    Phase 1 stacks each column from row 0 down, so row 0 holds every non-empty
    column, row 1 every column of two or more and row 2 every column of three.
    Phase 2 only ever moves cells from rows 0 and 1 into an empty row 2 slot.
    A layout is feasible when every possible sequence of random moves ends
    with five numbers per row.
    """
    reasons: List[str] = []
    counts = list(counts)
    if len(counts) != COLUMNS:
        return Feasibility(False, [f"expected {COLUMNS} column counts, got {len(counts)}"])
    for col, c in enumerate(counts):
        if c < 0 or c > ROWS:
            reasons.append(f"column {col}: count {c} outside 0..{ROWS}")
        elif c > column_size(col):
            reasons.append(f"column {col}: count {c} exceeds range size {column_size(col)}")
    if sum(counts) != NUMBERS_PER_TICKET:
        reasons.append(f"counts sum to {sum(counts)}, need {NUMBERS_PER_TICKET}")
    if reasons:
        return Feasibility(False, reasons)

    ones = sum(1 for c in counts if c == 1)
    twos = sum(1 for c in counts if c == 2)
    threes = sum(1 for c in counts if c == 3)
    row0 = ones + twos + threes
    row1 = twos + threes

    if row0 < NUMBERS_PER_ROW:
        reasons.append(f"row 0 starts with {row0} values, need at least {NUMBERS_PER_ROW}")
    if row1 < NUMBERS_PER_ROW:
        reasons.append(f"row 1 starts with {row1} values, need at least {NUMBERS_PER_ROW}")
    if reasons:
        return Feasibility(False, reasons)

    excess0 = row0 - NUMBERS_PER_ROW
    excess1 = row1 - NUMBERS_PER_ROW
    if excess0 > ones + twos:
        reasons.append(f"row 0 must shed {excess0} values but only {ones + twos} columns can take them")
        return Feasibility(False, reasons)

    # Worst case: every row 0 move lands in a column of two, using up its row 2 slot.
    remaining = twos - min(excess0, twos)
    if excess1 > remaining:
        reasons.append(f"row 1 must shed {excess1} values but may find only {remaining} columns")
        return Feasibility(False, reasons)
    return Feasibility(True, reasons)
