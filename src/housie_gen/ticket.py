"""Immutable ticket value handed to callers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .layout import COLUMNS, ROWS

Cell = Optional[int]
Row = Tuple[Cell, ...]


@dataclass(frozen=True)
class Ticket:
    """A 3x9 grid indexed ``ticket[row][col]``; ``None`` marks a blank cell."""

    rows: Tuple[Row, ...]

    def __post_init__(self) -> None:
        if len(self.rows) != ROWS or any(len(row) != COLUMNS for row in self.rows):
            raise ValueError(f"Ticket must be {ROWS}x{COLUMNS}")

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[Cell]]) -> Ticket:
        rows: List[Row] = []
        for row in matrix:
            cells: List[Cell] = []
            for cell in row:
                if cell is not None and (isinstance(cell, bool) or not isinstance(cell, int)):
                    raise ValueError(f"Ticket cells must be int or None, got {cell!r}")
                cells.append(cell)
            rows.append(tuple(cells))
        return cls(rows=tuple(rows))

    def __getitem__(self, row: int) -> Row:
        return self.rows[row]

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def column(self, col: int) -> List[Cell]:
        return [row[col] for row in self.rows]

    def numbers(self) -> List[int]:
        """Filled values in row-major order."""
        return [cell for row in self.rows for cell in row if cell is not None]

    def row_counts(self) -> List[int]:
        return [sum(1 for cell in row if cell is not None) for row in self.rows]

    def column_counts(self) -> List[int]:
        return [sum(1 for cell in self.column(c) if cell is not None) for c in range(COLUMNS)]

    def to_matrix(self) -> List[List[Cell]]:
        return [list(row) for row in self.rows]
