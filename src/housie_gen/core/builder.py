"""Housie ticket builder: two-phase placement with bounded retries."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Set

from ..feasibility import check_distribution
from ..layout import COLUMNS, DEFAULT_COLUMN_COUNTS, NUMBERS_PER_ROW, ROWS, column_values
from ..rng import RandomSource, create_rng, derive_parallel_seed, fresh_seed
from ..ticket import Cell, Ticket
from .constraints import TicketChecker

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10

Grid = List[List[Cell]]


class ConstraintUnsatisfiable(Exception):
    """A selection step had fewer eligible candidates than it needs."""


class TicketGenerationError(RuntimeError):
    """No valid ticket could be built within the attempt budget."""


@dataclass
class BuildMetrics:
    """Metrics for a single ticket."""

    attempts: int

    @property
    def retries(self) -> int:
        return self.attempts - 1


@dataclass
class BuildResult:
    ticket: Ticket
    metrics: BuildMetrics


@dataclass
class BatchResult:
    """Result of building several independent tickets."""

    tickets: List[Ticket]
    attempts_per_ticket: List[int]
    seed: int
    rng_engine: str

    @property
    def total_retries(self) -> int:
        return sum(a - 1 for a in self.attempts_per_ticket)


class TicketBuilder:
    """Builds one valid Housie ticket per `generate()` call.

    Phase 1 fills each column with its target count of sorted values from the
    top row down. Phase 2 moves the excess of rows 0 and 1 into row 2 and then
    re-sorts every column. Any step short of candidates discards the grid and
    starts over, up to `max_attempts` times.
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        *,
        seed: Optional[int] = None,
        rng_engine: str = "py_random",
        column_counts: Sequence[int] = DEFAULT_COLUMN_COUNTS,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        feasibility = check_distribution(column_counts)
        if not feasibility.feasible:
            raise ValueError(
                "Column distribution cannot always produce a valid ticket: "
                + "; ".join(feasibility.reasons)
            )
        self.column_counts = tuple(column_counts)
        self.max_attempts = max_attempts
        self.rng = rng if rng is not None else create_rng(
            rng_engine, fresh_seed() if seed is None else seed
        )
        self.checker = TicketChecker()

    def generate(self) -> Ticket:
        return self.generate_with_metrics().ticket

    def generate_with_metrics(self) -> BuildResult:
        for attempt in range(1, self.max_attempts + 1):
            try:
                ticket = self._build_once()
            except ConstraintUnsatisfiable as exc:
                logger.warning(
                    "Ticket attempt %d/%d failed, retrying: %s", attempt, self.max_attempts, exc
                )
                continue
            return BuildResult(ticket=ticket, metrics=BuildMetrics(attempts=attempt))
        raise TicketGenerationError(
            f"Failed to build a ticket within {self.max_attempts} attempts"
        )

    def _build_once(self) -> Ticket:
        grid: Grid = [[None] * COLUMNS for _ in range(ROWS)]
        used: Set[int] = set()
        self._populate_columns(grid, used)
        self._redistribute(grid)

        ticket = Ticket.from_matrix(grid)
        problems = self.checker.violations(ticket)
        if problems:
            raise ConstraintUnsatisfiable("; ".join(problems))
        return ticket

    def _populate_columns(self, grid: Grid, used: Set[int]) -> None:
        for col, count in enumerate(self.column_counts):
            if count == 0:
                continue
            available = [x for x in column_values(col) if x not in used]
            if len(available) < count:
                raise ConstraintUnsatisfiable(
                    f"column {col} needs {count} numbers, {len(available)} available"
                )
            chosen = sorted(self.rng.take(available, count))
            for row, number in enumerate(chosen):
                grid[row][col] = number
                used.add(number)

    def _redistribute(self, grid: Grid) -> None:
        self._shift_excess(grid, source_row=0)
        # Row 1 is counted again here, after row 0's moves.
        self._shift_excess(grid, source_row=1)
        self._sort_columns(grid)

    def _shift_excess(self, grid: Grid, source_row: int) -> None:
        target_row = ROWS - 1
        excess = sum(1 for cell in grid[source_row] if cell is not None) - NUMBERS_PER_ROW
        if excess <= 0:
            return
        eligible = [
            col
            for col in range(COLUMNS)
            if grid[source_row][col] is not None and grid[target_row][col] is None
        ]
        if len(eligible) < excess:
            raise ConstraintUnsatisfiable(
                f"row {source_row} must move {excess} numbers, {len(eligible)} columns eligible"
            )
        for col in self.rng.take(eligible, excess):
            grid[target_row][col] = grid[source_row][col]
            grid[source_row][col] = None

    @staticmethod
    def _sort_columns(grid: Grid) -> None:
        for col in range(COLUMNS):
            slots = [r for r in range(ROWS) if grid[r][col] is not None]
            values = sorted(grid[r][col] for r in slots)  # type: ignore[type-var]
            for r, value in zip(slots, values):
                grid[r][col] = value


def build_tickets(
    count: int,
    *,
    seed: Optional[int] = None,
    rng_engine: str = "py_random",
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    column_counts: Sequence[int] = DEFAULT_COLUMN_COUNTS,
) -> BatchResult:
    """Build `count` independent tickets.

    Ticket i gets its own builder seeded from (seed, i), so any ticket can be
    reproduced on its own. Numbers may repeat across tickets.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    base_seed = fresh_seed() if seed is None else seed
    tickets: List[Ticket] = []
    attempts: List[int] = []
    for index in range(count):
        builder = TicketBuilder(
            seed=derive_parallel_seed(base_seed, index, "ticket"),
            rng_engine=rng_engine,
            column_counts=column_counts,
            max_attempts=max_attempts,
        )
        result = builder.generate_with_metrics()
        tickets.append(result.ticket)
        attempts.append(result.metrics.attempts)

    batch = BatchResult(
        tickets=tickets, attempts_per_ticket=attempts, seed=base_seed, rng_engine=rng_engine
    )
    logger.debug(
        "Built %d tickets (seed=%d, engine=%s, retries=%d)",
        count,
        base_seed,
        rng_engine,
        batch.total_retries,
    )
    return batch
