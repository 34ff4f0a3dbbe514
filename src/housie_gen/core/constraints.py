"""Structural checks for Housie tickets."""

from __future__ import annotations

from typing import List

from ..layout import (
    COLUMN_RANGES,
    COLUMNS,
    NUMBERS_PER_ROW,
    NUMBERS_PER_TICKET,
    in_column_range,
)
from ..ticket import Ticket


class TicketChecker:
    """Checks the invariants every finished ticket must hold."""

    def violations(self, ticket: Ticket) -> List[str]:
        """Return a message per broken invariant; empty when the ticket is valid."""
        problems: List[str] = []

        for r, count in enumerate(ticket.row_counts()):
            if count != NUMBERS_PER_ROW:
                problems.append(f"row {r} has {count} numbers, expected {NUMBERS_PER_ROW}")

        total = len(ticket.numbers())
        if total != NUMBERS_PER_TICKET:
            problems.append(f"ticket has {total} numbers, expected {NUMBERS_PER_TICKET}")

        for c in range(COLUMNS):
            values = [v for v in ticket.column(c) if v is not None]
            out_of_range = [v for v in values if not in_column_range(c, v)]
            if out_of_range:
                lo, hi = COLUMN_RANGES[c]
                problems.append(f"column {c} holds {out_of_range} outside {lo}..{hi}")
            if any(a >= b for a, b in zip(values, values[1:])):
                problems.append(f"column {c} not strictly ascending: {values}")

        seen = set()
        for v in ticket.numbers():
            if v in seen:
                problems.append(f"number {v} appears more than once")
            seen.add(v)

        return problems

    def is_valid(self, ticket: Ticket) -> bool:
        return not self.violations(ticket)
