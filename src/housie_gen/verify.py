from __future__ import annotations

import math
from collections import Counter
from typing import Dict, List, Sequence

from .core.constraints import TicketChecker
from .layout import COLUMN_RANGES, COLUMNS, MAX_NUMBER, MIN_NUMBER, column_values
from .ticket import Ticket
from .uniqueness import duplicate_ticket_indices


def compute_frequencies(tickets: Sequence[Ticket]) -> Dict[int, int]:
    counts: Counter[int] = Counter()
    for ticket in tickets:
        counts.update(ticket.numbers())
    # ensure all numbers present with 0
    for x in range(MIN_NUMBER, MAX_NUMBER + 1):
        counts.setdefault(x, 0)
    return dict(sorted(counts.items()))


def compute_column_fill(tickets: Sequence[Ticket]) -> Dict[int, Dict[int, int]]:
    """Per column: how many tickets ended with 0, 1, 2 or 3 values there."""
    out: Dict[int, Dict[int, int]] = {c: {k: 0 for k in range(4)} for c in range(COLUMNS)}
    for ticket in tickets:
        for c, k in enumerate(ticket.column_counts()):
            out[c][k] += 1
    return out


def chi2_wilson_hilferty_pvalue(stat: float, df: int) -> float:
    if df <= 0:
        return 1.0
    # Wilson-Hilferty approximation: transform chi-square to normal
    t = (stat / df) ** (1.0 / 3.0)
    mu = 1.0 - 2.0 / (9.0 * df)
    sigma = math.sqrt(2.0 / (9.0 * df))
    z = (t - mu) / sigma

    def phi(val: float) -> float:
        return 0.5 * (1.0 + math.erf(val / math.sqrt(2.0)))

    p_right = 1.0 - phi(z)
    return max(0.0, min(1.0, p_right))


def column_uniformity_tests(
    freqs: Dict[int, int], *, alpha: float = 0.05
) -> Dict[int, Dict[str, object]]:
    """Chi-square test of value frequencies inside each column's range.

    Columns draw different amounts, so uniformity is only expected within a
    column, not across the whole 1..90 pool. A column whose p-value falls
    below `alpha` is marked `uniform: False`.
    """
    out: Dict[int, Dict[str, object]] = {}
    for c in range(COLUMNS):
        values = column_values(c)
        observed = [freqs.get(x, 0) for x in values]
        total = sum(observed)
        df = len(values) - 1
        if total == 0:
            out[c] = {
                "total": 0,
                "chi2": {"stat": 0.0, "df": df, "p_value": 1.0},
                "uniform": True,
            }
            continue
        expected = total / len(values)
        stat = sum((o - expected) ** 2 / expected for o in observed)
        p = chi2_wilson_hilferty_pvalue(stat, df)
        out[c] = {
            "total": total,
            "max_minus_min": max(observed) - min(observed),
            "chi2": {"stat": round(stat, 6), "df": df, "p_value": round(p, 6)},
            "uniform": p >= alpha,
        }
    return out


def verify(tickets: Sequence[Ticket], *, alpha: float = 0.05) -> Dict[str, object]:
    checker = TicketChecker()
    invalid: Dict[str, List[str]] = {}
    for idx, ticket in enumerate(tickets):
        problems = checker.violations(ticket)
        if problems:
            invalid[str(idx)] = problems

    freqs = compute_frequencies(tickets)
    columns = column_uniformity_tests(freqs, alpha=alpha)
    identical = duplicate_ticket_indices(tickets)
    return {
        "ticket_count": len(tickets),
        "invalid_tickets": invalid,
        "ok_all_valid": not invalid,
        "identical_ticket_indices": identical,
        "ok_no_identical_tickets": not identical,
        "frequencies": freqs,
        "column_fill": compute_column_fill(tickets),
        "column_ranges": {c: list(COLUMN_RANGES[c]) for c in range(COLUMNS)},
        "tests": {
            "columns": columns,
            "alpha": alpha,
            "non_uniform_columns": [c for c, stats in columns.items() if not stats["uniform"]],
            "engine": "wilson_hilferty",
        },
    }
