from __future__ import annotations

import hashlib
import json
from typing import Iterable, List

from .ticket import Ticket


def ticket_hash(ticket: Ticket) -> str:
    payload = json.dumps(ticket.to_matrix(), ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()


def tickets_hash(tickets: Iterable[Ticket]) -> str:
    hashes = [ticket_hash(t) for t in tickets]
    payload = json.dumps(hashes, ensure_ascii=True, separators=(",", ":"))
    return "sha256:" + hashlib.sha256(payload.encode("utf-8")).hexdigest()


def duplicate_ticket_indices(tickets: Iterable[Ticket]) -> List[int]:
    """Indices of tickets identical to an earlier one in the sequence."""
    seen = set()
    dupes: List[int] = []
    for idx, ticket in enumerate(tickets):
        h = ticket_hash(ticket)
        if h in seen:
            dupes.append(idx)
        seen.add(h)
    return dupes
