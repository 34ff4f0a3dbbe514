from __future__ import annotations

from housie_gen.core import TicketBuilder
from housie_gen.uniqueness import duplicate_ticket_indices, ticket_hash, tickets_hash


def test_hashes_stable_and_distinct():
    builder = TicketBuilder(seed=1)
    a = builder.generate()
    b = builder.generate()
    h_a = ticket_hash(a)
    assert h_a.startswith("sha256:")
    assert h_a == ticket_hash(a)
    assert h_a != ticket_hash(b)
    agg = tickets_hash([a, b])
    assert agg.startswith("sha256:")
    assert agg != tickets_hash([b, a])


def test_duplicate_indices():
    builder = TicketBuilder(seed=2)
    a = builder.generate()
    b = builder.generate()
    assert duplicate_ticket_indices([a, b, a, a]) == [2, 3]
    assert duplicate_ticket_indices([a, b]) == []
