from __future__ import annotations

from rich.console import Console

from housie_gen.render import print_ticket, render_ticket
from housie_gen.ticket import Ticket

MATRIX = [
    [1, None, 23, None, 41, None, 65, None, 80],
    [None, 12, None, 34, 45, 56, 68, None, None],
    [7, 18, None, None, None, 59, None, 72, 90],
]


def test_render_table_shape():
    table = render_ticket(Ticket.from_matrix(MATRIX))
    assert len(table.columns) == 9
    assert table.row_count == 3


def test_print_marks_blanks():
    console = Console(record=True, width=80, no_color=True)
    print_ticket(Ticket.from_matrix(MATRIX), title="T1", console=console)
    text = console.export_text()
    assert "T1" in text
    assert "90" in text
    assert text.count("X") == 12
