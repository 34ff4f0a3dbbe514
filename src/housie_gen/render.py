from __future__ import annotations

from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table

from .layout import COLUMNS
from .ticket import Ticket

BLANK = "X"


def render_ticket(ticket: Ticket, *, title: str = "HOUSIE TICKET") -> Table:
    """Lay a ticket out as a bordered 3x9 table, blanks shown as X."""
    table = Table(title=title, box=box.SQUARE, show_lines=True, header_style="bold")
    for col in range(COLUMNS):
        table.add_column(str(col + 1), justify="right", width=2)
    for row in ticket:
        table.add_row(*(BLANK if cell is None else str(cell) for cell in row))
    return table


def print_ticket(
    ticket: Ticket, *, title: str = "HOUSIE TICKET", console: Optional[Console] = None
) -> None:
    (console or Console()).print(render_ticket(ticket, title=title))
