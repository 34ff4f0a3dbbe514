"""Housie (90-ball bingo) ticket generator."""

from .core import TicketBuilder, TicketGenerationError
from .ticket import Ticket
from .version import __version__

__all__ = ["Ticket", "TicketBuilder", "TicketGenerationError", "__version__"]
