"""Core module for Housie ticket generation."""

from .builder import (
    BatchResult,
    BuildMetrics,
    BuildResult,
    ConstraintUnsatisfiable,
    TicketBuilder,
    TicketGenerationError,
    build_tickets,
)
from .constraints import TicketChecker

__all__ = [
    "BatchResult",
    "BuildMetrics",
    "BuildResult",
    "ConstraintUnsatisfiable",
    "TicketBuilder",
    "TicketChecker",
    "TicketGenerationError",
    "build_tickets",
]
