"""
Bulk execution of per-item operations with per-item failure isolation.
"""

from .runner import UNKNOWN_ERROR, error_message, run_bulk, run_bulk_concurrent
from .summary import summarize_outcome

__all__ = [
    "UNKNOWN_ERROR",
    "error_message",
    "run_bulk",
    "run_bulk_concurrent",
    "summarize_outcome",
]
