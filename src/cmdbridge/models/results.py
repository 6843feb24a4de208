"""
Result data models for bulk operations, processes and screenshots.

These are the plain values handed back to a host application: aggregate
outcomes of per-item batches, parsed process records and screenshot entries.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List


class BulkStatus(Enum):
    """Three-way classification of a bulk outcome."""
    SUCCESS = "success"
    FAILURE = "failure"
    PARTIAL_FAILURE = "partial_failure"


@dataclass
class BulkOutcome:
    """
    Aggregate result of a batch of independently attempted operations.

    Invariants: ``success_count + failure_count`` equals the number of items
    processed, and ``error_messages`` holds exactly one entry per failure.
    """

    success_count: int = 0
    failure_count: int = 0
    error_messages: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.success_count + self.failure_count

    @property
    def status(self) -> BulkStatus:
        if self.failure_count == 0:
            return BulkStatus.SUCCESS
        if self.success_count == 0:
            return BulkStatus.FAILURE
        return BulkStatus.PARTIAL_FAILURE


@dataclass(frozen=True)
class OutcomeSummary:
    """Host-neutral notification text for a bulk outcome."""

    status: BulkStatus
    title: str
    message: str


@dataclass(frozen=True)
class ProcessRecord:
    """One row of the OS process table. All fields are kept as text."""

    name: str = ""
    process_id: str = ""
    session_name: str = ""
    session_number: str = ""
    memory_usage: str = ""


@dataclass(frozen=True)
class Screenshot:
    """An image file in the screenshots folder."""

    name: str
    path: Path
    created_at: datetime
