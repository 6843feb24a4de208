"""
Process inventory and control.

Lists the OS process table as ProcessRecord values and terminates processes
by identifier or by image name. On Windows the listing comes from
``tasklist /nh /fo csv`` run through the executor and the delimited output
parser; POSIX systems have no delimited process lister, so there the table
is read with psutil and rendered into the same record shape.
"""

import logging
import os
from typing import Callable, Iterable, List, Optional, Sequence

import psutil

from ..bulk import run_bulk, run_bulk_concurrent
from ..models.commands import CommandRequest, ParsedRow
from ..models.results import BulkOutcome, ProcessRecord
from ..parsing import parse_delimited_table
from ..validation import validate_process_id, validate_process_name
from .commands import CommandExecutor, get_executor
from .platform import PlatformProfile

logger = logging.getLogger(__name__)

# Number of positional columns in a process listing row.
PROCESS_FIELD_COUNT = 5


def record_from_row(row: ParsedRow) -> ProcessRecord:
    """Map one parsed listing row onto a ProcessRecord.

    Missing trailing fields become empty strings. Fields beyond the fifth are
    the remains of a thousands separator inside the memory column (the
    parser splits ``"15,000 K"`` into ``15`` and ``000 K``) and are joined
    back into ``memory_usage``.

    Examples:
        >>> record_from_row(["notepad.exe", "1234", "Console", "1", "15", "000 K"]).memory_usage
        '15,000 K'
    """
    fields = list(row[:PROCESS_FIELD_COUNT - 1])
    fields += [""] * (PROCESS_FIELD_COUNT - 1 - len(fields))
    memory_usage = ",".join(row[PROCESS_FIELD_COUNT - 1:])
    return ProcessRecord(
        name=fields[0],
        process_id=fields[1],
        session_name=fields[2],
        session_number=fields[3],
        memory_usage=memory_usage,
    )


def format_memory_kb(num_bytes: int) -> str:
    """Render a byte count the way tasklist renders its memory column."""
    return f"{num_bytes // 1024:,} K"


def _psutil_records() -> List[ProcessRecord]:
    getsid = getattr(os, "getsid", None)
    records = []
    for proc in psutil.process_iter(["pid", "name", "terminal", "memory_info"]):
        info = proc.info
        session_number = ""
        if getsid is not None:
            try:
                session_number = str(getsid(info["pid"]))
            except OSError:
                pass
        memory_info = info.get("memory_info")
        records.append(
            ProcessRecord(
                name=info.get("name") or "",
                process_id=str(info["pid"]),
                session_name=info.get("terminal") or "",
                session_number=session_number,
                memory_usage=format_memory_kb(memory_info.rss) if memory_info else "",
            )
        )
    return records


class ProcessInventory:
    """
    Enumerates and terminates OS processes through the command executor.
    """

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        platform: Optional[PlatformProfile] = None,
    ):
        self.executor = executor or get_executor()
        self.platform = platform or self.executor.platform

    def list_processes(self) -> List[ProcessRecord]:
        """
        Return one ProcessRecord per row of the process table.

        Raises:
            ExecutionError: If the listing command fails.
        """
        command = self.platform.process_list_command
        if command is None:
            records = _psutil_records()
        else:
            result = self.executor.execute(CommandRequest(command_line=command)).check()
            records = [record_from_row(row) for row in parse_delimited_table(result.stdout)]
        logger.debug(f"Listed {len(records)} processes")
        return records

    def terminate_by_identifier(self, process_id: str) -> None:
        """
        Forcefully terminate the process with the given identifier.

        Raises:
            ValidationError: If the identifier is not numeric.
            ExecutionError: If the termination command fails.
        """
        pid = validate_process_id(process_id)
        command = self.platform.kill_by_id_command(pid)
        self.executor.execute(CommandRequest(command_line=command)).check()
        logger.info(f"Terminated process {pid}")

    def terminate_by_name(self, name: str) -> None:
        """
        Forcefully terminate every process with the given image name.

        This may terminate several processes sharing the name.

        Raises:
            ValidationError: If the name is empty or contains shell metacharacters.
            ExecutionError: If the termination command fails.
        """
        image_name = validate_process_name(name)
        command = self.platform.kill_by_name_command(image_name)
        self.executor.execute(CommandRequest(command_line=command)).check()
        logger.info(f"Terminated processes named '{image_name}'")

    def terminate_processes(
        self,
        process_ids: Iterable[str],
        on_progress: Optional[Callable[[int, int], None]] = None,
        max_workers: Optional[int] = None,
    ) -> BulkOutcome:
        """
        Terminate several processes by identifier, isolating failures.

        Args:
            process_ids: Identifiers to terminate.
            on_progress: Optional ``(completed, total)`` callback.
            max_workers: Use the bounded-concurrency runner with this many
                workers; None runs sequentially.
        """
        if max_workers is None:
            return run_bulk(process_ids, self.terminate_by_identifier, on_progress)
        return run_bulk_concurrent(
            process_ids, self.terminate_by_identifier, max_workers=max_workers, on_progress=on_progress
        )

    def terminate_by_names(
        self,
        names: Sequence[str],
        on_progress: Optional[Callable[[int, int], None]] = None,
    ) -> BulkOutcome:
        """Terminate processes for several image names, isolating failures."""
        return run_bulk(names, self.terminate_by_name, on_progress)
