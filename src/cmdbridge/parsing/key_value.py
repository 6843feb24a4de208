"""
Key/value line parsing for command output.

Handles the ``Name=Value`` listings of ``wmic ... /format:list`` as well as
the ``Name   Value`` and ``Name: Value`` layouts used by ``ipconfig``,
``systeminfo`` and similar tools.
"""

import re
from typing import List

from ..models.commands import KeyValueRecord

# An identifier, then a run of separators, then the value.
_KEY_VALUE_LINE = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_.\-]*)[\s=:]+(.*)$")
_BLANK_LINE = re.compile(r"\r?\n[ \t]*\r?\n")


def parse_key_value_lines(raw: str) -> KeyValueRecord:
    """
    Parse ``identifier <separator> value`` lines into a single record.

    Lines that do not match are ignored. When a key appears more than once
    the last value wins. Values are trimmed and may be empty (``Name=``).
    """
    record: KeyValueRecord = {}
    for line in raw.splitlines():
        match = _KEY_VALUE_LINE.match(line)
        if match:
            record[match.group(1)] = match.group(2).strip()
    return record


def parse_key_value_records(raw: str) -> List[KeyValueRecord]:
    """
    Parse blank-line separated blocks, one record per block.

    Blocks that yield no keys are dropped.
    """
    records = []
    for block in _BLANK_LINE.split(raw.strip()):
        record = parse_key_value_lines(block)
        if record:
            records.append(record)
    return records
