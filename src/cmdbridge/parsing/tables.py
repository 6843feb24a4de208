"""
Delimited table parsing for command output.

Windows tools such as ``tasklist /fo csv`` and ``sc query`` wrappers emit a
simplified CSV: every field quoted, comma separated, one record per line.
The parser here handles exactly that format and nothing more.
"""

import logging
import re
from typing import List

from ..models.commands import ParsedTable

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r"\r?\n")


def parse_delimited_table(raw: str) -> ParsedTable:
    """Parse quoted, comma-separated command output into rows of fields.

    Quotes are treated as markers only: every ``"`` is removed from a line
    before it is split on ``,``. A comma inside a quoted field therefore
    splits that field too. Lines whose first field is blank are dropped.
    Fields themselves are not trimmed.

    Args:
        raw: Raw command output.

    Returns:
        The remaining rows, in their original order.

    Examples:
        >>> parse_delimited_table('"svc","Display Name, Extended",RUNNING')
        [['svc', 'Display Name', ' Extended', 'RUNNING']]
        >>> parse_delimited_table('\\r\\n"a","b"\\r\\n,"c"\\r\\n')
        [['a', 'b']]
    """
    rows: ParsedTable = []
    for line in _LINE_BREAK.split(raw.strip()):
        fields = line.replace('"', "").split(",")
        if not fields[0].strip():
            continue
        rows.append(fields)

    logger.debug(f"Parsed {len(rows)} rows from delimited output")
    return rows


def parse_line_list(raw: str) -> List[str]:
    """Return the non-blank lines of command output, stripped, in order."""
    return [line.strip() for line in _LINE_BREAK.split(raw) if line.strip()]
