"""
Parsers for the semi-structured text output of command-line tools.

None of these parsers raise: malformed input degrades to empty or partial
results.
"""

from .key_value import parse_key_value_lines, parse_key_value_records
from .tables import parse_delimited_table, parse_line_list

__all__ = [
    "parse_delimited_table",
    "parse_key_value_lines",
    "parse_key_value_records",
    "parse_line_list",
]
