"""
Formatting helpers for values shown to users.
"""

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB", "TB"]


def format_bytes(num_bytes: int, decimals: int = 2) -> str:
    """Format a byte count in binary units.

    Trailing zeros are dropped from the fraction. Counts of a petabyte or
    more stay in TB.

    Examples:
        >>> format_bytes(0)
        '0 Bytes'
        >>> format_bytes(1536)
        '1.5 KB'
        >>> format_bytes(1048576)
        '1 MB'
    """
    if num_bytes == 0:
        return "0 Bytes"

    precision = max(decimals, 0)
    value = float(num_bytes)
    index = 0
    while abs(value) >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1

    text = f"{value:.{precision}f}"
    if precision:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[index]}"
