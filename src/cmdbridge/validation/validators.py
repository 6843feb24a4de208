"""
Input validation functions.

Validators for configuration values and for the arguments of calls that are
rejected before any external command starts.
"""

import os
import re
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from .exceptions import ValidationError

# Characters that cmd.exe and POSIX shells treat as command separators,
# redirections or variable expansion. Process names are interpolated into a
# shell command line; cmd.exe expands %VAR% even inside double quotes.
_SHELL_METACHARACTERS = set('"&|<>^;`$%')


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is an integer within bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_positive_float(
    value: Any,
    min_value: float = 0.0,
    max_value: Optional[float] = None,
    field_name: str = "value"
) -> float:
    """
    Validate that a value is a number within bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated float value

    Raises:
        ValidationError: If validation fails
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        float_value = float(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid number, got {value}",
            field_name=field_name,
            value=value
        )
    if float_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and float_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {float_value}",
            field_name=field_name,
            value=value
        )
    return float_value


def validate_path_exists(path: Union[str, Path], field_name: str = "path") -> str:
    """
    Validate that a path exists.

    Raises:
        ValidationError: If path doesn't exist
    """
    path_str = str(path)
    if not os.path.exists(path_str):
        raise ValidationError(
            f"{field_name} does not exist: {path_str}",
            field_name=field_name,
            value=path_str
        )
    return path_str


def validate_directory(path: Union[str, Path], field_name: str = "directory") -> Path:
    """Validate that a path exists and is a directory."""
    validate_path_exists(path, field_name=field_name)
    if not os.path.isdir(str(path)):
        raise ValidationError(
            f"{field_name} is not a directory: {path}",
            field_name=field_name,
            value=str(path)
        )
    return Path(path)


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Returns:
        The matching choice, in the casing used by ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    lower_value = str_value.lower()
    if lower_value not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value}",
            field_name=field_name,
            value=value
        )
    return choices[lower_choices.index(lower_value)]


def validate_string(value: Any, field_name: str = "value", allow_empty: bool = True) -> str:
    """Validate that a value is a string, optionally non-empty."""
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string, got {type(value).__name__}",
            field_name=field_name,
            value=value
        )
    if not allow_empty and not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=value
        )
    return value


def validate_process_id(process_id: Any, field_name: str = "process_id") -> str:
    """
    Validate a process identifier.

    Returns:
        The identifier as a stripped string of digits

    Raises:
        ValidationError: If the identifier is not a non-negative integer
    """
    pid = str(process_id).strip()
    if not re.fullmatch(r"[0-9]+", pid):
        raise ValidationError(
            f"{field_name} must be a non-negative integer, got {process_id!r}",
            field_name=field_name,
            value=process_id
        )
    return pid


def validate_process_name(name: Any, field_name: str = "process_name") -> str:
    """
    Validate an image name used to target processes.

    Only basic sanitation is performed: the name is stripped and rejected if
    empty, if it contains quotes or shell metacharacters, or if it contains
    control characters such as line breaks.

    Raises:
        ValidationError: If the name is empty or unsafe to interpolate
    """
    stripped = validate_string(name, field_name=field_name, allow_empty=False).strip()
    if not stripped.isprintable():
        raise ValidationError(
            f"{field_name} contains non-printable characters: {stripped!r}",
            field_name=field_name,
            value=name
        )
    bad = sorted(set(stripped) & _SHELL_METACHARACTERS)
    if bad:
        raise ValidationError(
            f"{field_name} contains forbidden characters {bad}: {stripped!r}",
            field_name=field_name,
            value=name
        )
    return stripped


def validate_bindings(bindings: Mapping[str, str], field_name: str = "bindings") -> Mapping[str, str]:
    """
    Validate placeholder bindings for template compilation.

    Keys must be non-empty strings and values must be strings.
    """
    for key, value in bindings.items():
        if not isinstance(key, str) or not key:
            raise ValidationError(
                f"{field_name} keys must be non-empty strings, got {key!r}",
                field_name=field_name,
                value=key
            )
        if not isinstance(value, str):
            raise ValidationError(
                f"{field_name}[{key!r}] must be a string, got {type(value).__name__}",
                field_name=field_name,
                value=value
            )
    return bindings
