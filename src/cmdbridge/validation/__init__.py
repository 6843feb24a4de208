"""
Validation and error handling for the cmdbridge package.

This module provides the classified command errors, input validation and
consistent error reporting across the application.
"""

# Core exception classes and error handling
from .exceptions import (
    CommandError,
    CommandErrorKind,
    CommandFailedError,
    CommandNotFoundError,
    CommandPermissionError,
    CommandTimeoutError,
    ErrorSeverity,
    ExecutionError,
    OutputTooLargeError,
    TemplateError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

# Validation functions
from .validators import (
    validate_bindings,
    validate_directory,
    validate_enum_choice,
    validate_path_exists,
    validate_positive_float,
    validate_positive_integer,
    validate_process_id,
    validate_process_name,
    validate_string,
)

__all__ = [
    # Errors
    "CommandError",
    "CommandErrorKind",
    "CommandFailedError",
    "CommandNotFoundError",
    "CommandPermissionError",
    "CommandTimeoutError",
    "ErrorSeverity",
    "ExecutionError",
    "OutputTooLargeError",
    "TemplateError",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_subprocess_error",
    # Validators
    "validate_bindings",
    "validate_directory",
    "validate_enum_choice",
    "validate_path_exists",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_process_id",
    "validate_process_name",
    "validate_string",
]
