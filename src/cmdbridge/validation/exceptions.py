"""
Exception types and error handling helpers.

This module defines the classified command errors raised by the executor and
the template engine, the ValidationError used for malformed calls and
configuration, and a few helpers that give the host-facing layers consistent
error logging.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class CommandErrorKind(Enum):
    """Classification of command execution and template failures."""
    COMMAND_NOT_FOUND = "command_not_found"
    PERMISSION_DENIED = "permission_denied"
    TIMEOUT = "timeout"
    OUTPUT_TOO_LARGE = "output_too_large"
    COMMAND_FAILED = "command_failed"
    PARSE_ERROR = "parse_error"
    EMPTY_TEMPLATE = "empty_template"


class ValidationError(Exception):
    """
    Exception raised when validation fails.

    Used for configuration problems and for malformed calls (an empty batch,
    a missing working directory, an unsafe process name) that are rejected
    before any external command starts.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class CommandError(Exception):
    """Base class for classified command errors."""

    kind: CommandErrorKind = CommandErrorKind.COMMAND_FAILED

    def __init__(self, message: str, command: Optional[str] = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.stderr = stderr


class ExecutionError(CommandError):
    """An external command could not be run to a usable result."""


class CommandNotFoundError(ExecutionError):
    kind = CommandErrorKind.COMMAND_NOT_FOUND


class CommandPermissionError(ExecutionError):
    kind = CommandErrorKind.PERMISSION_DENIED


class CommandTimeoutError(ExecutionError):
    kind = CommandErrorKind.TIMEOUT

    def __init__(self, message: str, command: Optional[str] = None, timeout: Optional[float] = None):
        super().__init__(message, command=command)
        self.timeout = timeout


class OutputTooLargeError(ExecutionError):
    kind = CommandErrorKind.OUTPUT_TOO_LARGE

    def __init__(self, message: str, command: Optional[str] = None, limit: int = 0):
        super().__init__(message, command=command)
        self.limit = limit


class CommandFailedError(ExecutionError):
    """Non-zero exit, raised only when a caller treats it as fatal."""

    kind = CommandErrorKind.COMMAND_FAILED

    def __init__(self, message: str, command: Optional[str] = None,
                 stderr: str = "", return_code: Optional[int] = None):
        super().__init__(message, command=command, stderr=stderr)
        self.return_code = return_code


class TemplateError(CommandError):
    """A command template could not be compiled."""

    def __init__(self, message: str, kind: CommandErrorKind, template: Optional[str] = None):
        super().__init__(message, command=template)
        self.kind = kind
        self.template = template


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI error and exit the process."""
    exit_code = kwargs.pop('exit_code', 1)
    kwargs.pop('include_traceback', None)
    severity = kwargs.pop('severity', ErrorSeverity.ERROR)

    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)
    sys.exit(exit_code)
