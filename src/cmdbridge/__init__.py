"""
cmdbridge: an external-process command layer.

This package runs operating-system commands and CLI tools, parses their
semi-structured text output into typed records, compiles user-defined
command templates and runs batches of per-item operations with per-item
failure isolation.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Classified errors, input validation and error handling
- system: Command execution, process control and tool helpers
- parsing: Parsers for delimited and key/value command output
- templates: Command template compilation
- bulk: Bulk operation runner and outcome summaries
- host: Host entry points and host-resolved paths
- cli: Command-line host adapter

Usage:
    From command line:
        cmdbridge ps
        cmdbridge kill --pid 1234 5678

    Programmatically:
        from cmdbridge import ProcessInventory, run_bulk
        inventory = ProcessInventory()
        outcome = run_bulk(["1234", "5678"], inventory.terminate_by_identifier)
"""

# Main interfaces
from .config import clear_config_cache, get_config, set_config_path

# Model classes for external use
from .models import (
    AppConfig,
    BulkOutcome,
    BulkStatus,
    CommandRequest,
    CommandResult,
    CommandTemplateSpec,
    OutcomeSummary,
    ProcessRecord,
)

# Errors
from .validation import (
    CommandError,
    CommandErrorKind,
    ExecutionError,
    TemplateError,
    ValidationError,
)

# Components
from .bulk import run_bulk, run_bulk_concurrent, summarize_outcome
from .formatting import format_bytes
from .parsing import parse_delimited_table, parse_key_value_lines
from .system import CommandExecutor, ProcessInventory, is_tool_available, run_command
from .templates import compile_template, execute_template

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Models
    "AppConfig",
    "BulkOutcome",
    "BulkStatus",
    "CommandRequest",
    "CommandResult",
    "CommandTemplateSpec",
    "OutcomeSummary",
    "ProcessRecord",
    # Errors
    "CommandError",
    "CommandErrorKind",
    "ExecutionError",
    "TemplateError",
    "ValidationError",
    # Components
    "run_bulk",
    "run_bulk_concurrent",
    "summarize_outcome",
    "format_bytes",
    "parse_delimited_table",
    "parse_key_value_lines",
    "CommandExecutor",
    "ProcessInventory",
    "is_tool_available",
    "run_command",
    "compile_template",
    "execute_template",
]
