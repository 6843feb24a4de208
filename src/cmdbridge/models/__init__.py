"""
Data models for the command layer.

Configuration Models:
- Executor, bulk runner, external tool and host path settings

Command Models:
- Command requests and captured results
- Compiled command templates
- Parsed table rows

Result Models:
- Bulk outcomes and their three-way status
- Process records and screenshot entries
"""

from .commands import (
    CommandRequest,
    CommandResult,
    CommandTemplateSpec,
    ParsedRow,
    KeyValueRecord,
    ParsedTable,
)
from .config import (
    AppConfig,
    BulkConfig,
    ExecutorConfig,
    PathsConfig,
    ToolsConfig,
)
from .results import (
    BulkOutcome,
    BulkStatus,
    OutcomeSummary,
    ProcessRecord,
    Screenshot,
)

__all__ = [
    # Command models
    "CommandRequest",
    "CommandResult",
    "CommandTemplateSpec",
    "ParsedRow",
    "KeyValueRecord",
    "ParsedTable",
    # Configuration models
    "AppConfig",
    "BulkConfig",
    "ExecutorConfig",
    "PathsConfig",
    "ToolsConfig",
    # Result models
    "BulkOutcome",
    "BulkStatus",
    "OutcomeSummary",
    "ProcessRecord",
    "Screenshot",
]
