"""
Configuration validation utilities.

Each validator turns one raw TOML section into its configuration dataclass,
filling defaults for absent keys and raising ValidationError with the dotted
field name for bad values.
"""

import logging
from typing import Any, Dict, Optional

from ..models.config import (
    AppConfig,
    BulkConfig,
    ExecutorConfig,
    PathsConfig,
    ToolsConfig,
)
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_string,
)

logger = logging.getLogger(__name__)

PLATFORM_CHOICES = ["auto", "windows", "posix"]


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(f"[{name}] must be a table", field_name=name, value=section)
    return section


def validate_executor_config(executor_data: Dict[str, Any]) -> ExecutorConfig:
    """
    Validate and create an ExecutorConfig from raw configuration data.

    Raises:
        ValidationError: If validation fails
    """
    defaults = ExecutorConfig()

    timeout_seconds = validate_positive_float(
        executor_data.get("timeout_seconds", defaults.timeout_seconds),
        min_value=0.001,
        max_value=3600.0,
        field_name="executor.timeout_seconds",
    )
    max_output_bytes = validate_positive_integer(
        executor_data.get("max_output_bytes", defaults.max_output_bytes),
        min_value=1024,
        field_name="executor.max_output_bytes",
    )
    platform = validate_enum_choice(
        executor_data.get("platform", defaults.platform),
        choices=PLATFORM_CHOICES,
        field_name="executor.platform",
        case_sensitive=False,
    )

    return ExecutorConfig(
        timeout_seconds=timeout_seconds,
        max_output_bytes=max_output_bytes,
        platform=platform,
    )


def validate_bulk_config(bulk_data: Dict[str, Any]) -> BulkConfig:
    """
    Validate and create a BulkConfig from raw configuration data.

    Raises:
        ValidationError: If validation fails
    """
    defaults = BulkConfig()

    max_workers = validate_positive_integer(
        bulk_data.get("max_workers", defaults.max_workers),
        min_value=1,
        max_value=64,
        field_name="bulk.max_workers",
    )
    concurrent = bulk_data.get("concurrent", defaults.concurrent)
    if not isinstance(concurrent, bool):
        raise ValidationError(
            "bulk.concurrent must be a boolean",
            field_name="bulk.concurrent",
            value=concurrent,
        )

    return BulkConfig(max_workers=max_workers, concurrent=concurrent)


def validate_tools_config(tools_data: Dict[str, Any]) -> ToolsConfig:
    """
    Validate and create a ToolsConfig from raw configuration data.

    Raises:
        ValidationError: If validation fails
    """
    defaults = ToolsConfig()

    search_executable = validate_string(
        tools_data.get("search_executable", defaults.search_executable),
        field_name="tools.search_executable",
        allow_empty=False,
    )
    search_max_results = validate_positive_integer(
        tools_data.get("search_max_results", defaults.search_max_results),
        min_value=1,
        max_value=100000,
        field_name="tools.search_max_results",
    )
    file_manager = validate_string(
        tools_data.get("file_manager", defaults.file_manager),
        field_name="tools.file_manager",
    )

    return ToolsConfig(
        search_executable=search_executable.strip(),
        search_max_results=search_max_results,
        file_manager=file_manager.strip(),
    )


def validate_paths_config(paths_data: Dict[str, Any]) -> PathsConfig:
    """
    Validate and create a PathsConfig from raw configuration data.

    Paths are not required to exist; the host may create them later.
    """
    screenshots_root = validate_string(
        paths_data.get("screenshots_root", ""), field_name="paths.screenshots_root"
    )
    sharex_path = validate_string(
        paths_data.get("sharex_path", ""), field_name="paths.sharex_path"
    )
    return PathsConfig(
        screenshots_root=screenshots_root.strip(),
        sharex_path=sharex_path.strip(),
    )


def validate_app_config(data: Dict[str, Any], source: Optional[str] = None) -> AppConfig:
    """
    Validate every section of the main configuration file.

    Raises:
        ValidationError: If any section fails validation
    """
    return AppConfig(
        executor=validate_executor_config(_section(data, "executor")),
        bulk=validate_bulk_config(_section(data, "bulk")),
        tools=validate_tools_config(_section(data, "tools")),
        paths=validate_paths_config(_section(data, "paths")),
        source=source,
    )
