"""
Configuration data models.

This module contains the configuration data structures for command
execution, bulk processing, external tools and host paths, loaded from
`config.toml`.
"""

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_OUTPUT_BYTES = 1024 * 1024


@dataclass
class ExecutorConfig:
    """
    Settings for the command executor, loaded from `[executor]`.
    """

    # Per-call timeout applied when a request does not carry its own.
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    # Upper bound on combined stdout and stderr, in bytes.
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES
    # "auto", "windows" or "posix".
    platform: str = "auto"


@dataclass
class BulkConfig:
    """
    Settings for the bulk operation runner, loaded from `[bulk]`.
    """

    max_workers: int = 4
    # Whether host adapters should use the bounded-concurrency runner.
    concurrent: bool = False


@dataclass
class ToolsConfig:
    """
    External tool settings, loaded from `[tools]`.
    """

    # The Everything command-line client.
    search_executable: str = "es.exe"
    search_max_results: int = 100
    # Empty means the platform default (explorer.exe, open, xdg-open).
    file_manager: str = ""


@dataclass
class PathsConfig:
    """
    Host-supplied paths, loaded from `[paths]`. Empty strings mean unset.
    """

    screenshots_root: str = ""
    sharex_path: str = ""


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    executor: ExecutorConfig = field(default_factory=ExecutorConfig)
    bulk: BulkConfig = field(default_factory=BulkConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    # Where the configuration was loaded from, None when built from defaults.
    source: Optional[str] = None
