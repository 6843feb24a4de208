"""
Configuration management for the cmdbridge package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    load_config,
    reset_config_path,
    set_config_path,
)

# For advanced usage - direct access to loaders and validators
from .loader import load_main_config, load_toml_file
from .validators import (
    validate_app_config,
    validate_bulk_config,
    validate_executor_config,
    validate_paths_config,
    validate_tools_config,
)

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "reset_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "load_config",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "validate_app_config",
    "validate_bulk_config",
    "validate_executor_config",
    "validate_paths_config",
    "validate_tools_config",
]
