"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import AppConfig
from ..validation import ErrorSeverity, handle_config_error
from .loader import load_main_config
from .validators import validate_app_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[AppConfig] = None

# Default location of the configuration file, relative to a source checkout.
# Installed copies usually lack it and run on built-in defaults instead.
_DEFAULT_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"
_CONFIG_FILE_PATH = _DEFAULT_CONFIG_FILE_PATH


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    The cached configuration is cleared so the next get_config() call loads
    the new file. Unlike the default location, an explicitly set file must
    exist.

    Args:
        config_path: Path to a config.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def reset_config_path() -> None:
    """Restore the default configuration path and clear the cache."""
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = _DEFAULT_CONFIG_FILE_PATH
    _CONFIG = None


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def load_config(config_path: Path) -> AppConfig:
    """
    Load and validate a configuration file without touching the cache.

    Args:
        config_path: Path to a config.toml file

    Returns:
        Fully validated AppConfig instance

    Raises:
        FileNotFoundError: If the file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the file is malformed
    """
    try:
        data = load_main_config(config_path)
        app_config = validate_app_config(data, source=str(config_path))
        logger.info(f"Successfully loaded configuration from {config_path}")
        return app_config
    except Exception as e:
        handle_config_error(
            error=e,
            context="processing configuration",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def get_config() -> AppConfig:
    """
    Get the global application configuration, loading it if necessary.

    The first call loads and validates the configuration file; subsequent
    calls return the cached instance. When the default file is absent the
    built-in defaults are used.

    Returns:
        The singleton AppConfig instance

    Raises:
        FileNotFoundError: If an explicitly set configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        if _CONFIG_FILE_PATH == _DEFAULT_CONFIG_FILE_PATH and not _CONFIG_FILE_PATH.exists():
            logger.debug(f"No configuration at {_CONFIG_FILE_PATH}, using defaults")
            _CONFIG = AppConfig()
        else:
            _CONFIG = load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """
    Check if configuration has been loaded and cached.
    """
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "config_source": _CONFIG.source if _CONFIG else None,
    }
