"""
Host-facing entry points and host-resolved paths.
"""

from .paths import HostPaths
from .screenshots import (
    capture_region,
    delete_screenshot,
    list_recent_screenshots,
    monthly_folder,
    open_screenshots_folder,
)

__all__ = [
    "HostPaths",
    "capture_region",
    "delete_screenshot",
    "list_recent_screenshots",
    "monthly_folder",
    "open_screenshots_folder",
]
