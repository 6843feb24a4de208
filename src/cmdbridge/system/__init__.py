"""
System interaction: command execution, process control and tool helpers.

This package is the only part of cmdbridge that starts external processes:

- Command execution with an encoding directive, timeouts, bounded output
  and classified launch failures
- Platform profiles for Windows and POSIX shells
- Process listing and forced termination
- Tool availability probing, file search and file manager integration
"""

# Command execution
from .commands import (
    CommandExecutor,
    get_executor,
    reset_executor,
    run_command,
)

# Platform profiles
from .platform import (
    POSIX_PROFILE,
    WINDOWS_PROFILE,
    PlatformProfile,
    detect_platform,
    get_platform_profile,
)

# Process inventory and control
from .processes import ProcessInventory, record_from_row

# Tool helpers
from .tools import (
    is_tool_available,
    open_in_file_manager,
    reveal_in_file_manager,
    search_files,
)

__all__ = [
    # Commands
    "CommandExecutor",
    "get_executor",
    "reset_executor",
    "run_command",
    # Platforms
    "POSIX_PROFILE",
    "WINDOWS_PROFILE",
    "PlatformProfile",
    "detect_platform",
    "get_platform_profile",
    # Processes
    "ProcessInventory",
    "record_from_row",
    # Tools
    "is_tool_available",
    "open_in_file_manager",
    "reveal_in_file_manager",
    "search_files",
]
