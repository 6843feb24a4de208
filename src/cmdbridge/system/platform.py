"""
Platform profiles for command execution.

A profile bundles everything that differs between Windows and POSIX hosts:
the shell, the fixed encoding directive prepended to every shell command,
the exit statuses the shell uses for "not found" and "not executable", and
the command lines used to list and terminate processes.
"""

import logging
import os
import shlex
import sys
from dataclasses import dataclass
from typing import FrozenSet, Optional

logger = logging.getLogger(__name__)

WINDOWS = "windows"
POSIX = "posix"


@dataclass(frozen=True)
class PlatformProfile:
    """Shell and tool conventions of one platform family."""

    name: str
    # Prepended to every shell command line; its own output is discarded.
    encoding_preamble: str
    # Shell exit statuses meaning the command could not be located.
    not_found_codes: FrozenSet[int]
    # Shell exit statuses meaning the command was found but not executable.
    permission_denied_codes: FrozenSet[int]
    # None when the platform has no delimited process lister.
    process_list_command: Optional[str]
    kill_by_id_template: str
    kill_by_name_template: str
    # Path of the shell to run command lines with, None for the default.
    shell_executable: Optional[str] = None

    @property
    def is_windows(self) -> bool:
        return self.name == WINDOWS

    def kill_by_id_command(self, process_id: str) -> str:
        return self.kill_by_id_template.format(pid=process_id)

    def kill_by_name_command(self, name: str) -> str:
        # The Windows template quotes the name itself.
        if self.is_windows:
            return self.kill_by_name_template.format(name=name)
        return self.kill_by_name_template.format(name=shlex.quote(name))


WINDOWS_PROFILE = PlatformProfile(
    name=WINDOWS,
    encoding_preamble="chcp 65001 > nul && ",
    # cmd.exe reports an unknown command with 9009 ("is not recognized ...").
    not_found_codes=frozenset({9009}),
    permission_denied_codes=frozenset(),
    process_list_command="tasklist /nh /fo csv",
    kill_by_id_template="taskkill /F /PID {pid}",
    kill_by_name_template='taskkill /F /IM "{name}"',
)

POSIX_PROFILE = PlatformProfile(
    name=POSIX,
    encoding_preamble="export LC_ALL=C.UTF-8 LANG=C.UTF-8 && ",
    not_found_codes=frozenset({127}),
    permission_denied_codes=frozenset({126}),
    process_list_command=None,
    kill_by_id_template="kill -KILL {pid}",
    kill_by_name_template="pkill -KILL -x {name}",
    shell_executable="/bin/sh",
)


def detect_platform() -> PlatformProfile:
    """Return the profile matching the running interpreter."""
    if os.name == "nt" or sys.platform.startswith("win"):
        return WINDOWS_PROFILE
    return POSIX_PROFILE


def get_platform_profile(name: str = "auto") -> PlatformProfile:
    """
    Resolve a configured platform name to a profile.

    Args:
        name: "auto", "windows" or "posix".

    Raises:
        ValueError: If the name is unknown.
    """
    if name == "auto":
        profile = detect_platform()
        logger.debug(f"Detected platform profile: {profile.name}")
        return profile
    if name == WINDOWS:
        return WINDOWS_PROFILE
    if name == POSIX:
        return POSIX_PROFILE
    raise ValueError(f"Unknown platform profile: {name}")
