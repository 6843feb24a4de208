"""
Host-resolved filesystem locations.

The host resolves these once, typically from the process environment and the
configuration file, and passes them to whatever needs a root path. Nothing
else in cmdbridge reads environment variables.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from ..models.config import PathsConfig


@dataclass(frozen=True)
class HostPaths:
    """Well-known folders of the current user and system."""

    user_profile: Path
    program_files: Path
    program_files_x86: Path
    system_root: Path
    temp: Path
    app_data: Path
    local_app_data: Path
    screenshots_root: Optional[Path] = None
    sharex_path: Optional[Path] = None

    @classmethod
    def from_environment(
        cls,
        env: Mapping[str, str],
        paths_config: Optional[PathsConfig] = None,
    ) -> "HostPaths":
        """
        Build HostPaths from an environment mapping and the [paths] config.

        Windows variable names are used; the HOME and TMPDIR variables fill in
        on other systems, and fixed Windows defaults cover anything missing.
        """
        paths_config = paths_config or PathsConfig()
        user_profile = env.get("USERPROFILE") or env.get("HOME") or r"C:\Users\Default"
        return cls(
            user_profile=Path(user_profile),
            program_files=Path(env.get("PROGRAMFILES") or r"C:\Program Files"),
            program_files_x86=Path(env.get("PROGRAMFILES(X86)") or r"C:\Program Files (x86)"),
            system_root=Path(env.get("SYSTEMROOT") or r"C:\Windows"),
            temp=Path(env.get("TEMP") or env.get("TMPDIR") or r"C:\Windows\Temp"),
            app_data=Path(env.get("APPDATA") or r"C:\Users\Default\AppData\Roaming"),
            local_app_data=Path(env.get("LOCALAPPDATA") or r"C:\Users\Default\AppData\Local"),
            screenshots_root=Path(paths_config.screenshots_root) if paths_config.screenshots_root else None,
            sharex_path=Path(paths_config.sharex_path) if paths_config.sharex_path else None,
        )
