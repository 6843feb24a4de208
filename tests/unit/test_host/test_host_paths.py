"""
Unit tests for HostPaths resolution.
"""

from pathlib import Path

import pytest

from cmdbridge.host import HostPaths
from cmdbridge.models.config import PathsConfig


@pytest.mark.unit
class TestHostPaths:
    """Test cases for HostPaths.from_environment."""

    def test_windows_environment(self):
        env = {
            "USERPROFILE": "C:\\Users\\dev",
            "PROGRAMFILES": "D:\\Apps",
            "TEMP": "C:\\Users\\dev\\AppData\\Local\\Temp",
        }
        paths = HostPaths.from_environment(env)

        assert paths.user_profile == Path("C:\\Users\\dev")
        assert paths.program_files == Path("D:\\Apps")
        assert paths.temp == Path("C:\\Users\\dev\\AppData\\Local\\Temp")
        assert paths.system_root == Path("C:\\Windows")

    def test_posix_fallbacks(self):
        paths = HostPaths.from_environment({"HOME": "/home/dev", "TMPDIR": "/var/tmp"})
        assert paths.user_profile == Path("/home/dev")
        assert paths.temp == Path("/var/tmp")

    def test_empty_environment_uses_defaults(self):
        paths = HostPaths.from_environment({})
        assert paths.user_profile == Path("C:\\Users\\Default")
        assert paths.screenshots_root is None
        assert paths.sharex_path is None

    def test_configured_paths(self):
        config = PathsConfig(screenshots_root="/shots", sharex_path="/opt/ShareX.exe")
        paths = HostPaths.from_environment({}, config)
        assert paths.screenshots_root == Path("/shots")
        assert paths.sharex_path == Path("/opt/ShareX.exe")
