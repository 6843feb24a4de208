"""
Pytest configuration and shared fixtures for the cmdbridge test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cmdbridge.models.commands import CommandRequest, CommandResult, CommandTemplateSpec  # noqa: E402
from cmdbridge.system.platform import POSIX_PROFILE, WINDOWS_PROFILE, PlatformProfile  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Fake Executor
# ============================================================================


class FakeExecutor:
    """
    Stand-in for CommandExecutor that records command lines and replays
    canned results.

    Responses are matched by substring against the command line, in the
    order they were registered. A response may be a CommandResult or an
    exception instance to raise.
    """

    def __init__(self, platform: PlatformProfile = WINDOWS_PROFILE):
        self.platform = platform
        self.commands: List[str] = []
        self._responses: List[tuple] = []

    def respond(
        self,
        pattern: str,
        stdout: str = "",
        stderr: str = "",
        exit_succeeded: bool = True,
        error: Optional[Exception] = None,
    ) -> None:
        if error is not None:
            self._responses.append((pattern, error))
        else:
            self._responses.append((
                pattern,
                CommandResult(
                    stdout=stdout,
                    stderr=stderr,
                    exit_succeeded=exit_succeeded,
                    return_code=0 if exit_succeeded else 1,
                    command=pattern,
                ),
            ))

    def _reply(self, command_line: str) -> CommandResult:
        self.commands.append(command_line)
        for pattern, response in self._responses:
            if pattern in command_line:
                if isinstance(response, Exception):
                    raise response
                return response
        return CommandResult(stdout="", stderr="", exit_succeeded=True, command=command_line)

    def execute(self, request: CommandRequest) -> CommandResult:
        return self._reply(request.command_line)

    def execute_spec(self, spec: CommandTemplateSpec, working_directory=None, timeout=None) -> CommandResult:
        return self._reply(spec.to_command_line())


@pytest.fixture
def fake_executor():
    """A FakeExecutor using the Windows profile."""
    return FakeExecutor(WINDOWS_PROFILE)


@pytest.fixture
def fake_posix_executor():
    """A FakeExecutor using the POSIX profile."""
    return FakeExecutor(POSIX_PROFILE)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data() -> Dict[str, Dict[str, Union[str, int, float, bool]]]:
    """Sample configuration data for testing."""
    return {
        "executor": {
            "timeout_seconds": 5.0,
            "max_output_bytes": 4096,
            "platform": "posix",
        },
        "bulk": {
            "max_workers": 2,
            "concurrent": True,
        },
        "tools": {
            "search_executable": "es.exe",
            "search_max_results": 25,
            "file_manager": "",
        },
        "paths": {
            "screenshots_root": "/tmp/shots",
            "sharex_path": "/opt/sharex/ShareX.exe",
        },
    }


@pytest.fixture
def config_file(temp_dir, sample_config_data):
    """Write the sample configuration to a temporary config.toml."""
    import toml

    config_path = temp_dir / "config.toml"
    with open(config_path, "w") as f:
        toml.dump(sample_config_data, f)
    return config_path


@pytest.fixture(autouse=True)
def reset_global_state():
    """Automatically reset cached configuration and executor after each test."""
    yield
    from cmdbridge.config import reset_config_path
    from cmdbridge.system.commands import reset_executor

    reset_config_path()
    reset_executor()
