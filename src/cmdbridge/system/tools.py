"""
Helpers around specific external tools.

- Availability probing for command-line tools
- File search through the Everything command-line client (``es.exe``)
- Revealing a path in the platform file manager
"""

import logging
import shutil
import sys
from pathlib import Path
from typing import List, Optional, Union

from ..models.commands import CommandRequest, CommandResult
from ..models.config import ToolsConfig
from ..parsing import parse_line_list
from ..validation import CommandNotFoundError, validate_positive_integer, validate_string
from .commands import CommandExecutor, get_executor

logger = logging.getLogger(__name__)


def is_tool_available(tool_name: str) -> bool:
    """Check if a command-line tool can be found on the system PATH.

    Returns:
        True if the tool is found, False otherwise.
    """
    return shutil.which(tool_name) is not None


def search_files(
    query: str,
    max_results: Optional[int] = None,
    executor: Optional[CommandExecutor] = None,
    config: Optional[ToolsConfig] = None,
) -> List[str]:
    """
    Search the file system index with the Everything CLI.

    Args:
        query: Everything search expression.
        max_results: Maximum number of paths to return; defaults to the
            configured ``search_max_results``.
        executor: Executor to run the search with.
        config: Tool configuration; defaults to built-in settings.

    Returns:
        Matching paths, one per output line.

    Raises:
        CommandNotFoundError: If the Everything CLI is not installed.
        CommandFailedError: If the search exits unsuccessfully.
    """
    config = config or ToolsConfig()
    executor = executor or get_executor()
    query = validate_string(query, field_name="query", allow_empty=False)
    limit = validate_positive_integer(
        config.search_max_results if max_results is None else max_results,
        field_name="max_results",
    )

    command = f"{config.search_executable} -n {limit} {query}"
    try:
        result = executor.execute(CommandRequest(command_line=command)).check()
    except CommandNotFoundError as e:
        raise CommandNotFoundError(
            f"Everything CLI not found ({config.search_executable}). "
            "Please install Everything and its CLI tool.",
            command=command,
            stderr=e.stderr,
        ) from e
    return parse_line_list(result.stdout)


def reveal_command(path: Union[str, Path], is_windows: bool, file_manager: str = "") -> str:
    """Build the command line that shows ``path`` in the file manager."""
    if is_windows:
        return f'{file_manager or "explorer.exe"} /select,"{path}"'
    if file_manager:
        return f'{file_manager} "{path}"'
    if sys.platform == "darwin":
        return f'open -R "{path}"'
    return f'xdg-open "{Path(path).parent}"'


def open_command(path: Union[str, Path], is_windows: bool, file_manager: str = "") -> str:
    """Build the command line that opens the folder ``path``."""
    if is_windows:
        return f'{file_manager or "explorer"} "{path}"'
    if file_manager:
        return f'{file_manager} "{path}"'
    if sys.platform == "darwin":
        return f'open "{path}"'
    return f'xdg-open "{path}"'


def reveal_in_file_manager(
    path: Union[str, Path],
    executor: Optional[CommandExecutor] = None,
    config: Optional[ToolsConfig] = None,
) -> CommandResult:
    """
    Show a file selected in the platform file manager.

    explorer.exe exits with status 1 even when it succeeds, so the exit status
    is returned to the caller rather than checked here.
    """
    config = config or ToolsConfig()
    executor = executor or get_executor()
    command = reveal_command(path, executor.platform.is_windows, config.file_manager)
    return executor.execute(CommandRequest(command_line=command))


def open_in_file_manager(
    path: Union[str, Path],
    executor: Optional[CommandExecutor] = None,
    config: Optional[ToolsConfig] = None,
) -> CommandResult:
    """Open a folder in the platform file manager."""
    config = config or ToolsConfig()
    executor = executor or get_executor()
    command = open_command(path, executor.platform.is_windows, config.file_manager)
    return executor.execute(CommandRequest(command_line=command))
