"""
Screenshot entry points.

Plain functions a host launcher calls in response to a user action: start a
ShareX region capture, open this month's screenshots folder, list recent
screenshots and delete one. Screenshots are stored by month, in
``<root>/YYYY-MM/``.
"""

import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional, Union

from ..models.commands import CommandRequest, CommandResult
from ..models.config import ToolsConfig
from ..models.results import Screenshot
from ..system.commands import CommandExecutor, get_executor
from ..system.tools import open_in_file_manager
from ..validation import ValidationError, validate_string

logger = logging.getLogger(__name__)

_IMAGE_FILE = re.compile(r"\.(png|jpg|jpeg|gif)$", re.IGNORECASE)


def monthly_folder(root: Union[str, Path], today: Optional[date] = None) -> Path:
    """Return the folder holding screenshots for the month of ``today``."""
    today = today or date.today()
    return Path(root) / f"{today.year}-{today.month:02d}"


def list_recent_screenshots(root: Union[str, Path], today: Optional[date] = None) -> List[Screenshot]:
    """
    List this month's screenshots, most recently written first.

    A missing month folder means there are no screenshots yet and yields an
    empty list.
    """
    folder = monthly_folder(root, today)
    if not folder.is_dir():
        logger.debug(f"Screenshots folder does not exist: {folder}")
        return []

    screenshots = []
    for entry in folder.iterdir():
        if not entry.is_file() or not _IMAGE_FILE.search(entry.name):
            continue
        screenshots.append(
            Screenshot(
                name=entry.name,
                path=entry,
                created_at=datetime.fromtimestamp(entry.stat().st_mtime),
            )
        )

    screenshots.sort(key=lambda s: s.created_at, reverse=True)
    logger.debug(f"Found {len(screenshots)} screenshots in {folder}")
    return screenshots


def capture_region(
    sharex_path: Union[str, Path],
    executor: Optional[CommandExecutor] = None,
) -> CommandResult:
    """
    Start a ShareX rectangle-region capture.

    Raises:
        ValidationError: If no ShareX path is configured.
        ExecutionError: If ShareX cannot be started or exits unsuccessfully.
    """
    sharex = validate_string(str(sharex_path or ""), field_name="sharex_path", allow_empty=False)
    executor = executor or get_executor()
    command = f'"{sharex}" -RectangleRegion'
    return executor.execute(CommandRequest(command_line=command)).check()


def open_screenshots_folder(
    root: Union[str, Path],
    today: Optional[date] = None,
    executor: Optional[CommandExecutor] = None,
    config: Optional[ToolsConfig] = None,
) -> Path:
    """
    Open this month's screenshots folder in the file manager.

    Returns:
        The folder that was opened.

    Raises:
        ExecutionError: If the file manager could not be started.
    """
    folder = monthly_folder(root, today)
    open_in_file_manager(folder, executor=executor, config=config)
    return folder


def delete_screenshot(path: Union[str, Path]) -> None:
    """
    Delete a screenshot file.

    Raises:
        ValidationError: If the file does not exist.
    """
    target = Path(path)
    if not target.is_file():
        raise ValidationError(f"Screenshot not found: {target}", field_name="path", value=str(target))
    target.unlink()
    logger.info(f"Deleted screenshot {target}")
